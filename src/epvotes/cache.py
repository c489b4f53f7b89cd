"""Caching of function results keyed by function name and arguments.

Storage is delegated to the cache_load/cache_store hooks. The bundled
FileCachePlugin keeps JSON files on disk; plugins registered later, such as
an object-storage backend, take precedence over it.
"""

import inspect
import json
from collections.abc import Callable
from typing import Any

from .models import Serializable
from .output import log
from .utils import pm


def cache_key(func: Callable[..., Any], *args: Any) -> str:
    return f"{func.__name__}_{json.dumps(to_jsonable(list(args)))}"


def to_jsonable(value: Any) -> Any:
    if isinstance(value, Serializable):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


async def cached_call(func: Callable[..., Any], *args: Any) -> Any:
    """Return the cached result of func(*args), computing it on a miss.

    Results come back in their JSON-compatible form whether they were
    cached or freshly computed.
    """
    key = cache_key(func, *args)
    cached = pm.hook.cache_load(key=key)
    if cached is not None:
        log(f"Loading data from cache: {key}", level="debug")
        return cached

    log(f"Cache not found. Executing function and caching data to cache: {key}", level="debug")
    result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    data = to_jsonable(result)
    pm.hook.cache_store(key=key, data=data)
    return data
