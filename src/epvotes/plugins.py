import json
import logging
from pathlib import Path

from .hookspecs import hookimpl
from .settings import settings

logger = logging.getLogger(__name__)


class FileCachePlugin:
    """Stores cached results as <cache_dir>/<key>.json."""

    def __init__(self, cache_dir: str | None = None):
        self._cache_dir = cache_dir

    @property
    def cache_dir(self) -> Path:
        return Path(self._cache_dir or settings.CACHE_DIR)

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{key.replace('/', '_')}.json"

    @hookimpl
    def cache_load(self, key):
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with open(path) as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Cache invalid: {e} in {path}")
            return None

    @hookimpl
    def cache_store(self, key, data):
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        with open(self.path_for(key), "w") as f:
            json.dump(data, f)
        return True
