import json
from typing import Any, Protocol

import httpx

from .errors import FetchFailure, InvalidArgument, MalformedResponse
from .output import log
from .settings import settings

JSON_LD_HEADERS = {"accept": "application/ld+json"}


class DocumentFetcher(Protocol):
    async def fetch(self, url: str) -> tuple[int, str]: ...


class Fetcher:
    """Async HTTP access to the document site and the open-data API.

    Owns one httpx.AsyncClient unless a client is passed in. Use as an async
    context manager, or call aclose() when done.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        retries: int | None = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.retries = retries if retries is not None else settings.HTTP_RETRIES
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            follow_redirects=True, timeout=self.timeout
        )

    async def __aenter__(self) -> "Fetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        args_dict: dict[str, Any] = {"method": method, "url": url}
        if params:
            args_dict["params"] = params
        if headers:
            args_dict["headers"] = headers
        last_error = None
        for i in range(self.retries):
            try:
                return await self.client.request(**args_dict)
            except httpx.ConnectTimeout as e:
                last_error = e
                log(
                    f"Timeout fetching url, trying again {self.retries - i - 1} more times, {url}",
                    level="warning",
                )
            except httpx.RemoteProtocolError as e:
                last_error = e
                log(
                    f"Remote error fetching url, trying again {self.retries - i - 1} more times, {url}",
                    level="warning",
                )
            except httpx.TransportError as e:
                raise FetchFailure(f"Error fetching {url}: {e}", url=url) from e
        raise FetchFailure(
            f"Error fetching {url} after {self.retries} attempts", url=url
        ) from last_error

    async def fetch(self, url: str) -> tuple[int, str]:
        """Return the status code and body text of a GET request."""
        response = await self.request("GET", url)
        return response.status_code, response.text

    async def load_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET a JSON-LD resource.

        Raises:
            InvalidArgument: a parameter value is None or empty.
            FetchFailure: the response status is not 2xx.
            MalformedResponse: the body is not valid JSON.
        """
        query = {}
        for key, value in (params or {}).items():
            if value is None or value == "":
                raise InvalidArgument("Invalid parameter")
            query[key] = str(value)

        response = await self.request("GET", url, params=query, headers=JSON_LD_HEADERS)
        if not response.is_success:
            raise FetchFailure(
                f"HTTP error {response.status_code} for url: {response.url}",
                status=response.status_code,
                url=str(response.url),
            )
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise MalformedResponse(
                f"Tried to query: {response.url} But got an invalid JSON: {response.text[:100]}"
            ) from e
