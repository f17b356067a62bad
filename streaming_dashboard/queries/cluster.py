from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from streaming_dashboard import config
from streaming_dashboard.queries.errors import TopologyFetchError, TopologyParseError

logger = logging.getLogger("TopologyLoader")


class LiveTopologySource:
    """Reads topology records from the cluster's dashboard API."""

    name = config.SOURCE_LIVE

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        backoff: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or config.meta_api_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else config.meta_api_timeout()
        self.retries = retries if retries is not None else config.meta_api_retries()
        self.backoff = backoff
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url + "/",
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _get(self, client: httpx.AsyncClient, path: str) -> httpx.Response:
        # Only transport-level failures are worth retrying; statuses are final.
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retries),
            wait=wait_exponential(multiplier=self.backoff, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                return await client.get(path)
        raise AssertionError("unreachable")

    async def fetch(self, path: str, optional: bool = False) -> Any:
        """
        GET ``path`` and decode its JSON body.

        Returns ``None`` for a 404 when ``optional`` is set; every other
        failure raises a ``TopologyLoadError`` subclass.
        """
        async with self._client() as client:
            try:
                response = await self._get(client, path)
            except httpx.TransportError as e:
                logger.error("Fetch failed for %s (%s): %s", path, type(e).__name__, e)
                raise TopologyFetchError(str(e) or type(e).__name__, path=path) from e

        if optional and response.status_code == 404:
            logger.info("%s is not served by %s, deriving instead", path, self.base_url)
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("Fetch failed for %s: HTTP %s", path, status)
            raise TopologyFetchError(
                f"{path} returned HTTP {status}", path=path, status_code=status
            ) from e

        try:
            return response.json()
        except ValueError as e:
            logger.error("Parse failed for %s (%s): %s", path, type(e).__name__, e)
            raise TopologyParseError(f"{path} did not return valid JSON", path=path) from e
