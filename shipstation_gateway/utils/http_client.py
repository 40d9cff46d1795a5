from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import httpx

from .errors import TransportError, UpstreamError

logger = logging.getLogger("shipstation.http")

DEFAULT_TIMEOUT = 30.0


class HttpClient:
    """
    Thin wrapper around httpx.AsyncClient bound to one base URL.

    One request per call, no retries. Non-2xx responses become UpstreamError,
    failures without a response (connect errors, timeouts) become TransportError.
    """
    def __init__(
        self,
        timeout: httpx.Timeout | float = DEFAULT_TIMEOUT,
        follow_redirects: bool = True,
        base_url: Optional[str] = None,
        headers: Optional[dict] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not isinstance(timeout, httpx.Timeout):
            timeout = httpx.Timeout(timeout)
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=self.follow_redirects,
            base_url=base_url or "",
            headers=headers or {},
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        **kwargs,
    ) -> httpx.Response:
        method = method.upper()
        if params:
            kwargs["params"] = params
        if json is not None:
            kwargs["json"] = json

        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("Timeout %s %s: %s", method, url, e)
            raise TransportError(
                f"ShipStation request timed out: {method} {url}", method=method, path=url
            ) from e
        except httpx.RequestError as e:
            logger.warning("Transport failure %s %s: %s", method, url, e)
            raise TransportError(
                f"ShipStation request failed: {method} {url}: {e}", method=method, path=url
            ) from e

        if not resp.is_success:
            logger.error("Upstream error %s %s status=%d", method, url, resp.status_code)
            raise UpstreamError(resp.status_code, resp.text, method=method, path=url)
        return resp

    async def get(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)


@asynccontextmanager
async def client(
    timeout: httpx.Timeout | float = DEFAULT_TIMEOUT,
    follow_redirects: bool = True,
    base_url: Optional[str] = None,
    headers: Optional[dict] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
):
    hc = HttpClient(
        timeout=timeout,
        follow_redirects=follow_redirects,
        base_url=base_url,
        headers=headers,
        transport=transport,
    )
    try:
        yield hc
    finally:
        await hc.close()

__all__ = ["HttpClient", "client", "DEFAULT_TIMEOUT"]
