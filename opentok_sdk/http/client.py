import logging
from typing import Any, Dict, Optional

import httpx

from opentok_sdk.core.config import VERSION
from opentok_sdk.core.errors import RequestError

logger = logging.getLogger(__name__)

USER_AGENT = f"OpenTok-Python-SDK/{VERSION}"


class PartnerAuth(httpx.Auth):
    """Adds the partner credential header to every request."""

    def __init__(self, api_key: int, api_secret: str):
        self._header = f"{api_key}:{api_secret}"

    def auth_flow(self, request: httpx.Request):
        request.headers["X-TB-PARTNER-AUTH"] = self._header
        yield request


class HttpClient:
    """
    Thin wrapper around one httpx.AsyncClient bound to the service URL.

    Every non-2xx response and every transport failure is raised as
    RequestError; callers never see raw httpx exceptions.
    """

    def __init__(
        self,
        api_key: int,
        api_secret: str,
        api_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.api_url,
            auth=PartnerAuth(api_key, api_secret),
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        logger.debug(f"{method} {self.api_url}{path}")
        try:
            response = await self._client.request(
                method, path, params=params, data=data, json=json, headers=headers
            )
        except httpx.HTTPError as e:
            raise RequestError(f"{method} {path} failed: {e}") from e

        if response.status_code < 200 or response.status_code > 299:
            raise RequestError(
                f"Error response: message: {response.reason_phrase or response.text[:200]}",
                status_code=response.status_code,
            )
        return response

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
