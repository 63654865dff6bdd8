"""
HTTP client for the FoodHub API.

Requests carry the stored access token. When the API answers 401 the client
exchanges the refresh cookie for a new access token and replays the request
once.
"""

import logging
from typing import Any, Optional

import httpx

from .config import get_api_url

logger = logging.getLogger(__name__)

REFRESH_PATH = "/auth/refresh"


class SessionExpiredError(Exception):
    """The refresh token was rejected; the user has to log in again"""


class MemoryTokenStore:
    """Keeps the access token for the lifetime of the process"""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class ApiClient:
    """
    Async client with bearer injection and refresh-on-401.

    Usage:
        async with ApiClient() as api:
            await api.login("jane@example.com", "secret-password")
            response = await api.get("/wallet/balance")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_store: Optional[MemoryTokenStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url or get_api_url()
        self.tokens = token_store or MemoryTokenStore()
        # Cookies (the refresh token) persist on the client
        self.http_client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    def _auth_headers(self, headers: Optional[dict]) -> dict:
        headers = dict(headers or {})
        token = self.tokens.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """
        Send a request, refreshing the access token once on a 401.

        Raises:
            SessionExpiredError: The refresh call failed; the stored token
                has been cleared
        """
        headers = kwargs.pop("headers", None)
        response = await self.http_client.request(
            method, url, headers=self._auth_headers(headers), **kwargs
        )
        if response.status_code != httpx.codes.UNAUTHORIZED:
            return response

        await self.refresh_access_token()
        return await self.http_client.request(
            method, url, headers=self._auth_headers(headers), **kwargs
        )

    async def refresh_access_token(self) -> str:
        try:
            response = await self.http_client.post(REFRESH_PATH)
            response.raise_for_status()
            access_token = response.json()["accessToken"]
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.warning(f"Token refresh failed: {e}")
            self.tokens.clear()
            raise SessionExpiredError("Session expired, please log in again") from e

        self.tokens.set(access_token)
        logger.debug("Access token refreshed")
        return access_token

    async def login(self, email: str, password: str) -> dict:
        """Log in, store the access token and return the response body"""
        response = await self.http_client.post(
            "/auth/login", json={"email": email, "password": password}
        )
        response.raise_for_status()
        data = response.json()
        self.tokens.set(data["accessToken"])
        return data

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)
