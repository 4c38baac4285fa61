"""Petshop REST API client adapter."""

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import unquote

import httpx

from petshop_client.errors import NetworkError, error_from_response

_logger = logging.getLogger(__name__)

XSRF_COOKIE = "XSRF-TOKEN"
XSRF_HEADER = "X-XSRF-TOKEN"

# (filename, content, content type)
ImageUpload = tuple[str, bytes, str]


class PetshopApiClient(Protocol):
    """Interface for the petshop backend."""

    async def get_csrf_cookie(self) -> None:
        """Fetch the CSRF cookie required before state-changing calls."""

    async def register(self, payload: dict[str, object]) -> dict[str, object]:
        """Create an account and return the user payload."""

    async def login(self, payload: dict[str, object]) -> dict[str, object]:
        """Log in and return the user payload."""

    async def logout(self) -> None:
        """Invalidate the server-side session."""

    async def get_current_user(self) -> dict[str, object]:
        """Return the user bound to the ambient session."""

    async def list_resource(self, path: str) -> list[dict[str, object]]:
        """GET a collection endpoint."""

    async def get_resource(self, path: str) -> dict[str, object]:
        """GET a single entity endpoint."""

    async def create_booking(self, payload: dict[str, object]) -> dict[str, object]:
        """Create a booking for the current user."""

    async def send_json(
        self, method: str, path: str, payload: dict[str, object]
    ) -> dict[str, object]:
        """Send a JSON body and return the decoded response."""

    async def send_multipart(
        self,
        path: str,
        fields: dict[str, str],
        image: ImageUpload | None = None,
    ) -> dict[str, object]:
        """POST a multipart form with an optional image."""

    async def delete(self, path: str) -> None:
        """DELETE an entity endpoint."""


@dataclass
class HttpxPetshopApiClient(PetshopApiClient):
    """Petshop client implemented with httpx and Sanctum cookie sessions."""

    base_url: str
    csrf_cookie_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10.0

    @classmethod
    def create(
        cls, base_url: str, csrf_cookie_url: str, timeout: float = 10.0
    ) -> "HttpxPetshopApiClient":
        """Create a client with a managed httpx session and cookie jar."""
        return cls(
            base_url=base_url.rstrip("/"),
            csrf_cookie_url=csrf_cookie_url,
            http_client=httpx.AsyncClient(
                headers={"Accept": "application/json"},
                follow_redirects=False,
            ),
            timeout=timeout,
        )

    async def get_csrf_cookie(self) -> None:
        """Ask Sanctum to set the XSRF-TOKEN cookie on the shared jar."""
        try:
            response = await self.http_client.get(
                self.csrf_cookie_url, timeout=self.timeout
            )
        except httpx.TransportError as exc:
            _logger.error("Could not fetch CSRF cookie: %s", exc)
            raise NetworkError() from exc
        _raise_for_status(response)

    async def register(self, payload: dict[str, object]) -> dict[str, object]:
        """POST /register."""
        data = await self._request("POST", "/register", json=payload)
        return _unwrap_user(data)

    async def login(self, payload: dict[str, object]) -> dict[str, object]:
        """POST /login, accepting either a bare user or {user, access_token}."""
        data = await self._request("POST", "/login", json=payload)
        return _unwrap_user(data)

    async def logout(self) -> None:
        """POST /logout."""
        await self._request("POST", "/logout")

    async def get_current_user(self) -> dict[str, object]:
        """GET /user."""
        data = await self._request("GET", "/user")
        return _unwrap_user(data)

    async def list_resource(self, path: str) -> list[dict[str, object]]:
        """GET a collection, unwrapping a ``data`` envelope if present."""
        data = await self._request("GET", path)
        if isinstance(data, dict) and isinstance(data.get("data"), list):
            data = data["data"]
        if not isinstance(data, list):
            return []
        return [entry for entry in data if isinstance(entry, dict)]

    async def get_resource(self, path: str) -> dict[str, object]:
        """GET a single entity, unwrapping a ``data`` envelope if present."""
        return _unwrap_entity(await self._request("GET", path))

    async def create_booking(self, payload: dict[str, object]) -> dict[str, object]:
        """POST /bookings."""
        return _unwrap_entity(await self._request("POST", "/bookings", json=payload))

    async def send_json(
        self, method: str, path: str, payload: dict[str, object]
    ) -> dict[str, object]:
        """Send a JSON body to an admin endpoint."""
        return _unwrap_entity(await self._request(method, path, json=payload))

    async def send_multipart(
        self,
        path: str,
        fields: dict[str, str],
        image: ImageUpload | None = None,
    ) -> dict[str, object]:
        """POST a multipart form; the backend treats POST as update for files."""
        files = {"image": image} if image is not None else None
        return _unwrap_entity(
            await self._request("POST", path, data=fields, files=files)
        )

    async def delete(self, path: str) -> None:
        """DELETE an entity."""
        await self._request("DELETE", path)

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def _request(
        self, method: str, path: str, **kwargs: object
    ) -> object | None:
        url = f"{self.base_url}{path}"
        headers = self._xsrf_headers()
        try:
            response = await self.http_client.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
        except httpx.TransportError as exc:
            _logger.warning(
                "Request failed: method=%s path=%s error=%s", method, path, exc
            )
            raise NetworkError() from exc
        _raise_for_status(response)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def _xsrf_headers(self) -> dict[str, str]:
        token = self.http_client.cookies.get(XSRF_COOKIE)
        if not token:
            return {}
        return {XSRF_HEADER: unquote(token)}


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        payload = response.json()
    except ValueError:
        payload = None
    raise error_from_response(response.status_code, payload)


def _unwrap_user(data: object) -> dict[str, object]:
    if isinstance(data, dict) and isinstance(data.get("user"), dict):
        return data["user"]
    return _unwrap_entity(data)


def _unwrap_entity(data: object) -> dict[str, object]:
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        return data["data"]
    if isinstance(data, dict):
        return data
    return {}
