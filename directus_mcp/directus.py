"""Async Directus REST client.

Thin wrapper over httpx.AsyncClient that handles authentication, query
serialization and the Directus `{"data": ...}` / `{"errors": [...]}`
envelopes. Every method returns plain JSON structures.
"""

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from .exceptions import ConfigurationError, DirectusAPIError
from .system import SYSTEM_PREFIX, is_system_collection

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)

# Query keys Directus expects as comma-separated lists
_LIST_PARAMS = ("fields", "sort", "meta")
# Query keys Directus expects as JSON
_JSON_PARAMS = ("filter", "deep", "aggregate")


def serialize_query(query: dict[str, Any] | None) -> dict[str, Any]:
    """Convert a Directus query object into HTTP query parameters."""
    params: dict[str, Any] = {}
    for key, value in (query or {}).items():
        if value is None:
            continue
        if key in _LIST_PARAMS and isinstance(value, (list, tuple)):
            params[key] = ",".join(str(v) for v in value)
        elif key in _JSON_PARAMS and isinstance(value, (dict, list)):
            params[key] = json.dumps(value)
        elif isinstance(value, bool):
            params[key] = str(value).lower()
        else:
            params[key] = value
    return params


def items_path(collection: str) -> str:
    """Endpoint for a collection's items (`directus_users` lives at /users)."""
    if is_system_collection(collection):
        return f"/{collection[len(SYSTEM_PREFIX):]}"
    return f"/items/{collection}"


def _error_message(response: httpx.Response) -> tuple[str, str | None]:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}: {response.text[:200]}", None

    errors = body.get("errors") if isinstance(body, dict) else None
    if errors:
        first = errors[0]
        code = (first.get("extensions") or {}).get("code")
        return first.get("message", f"HTTP {response.status_code}"), code
    return f"HTTP {response.status_code}", None


class DirectusClient:
    """Connection to a Directus instance."""

    def __init__(
        self,
        url: str,
        token: str | None = None,
        email: str | None = None,
        password: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not url:
            raise ConfigurationError("DIRECTUS_URL is required")
        self.url = url.rstrip("/")
        self._token = token
        self._email = email
        self._password = password
        self._http = httpx.AsyncClient(base_url=self.url, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls, settings: "Settings", transport: httpx.AsyncBaseTransport | None = None
    ) -> "DirectusClient":
        return cls(
            settings.directus_url,
            token=settings.directus_token,
            email=settings.directus_user_email,
            password=settings.directus_user_password,
            timeout=settings.directus_timeout,
            transport=transport,
        )

    async def authenticate(self) -> None:
        """Use the static token, or log in with email/password."""
        if self._token:
            logger.info("Using static Directus token")
            return

        if not (self._email and self._password):
            raise ConfigurationError(
                "Either DIRECTUS_TOKEN or DIRECTUS_USER_EMAIL and DIRECTUS_USER_PASSWORD must be set"
            )

        data = await self.request(
            "POST", "/auth/login", json={"email": self._email, "password": self._password}
        )
        self._token = data["access_token"]
        logger.info(f"Authenticated with Directus as {self._email}")

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        include_meta: bool = False,
    ) -> Any:
        """Send a request and unwrap the Directus response envelope.

        Args:
            method: HTTP method
            path: Path relative to the Directus URL
            params: Directus query object (serialized with serialize_query)
            json: JSON body
            include_meta: Return the full envelope ({"data", "meta"}) instead of data

        Returns:
            The `data` member, the full envelope, or None for empty responses

        Raises:
            DirectusAPIError: transport failure or non-2xx response
        """
        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}

        try:
            response = await self._http.request(
                method, path, params=serialize_query(params), json=json, headers=headers
            )
        except httpx.TimeoutException as e:
            raise DirectusAPIError(f"Directus request timed out: {method} {path}") from e
        except httpx.RequestError as e:
            raise DirectusAPIError(f"Directus request failed: {e}") from e

        if response.status_code >= 400:
            message, code = _error_message(response)
            logger.warning(f"Directus {method} {path} failed: {response.status_code} {message}")
            raise DirectusAPIError(message, status_code=response.status_code, code=code)

        if response.status_code == 204 or not response.content:
            return None

        try:
            body = response.json()
        except ValueError as e:
            raise DirectusAPIError(f"Invalid JSON from Directus: {method} {path}") from e

        if include_meta:
            return body
        return body.get("data") if isinstance(body, dict) else body

    # ============ SCHEMA ============

    async def read_fields(self, collection: str | None = None) -> list[dict[str, Any]]:
        path = f"/fields/{collection}" if collection else "/fields"
        return await self.request("GET", path) or []

    async def read_field(self, collection: str, field: str) -> dict[str, Any]:
        return await self.request("GET", f"/fields/{collection}/{field}")

    async def create_field(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request("POST", f"/fields/{collection}", json=data)

    async def update_field(self, collection: str, field: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PATCH", f"/fields/{collection}/{field}", json=data)

    async def read_relations(self) -> list[dict[str, Any]]:
        return await self.request("GET", "/relations") or []

    async def read_relation(self, collection: str, field: str) -> dict[str, Any]:
        return await self.request("GET", f"/relations/{collection}/{field}")

    async def create_relation(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/relations", json=data)

    async def update_relation(self, collection: str, field: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PATCH", f"/relations/{collection}/{field}", json=data)

    async def delete_relation(self, collection: str, field: str) -> None:
        await self.request("DELETE", f"/relations/{collection}/{field}")

    async def create_collection(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/collections", json=data)

    # ============ ITEMS ============

    async def read_items(self, collection: str, query: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", items_path(collection), params=query)

    async def count_items(self, collection: str, filter: dict[str, Any] | None = None) -> int:
        query: dict[str, Any] = {"limit": 1, "meta": ["total_count"], "filter": filter}
        body = await self.request("GET", items_path(collection), params=query, include_meta=True)
        return ((body or {}).get("meta") or {}).get("total_count") or 0

    async def create_item(
        self, collection: str, item: dict[str, Any], query: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        return await self.request("POST", items_path(collection), params=query, json=item)

    async def update_item(
        self,
        collection: str,
        id: str | int,
        data: dict[str, Any],
        query: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        return await self.request("PATCH", f"{items_path(collection)}/{id}", params=query, json=data)

    async def delete_item(self, collection: str, id: str | int) -> None:
        await self.request("DELETE", f"{items_path(collection)}/{id}")

    async def read_me(self, fields: list[str] | None = None) -> dict[str, Any]:
        return await self.request("GET", "/users/me", params={"fields": fields})

    # ============ FLOWS & OPERATIONS ============

    async def read_flows(self, query: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return await self.request("GET", "/flows", params=query) or []

    async def read_flow(self, id: str) -> dict[str, Any]:
        return await self.request("GET", f"/flows/{id}")

    async def create_flow(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/flows", json=data)

    async def update_flow(self, id: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PATCH", f"/flows/{id}", json=data)

    async def delete_flow(self, id: str) -> None:
        await self.request("DELETE", f"/flows/{id}")

    async def trigger_flow(self, id: str, data: dict[str, Any]) -> Any:
        return await self.request("POST", f"/flows/trigger/{id}", json=data)

    async def read_operations(self, query: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return await self.request("GET", "/operations", params=query) or []

    async def read_operation(self, id: str) -> dict[str, Any]:
        return await self.request("GET", f"/operations/{id}")

    async def create_operation(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/operations", json=data)

    async def update_operation(self, id: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PATCH", f"/operations/{id}", json=data)

    async def delete_operation(self, id: str) -> None:
        await self.request("DELETE", f"/operations/{id}")
