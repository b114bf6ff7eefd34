from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from transient_cache.domain.exceptions import StoreError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0  # seconds

# Status codes meaning "key already exists" for create-if-absent
_CONFLICT_STATUSES = (409, 412)


class HttpStore:
    """Client for a key-value service exposed over HTTP.

    Wire format, relative to base_url:
    - GET    /keys/{key}  -> 200 {"value": ...}, 404 when absent
    - PUT    /keys/{key}  <- {"value": ..., "ttl": seconds}
    - POST   /keys/{key}  <- same body; 201 created, 409/412 when the key exists
    - DELETE /keys/{key}  -> 2xx, 404 tolerated

    A single httpx.Client is reused for the lifetime of the store so that
    connections are pooled across calls. Values must be JSON-serialisable.
    """

    def __init__(self, base_url: str, http_client: httpx.Client | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_client or httpx.Client(timeout=DEFAULT_TIMEOUT)

    def get(self, key: str) -> Any | None:
        """GET /keys/{key} — None when the service reports the key absent."""
        response = self._http.get(self._url(key))
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        payload = response.json()
        if not isinstance(payload, dict):
            raise StoreError(
                response.status_code,
                f"Store returned a non-object body for {key}: {type(payload).__name__}",
            )
        return payload.get("value")

    def set(self, key: str, value: Any, ttl: int = 0) -> None:
        """PUT /keys/{key} — overwrite semantics."""
        response = self._http.put(self._url(key), json={"value": value, "ttl": ttl})
        self._raise_for_status(response)

    def add(self, key: str, value: Any, ttl: int = 0) -> bool:
        """POST /keys/{key} — create only if absent. Return False on conflict."""
        response = self._http.post(self._url(key), json={"value": value, "ttl": ttl})
        if response.status_code in _CONFLICT_STATUSES:
            logger.debug("Key already present on store: %s", key)
            return False
        self._raise_for_status(response)
        return True

    def delete(self, key: str) -> None:
        """DELETE /keys/{key} — a missing key is not an error."""
        response = self._http.delete(self._url(key))
        if response.status_code == 404:
            return
        self._raise_for_status(response)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

    def _url(self, key: str) -> str:
        return f"{self._base_url}/keys/{quote(key, safe='')}"

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise StoreError for non-2xx responses."""
        if response.status_code >= 400:
            raise StoreError(
                response.status_code,
                f"Store request failed ({response.status_code}): {response.url}",
            )
