from __future__ import annotations
import logging
from functools import lru_cache
from typing import Any, Mapping, Optional, Protocol

import requests
from pydantic import BaseModel

from docs_client.config import Settings, get_settings
from docs_client.exceptions import TransportError

logger = logging.getLogger(__name__)


class ApiResponse(BaseModel):
    """Status code plus decoded JSON body (None when the body is empty or not JSON)."""
    status_code: int
    payload: Any = None


class Transport(Protocol):
    def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> ApiResponse: ...

    def post(self, path: str, body: Mapping[str, Any]) -> ApiResponse: ...

    def patch(self, path: str, body: Mapping[str, Any]) -> ApiResponse: ...


class ApiClient:
    """
    Synchronous Docs API client.
    Status codes are returned as-is, never raised: each resource decides
    what a non-200 answer means for its operation.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        *,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApiClient":
        return cls(settings.base_url, settings.token, timeout=settings.timeout)

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> ApiResponse:
        """
        Corresponds to: GET {base_url}/{path}?{query}
        """
        return self._send("GET", path, params=flatten_query(query) if query else None)

    def post(self, path: str, body: Mapping[str, Any]) -> ApiResponse:
        """
        Corresponds to: POST {base_url}/{path} with a JSON body
        """
        return self._send("POST", path, json=dict(body))

    def patch(self, path: str, body: Mapping[str, Any]) -> ApiResponse:
        """
        Corresponds to: PATCH {base_url}/{path} with a JSON body
        """
        return self._send("PATCH", path, json=dict(body))

    def _send(self, method: str, path: str, **kwargs: Any) -> ApiResponse:
        url = self.url(path)
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        return ApiResponse(status_code=response.status_code, payload=_decode(response))


def flatten_query(query: Mapping[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    """
    Encode nested mappings and lists in bracket notation, e.g.
    {"metas": {"curso": "ads"}, "ids": [1, 2]} -> metas[curso]=ads&ids[0]=1&ids[1]=2
    """
    pairs: list[tuple[str, Any]] = []
    for key, value in query.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if isinstance(value, Mapping):
            pairs.extend(flatten_query(value, name))
        elif isinstance(value, (list, tuple)):
            pairs.extend(flatten_query(dict(enumerate(value)), name))
        elif isinstance(value, bool):
            pairs.append((name, int(value)))
        elif value is not None:
            pairs.append((name, value))
    return pairs


def _decode(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except requests.exceptions.JSONDecodeError:
        logger.warning(f"Non-JSON body from {response.url} (status {response.status_code})")
        return None


@lru_cache
def get_client() -> ApiClient:
    """Default client built from the DOCS_* settings."""
    return ApiClient.from_settings(get_settings())
