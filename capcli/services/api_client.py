"""REST client for the capabilities API."""

from typing import Any, Dict, List, Optional

import httpx

from ..types import JsonDict

DEFAULT_TIMEOUT_S = 30.0


class ApiError(RuntimeError):
    """Raised when an API call fails or returns an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CapabilitiesClient:
    """Thin wrapper over the capabilities endpoints."""

    def __init__(self, base_url: str, token: Optional[str] = None,
                 timeout: float = DEFAULT_TIMEOUT_S,
                 transport: Optional[httpx.BaseTransport] = None):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(base_url=base_url.rstrip("/"), headers=headers,
                                    timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "CapabilitiesClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise ApiError(f"{method} {url} failed: {exc}") from exc
        if response.is_error:
            detail = response.text.strip()
            raise ApiError(f"{method} {url} returned {response.status_code}: {detail}",
                           status_code=response.status_code)
        if not response.content:
            return None
        return response.json()

    def create(self, capability: JsonDict) -> JsonDict:
        """Create a capability and return it as stored by the platform."""
        return self._request("POST", "/capabilities", json=capability)

    def list_namespaces(self) -> List[JsonDict]:
        """List the capability namespaces available to the user."""
        return self._request("GET", "/capabilities/namespaces") or []

    def list(self, namespace: Optional[str] = None) -> List[JsonDict]:
        """List capability summaries, following pagination links."""
        params: Dict[str, str] = {"namespace": namespace} if namespace else {}
        items: List[JsonDict] = []
        url: Optional[str] = "/capabilities"
        while url:
            page = self._request("GET", url, params=params) or {}
            items.extend(page.get("items") or [])
            url = ((page.get("_links") or {}).get("next") or {}).get("href")
            # next links already carry the query
            params = {}
        return items

    def get(self, capability_id: str, version: int = 1) -> JsonDict:
        """Fetch a single capability version."""
        return self._request("GET", f"/capabilities/{capability_id}/{version}")
