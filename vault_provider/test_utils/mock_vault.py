"""In-process stand-in for the Vault HTTP API, built on httpx.MockTransport.

Routes are registered per (method, path); every request is recorded so tests
can assert on exactly what was sent.

Example:
    >>> vault = MockVault()
    >>> vault.on("GET", "/v1/secret/app", json=vault_response({"user": "app"}))
    >>> client = httpx.Client(base_url=MOCK_VAULT_ADDRESS, transport=vault.transport)
"""

import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import httpx

MOCK_VAULT_ADDRESS = "https://vault.test:8200"


def vault_response(
    data: Optional[Dict[str, Any]] = None,
    lease_id: str = "",
    lease_duration: int = 0,
    renewable: bool = False,
    auth: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a Vault response envelope."""
    return {
        "request_id": request_id or str(uuid.uuid4()),
        "lease_id": lease_id,
        "renewable": renewable,
        "lease_duration": lease_duration,
        "data": data,
        "wrap_info": None,
        "warnings": None,
        "auth": auth,
    }


@dataclass
class RecordedRequest:
    method: str
    url: str
    path: str
    headers: httpx.Headers
    body: Any
    timeout: Optional[Dict[str, Any]] = None


@dataclass
class _Route:
    status_code: int = 200
    json: Any = None
    error: Optional[str] = None


@dataclass
class MockVault:
    """Records requests and answers them from registered routes.

    Unregistered paths answer 404 with an empty error list, as Vault does
    for a read of a missing secret.
    """

    requests: List[RecordedRequest] = field(default_factory=list)
    _routes: Dict[Tuple[str, str], _Route] = field(default_factory=dict)

    def on(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json: Any = None,
        error: Optional[str] = None,
    ) -> None:
        """Register the answer for method + path.

        Args:
            method: HTTP method, e.g. "GET" or "PUT".
            path: Request path including the /v1 prefix.
            status_code: Status of the response.
            json: Response body.
            error: If set, the request fails with httpx.ConnectError instead.
        """
        self._routes[(method.upper(), path)] = _Route(status_code, json, error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests.append(
            RecordedRequest(
                method=request.method,
                url=str(request.url),
                path=request.url.path,
                headers=request.headers,
                body=body,
                timeout=request.extensions.get("timeout"),
            )
        )

        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"errors": []})
        if route.error is not None:
            raise httpx.ConnectError(route.error, request=request)
        if route.json is None:
            return httpx.Response(route.status_code)
        return httpx.Response(route.status_code, json=route.json)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requests_to(self, path: str) -> List[RecordedRequest]:
        return [r for r in self.requests if r.path == path]
