"""Authenticated HTTP client for the PostgREST-style backing service.

Every call opens its own :class:`httpx.AsyncClient`: nothing about one
request (cookies, connections) carries over to the next.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from restgate.core.errors import RemoteCallFailure

if TYPE_CHECKING:
    from restgate.config.schema import GatewayConfig

logger = logging.getLogger(__name__)

RETURN_REPRESENTATION = "return=representation"


@dataclass(frozen=True, slots=True)
class RemoteRequestSpec:
    """One outbound request, built per call and discarded after the response."""

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None


def auth_headers(service_key: str) -> dict[str, str]:
    """Headers every request to the backing service carries."""
    return {
        "Authorization": f"Bearer {service_key}",
        "apikey": service_key,
        "Content-Type": "application/json",
    }


class RestClient:
    """Client for the backing service's ``/rest/v1`` API.

    Usage::

        client = RestClient(config)
        rows = await client.request("/rest/v1/products?select=*&limit=5")

    A custom ``transport`` can be injected (e.g. ``httpx.MockTransport``)
    to run without a network.
    """

    def __init__(
        self,
        config: GatewayConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = config.backend.url.rstrip("/")
        self._service_key = config.backend.service_role_key or ""
        self._timeout = config.backend.timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def build(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        prefer: str | None = None,
    ) -> RemoteRequestSpec:
        headers = auth_headers(self._service_key)
        if prefer:
            headers["Prefer"] = prefer
        return RemoteRequestSpec(
            method=method.upper(), path=path, headers=headers, body=body
        )

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        prefer: str | None = None,
    ) -> Any:
        """Send one request and return the parsed JSON response.

        Returns ``None`` when the service answers 2xx with an empty body.

        Raises:
            RemoteCallFailure: The service answered with a non-2xx status,
                or with a 2xx body that is not JSON.
            httpx.HTTPError: The request never got a response.
        """
        spec = self.build(path, method, body, prefer)
        return await self.send(spec)

    async def send(self, spec: RemoteRequestSpec) -> Any:
        content = None if spec.body is None else json.dumps(spec.body)
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.request(
                spec.method, spec.path, headers=spec.headers, content=content
            )

        logger.debug("%s %s -> %d", spec.method, spec.path, response.status_code)

        if not response.is_success:
            raise RemoteCallFailure(response.status_code, response.text)

        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteCallFailure(response.status_code, response.text) from e
