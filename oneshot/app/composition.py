"""Composition root: build concrete dependencies and hand out configured clients.

Composition may: import concrete classes, call factories, store interface types.
"""
from __future__ import annotations

from oneshot.app.application.http_client import HttpClient
from oneshot.app.config.settings import Settings
from oneshot.app.constants import HttpMethod
from oneshot.app.infrastructure.http.factory import create_transport
from oneshot.app.ports.transport import Transport


def create_http_client(
    url: str,
    method: str = HttpMethod.GET,
    *,
    settings: Settings | None = None,
    transport: Transport | None = None,
) -> HttpClient:
    """Build an HttpClient; the transport comes from settings unless one is injected."""
    settings = settings or Settings()
    return HttpClient(
        url,
        method,
        transport=transport or create_transport(settings),
        settings=settings,
    )
