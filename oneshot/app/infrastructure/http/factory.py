"""Transport factory: builds a Transport from settings (no provider logic in composition)."""
from __future__ import annotations

from oneshot.app.config.settings import Settings
from oneshot.app.infrastructure.http.httpx_transport import HttpxTransport
from oneshot.app.ports.transport import Transport


def create_transport(settings: Settings) -> Transport:
    """Build a transport from settings. Timeouts and TLS flags travel with each request."""
    backend = settings.transport_backend.strip().lower()

    if backend == "httpx":
        return HttpxTransport()

    raise ValueError(f"Unsupported transport backend: {backend}")
