"""Lifespan middleware closing outbound HTTP clients on shutdown.

The GitHub and Zoho clients each own an ``httpx.AsyncClient`` whose
connection pool outlives individual requests. Falcon calls
``process_shutdown`` once when the ASGI server stops, which is where the
pools are released.

Usage
-----
Register the middleware when creating the Falcon app::

    shutdown_mw = ClientShutdownManager([github_client, zoho_client])
    app = falcon.asgi.App(middleware=[shutdown_mw])

"""

from __future__ import annotations

import typing as typ

import httpx

from courier.logging import get_logger, log_error, log_info

if typ.TYPE_CHECKING:
    import collections.abc as cabc

__all__ = ["AsyncCloseable", "ClientShutdownManager"]

logger = get_logger(__name__)


class AsyncCloseable(typ.Protocol):
    """Anything holding resources released by ``aclose()``."""

    async def aclose(self) -> None:
        """Release held resources."""
        ...


class ClientShutdownManager:
    """Falcon ASGI middleware that closes clients at lifespan shutdown.

    Parameters
    ----------
    closeables
        Clients to close, in order. A failure closing one is logged and
        the rest are still closed.

    """

    def __init__(self, closeables: cabc.Sequence[AsyncCloseable]) -> None:
        """Store the clients to close on shutdown."""
        self._closeables = tuple(closeables)

    async def process_shutdown(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Close every registered client."""
        for closeable in self._closeables:
            try:
                await closeable.aclose()
            except httpx.HTTPError as exc:
                log_error(
                    logger,
                    "Failed to close %s during shutdown: %s",
                    type(closeable).__name__,
                    exc,
                )
        log_info(logger, "Closed %d outbound clients", len(self._closeables))
