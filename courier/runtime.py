"""Courier runtime entrypoint.

This module provides the ASGI application factory used by Granian. It
delegates to :func:`courier.api.app.create_app` while keeping the
``courier.runtime:create_app`` entrypoint stable.

When ``COURIER_WEBHOOK_SECRET`` is set, the runtime builds the full
webhook dependencies (GitHub client, Zoho clients, sync pipeline).
Otherwise it starts in health-only mode.

Configuration is driven by environment variables:

- ``COURIER_HOST``: Bind address (default ``0.0.0.0``)
- ``COURIER_PORT``: Listen port (default ``8080``)
- ``COURIER_LOG_LEVEL``: Log level (default ``INFO``)
- ``COURIER_WEBHOOK_SECRET``: GitHub webhook secret (optional; enables the
  webhook receivers when set)

Run the service directly with ``python -m courier.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from courier.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)
from courier.webhooks.config import WEBHOOK_SECRET_ENV

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid COURIER_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application for the current environment.

    Returns
    -------
    falcon.asgi.App
        Health-only app, or the full webhook app when
        ``COURIER_WEBHOOK_SECRET`` is set.

    """
    from courier.api.app import create_app as _create_api_app

    if not os.environ.get(WEBHOOK_SECRET_ENV, "").strip():
        log_info(logger, "%s not set; serving health probes only", WEBHOOK_SECRET_ENV)
        return _create_api_app()

    from courier.api.factory import build_app_dependencies

    return _create_api_app(build_app_dependencies())


def main() -> None:
    """Start the Courier runtime server using Granian.

    Reads ``COURIER_HOST``, ``COURIER_PORT``, and ``COURIER_LOG_LEVEL`` from
    the environment and starts the ASGI server.
    """
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("COURIER_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("COURIER_PORT", "8080"))
    log_level_str = os.environ.get("COURIER_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid COURIER_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting Courier runtime on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "courier.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
