"""Falcon error handlers translating Courier exceptions into responses.

Usage
-----
Register the handlers on the Falcon app::

    from courier.api.errors import register_error_handlers

    register_error_handlers(app)

Falcon picks the handler registered for the most specific exception type,
so the catch-all ``Exception`` handler only sees errors no other handler
claims. Falcon's own ``HTTPError`` keeps its built-in handling.
"""

from __future__ import annotations

import typing as typ

import falcon

from courier.logging import get_logger, log_exception, log_warning
from courier.webhooks.errors import InvalidPayloadError, WebhookAuthenticationError

if typ.TYPE_CHECKING:
    import falcon.asgi
    from falcon.asgi import Request, Response

__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "handle_invalid_payload",
    "handle_unexpected_error",
    "handle_webhook_authentication",
    "register_error_handlers",
]

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


async def handle_webhook_authentication(
    req: Request,
    resp: Response,
    ex: WebhookAuthenticationError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``WebhookAuthenticationError`` to an HTTP 401 JSON response.

    Parameters
    ----------
    req
        Falcon request, used only for the log line.
    resp
        Falcon response whose status and media are set.
    ex
        The rejection carrying its source and reason.
    _params
        URI template parameters (unused).

    """
    log_warning(
        logger, "Rejected %s webhook on %s: %s", ex.source, req.path, ex.reason
    )
    resp.status = falcon.HTTP_401
    resp.media = {"error": ex.reason}


async def handle_invalid_payload(
    _req: Request,
    resp: Response,
    ex: InvalidPayloadError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``InvalidPayloadError`` to an HTTP 400 JSON response."""
    resp.status = falcon.HTTP_400
    resp.media = {"error": ex.reason}


async def handle_unexpected_error(
    req: Request,
    resp: Response,
    ex: Exception,
    _params: dict[str, typ.Any],
) -> None:
    """Log any unhandled exception and answer with a generic HTTP 500.

    The exception detail stays in the log; the caller only sees
    ``{"error": "Internal server error"}``.
    """
    log_exception(logger, f"Unhandled error processing {req.method} {req.path}", ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": INTERNAL_ERROR_MESSAGE}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Install every Courier error handler on *app*."""
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(WebhookAuthenticationError, handle_webhook_authentication)
    app.add_error_handler(InvalidPayloadError, handle_invalid_payload)
