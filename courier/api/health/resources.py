"""Liveness and readiness probes.

Both resources are stateless and registered in every runtime mode, so a
deployment without webhook secrets still answers its probes.

Usage
-----
Register health endpoints on the Falcon app::

    from courier.api.health.resources import HealthResource, ReadyResource

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource())

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

from courier.common.time import utcnow

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from falcon.asgi import Request, Response

__all__ = ["HealthResource", "ReadyResource"]


class HealthResource:
    """Liveness probe returning ``{"status": "OK", "timestamp": ...}``.

    Parameters
    ----------
    clock
        Callable returning the current aware UTC time.

    """

    def __init__(self, clock: cabc.Callable[[], dt.datetime] = utcnow) -> None:
        """Store the clock used to stamp responses."""
        self._clock = clock

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health requests."""
        resp.media = {"status": "OK", "timestamp": self._clock().isoformat()}
        resp.status = HTTPStatus.OK


class ReadyResource:
    """Readiness probe resource returning ``{"status": "ready"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /ready requests."""
        resp.media = {"status": "ready"}
        resp.status = HTTPStatus.OK
