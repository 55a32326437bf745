"""Application factory for the Courier Falcon ASGI application.

``create_app()`` always registers the health probes. When webhook
dependencies are supplied it also registers the GitHub and Zoho receivers
and the middleware that closes their outbound clients on shutdown.

Usage
-----
Create a health-only app::

    app = create_app()

Create a full app with webhook receivers::

    from courier.api.app import AppDependencies, create_app

    deps = AppDependencies(
        webhook_config=WebhookConfig.from_env(),
        dispatcher=dispatcher,
        zoho_processor=processor,
        closeables=(github_client, zoho_client),
    )
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from courier.api.errors import register_error_handlers
from courier.api.health.resources import HealthResource, ReadyResource

if typ.TYPE_CHECKING:
    from courier.api.middleware import AsyncCloseable
    from courier.webhooks.config import WebhookConfig
    from courier.webhooks.events import EventDispatcher
    from courier.webhooks.zoho import ZohoEventProcessor

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Collaborators the webhook receivers need.

    Attributes
    ----------
    webhook_config
        Shared secrets and routing for both receivers.
    dispatcher
        Routes verified GitHub deliveries by event kind.
    zoho_processor
        Applies decoded Zoho Projects events.
    closeables
        Outbound clients closed at ASGI lifespan shutdown.

    """

    webhook_config: WebhookConfig
    dispatcher: EventDispatcher
    zoho_processor: ZohoEventProcessor
    closeables: tuple[AsyncCloseable, ...] = ()


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Optional webhook dependencies. When ``None``, only ``/health`` and
        ``/ready`` are available.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    middleware: list[object] = []
    if dependencies is not None and dependencies.closeables:
        from courier.api.middleware import ClientShutdownManager

        middleware.append(ClientShutdownManager(dependencies.closeables))

    app = falcon.asgi.App(middleware=middleware)  # type: ignore[no-matching-overload]  # Falcon stubs

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource())

    if dependencies is not None:
        from courier.api.webhooks.resources import (
            GitHubWebhookResource,
            ZohoWebhookResource,
        )

        config = dependencies.webhook_config
        app.add_route(
            "/webhooks/github",
            GitHubWebhookResource(
                secret=config.github_secret,
                dispatcher=dependencies.dispatcher,
            ),
        )
        app.add_route(
            "/webhooks/zoho",
            ZohoWebhookResource(
                token=config.zoho_token,
                processor=dependencies.zoho_processor,
            ),
        )

    register_error_handlers(app)
    return app
