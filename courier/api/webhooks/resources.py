"""Webhook receiver resources.

``POST /webhooks/github`` verifies the HMAC signature over the raw body
before anything is decoded, then hands the delivery to the event
dispatcher. ``POST /webhooks/zoho`` checks a shared bearer token. Both
raise domain exceptions on rejection; the registered error handlers turn
them into 401 and 400 responses.

Usage
-----
Register the receivers on the Falcon app::

    app.add_route(
        "/webhooks/github",
        GitHubWebhookResource(secret=config.github_secret, dispatcher=dispatcher),
    )
    app.add_route(
        "/webhooks/zoho",
        ZohoWebhookResource(token=config.zoho_token, processor=processor),
    )

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

from courier.logging import get_logger, log_debug
from courier.webhooks.errors import WebhookAuthenticationError
from courier.webhooks.models import InboundEvent
from courier.webhooks.signature import verify_bearer_token, verify_signature

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from courier.webhooks.events import EventDispatcher
    from courier.webhooks.zoho import ZohoEventProcessor

__all__ = [
    "EVENT_HEADER",
    "SIGNATURE_HEADER",
    "ZOHO_ACK_MESSAGE",
    "GitHubWebhookResource",
    "ZohoWebhookResource",
]

logger = get_logger(__name__)

SIGNATURE_HEADER = "X-Hub-Signature-256"
EVENT_HEADER = "X-GitHub-Event"
ZOHO_ACK_MESSAGE = "Zoho webhook processed successfully"


class GitHubWebhookResource:
    """Receive signed GitHub deliveries.

    Parameters
    ----------
    secret
        Shared HMAC secret configured on the GitHub webhook.
    dispatcher
        Routes verified deliveries by ``X-GitHub-Event``.

    """

    def __init__(self, *, secret: str, dispatcher: EventDispatcher) -> None:
        """Bind the resource to its secret and dispatcher."""
        self._secret = secret
        self._dispatcher = dispatcher

    async def on_post(self, req: Request, resp: Response) -> None:
        """Handle POST /webhooks/github.

        Raises
        ------
        WebhookAuthenticationError
            If the signature header is missing or does not match the body.
        InvalidPayloadError
            If a handled event's body cannot be decoded.

        """
        body = await req.bounded_stream.read()
        signature = req.get_header(SIGNATURE_HEADER)
        if not verify_signature(body, signature, self._secret):
            raise WebhookAuthenticationError.invalid_signature()

        event = InboundEvent(
            event_kind=req.get_header(EVENT_HEADER) or "",
            body=body,
            signature=signature,
        )
        log_debug(
            logger,
            "Verified GitHub %s delivery (%d bytes)",
            event.event_kind,
            len(body),
        )
        ack = await self._dispatcher.dispatch(event)
        resp.media = ack.to_media()
        resp.status = HTTPStatus.OK


class ZohoWebhookResource:
    """Receive Zoho Projects deliveries authenticated with a bearer token.

    Parameters
    ----------
    token
        Shared token Zoho sends as ``Authorization: Bearer <token>``.
    processor
        Applies the decoded event.

    """

    def __init__(self, *, token: str, processor: ZohoEventProcessor) -> None:
        """Bind the resource to its token and event processor."""
        self._token = token
        self._processor = processor

    async def on_post(self, req: Request, resp: Response) -> None:
        """Handle POST /webhooks/zoho."""
        if not verify_bearer_token(req.get_header("Authorization"), self._token):
            raise WebhookAuthenticationError.invalid_authorization()

        body = await req.bounded_stream.read()
        event = self._processor.decode(body)
        await self._processor.process(event)
        resp.media = {"message": ZOHO_ACK_MESSAGE}
        resp.status = HTTPStatus.OK
