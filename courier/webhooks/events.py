"""Dispatch verified GitHub deliveries to the handler for their event kind.

A single :class:`EventDispatcher` serves every GitHub delivery. Only
``push`` has a handler; every other kind is acknowledged as ignored so
GitHub stops retrying it.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

import msgspec

from courier.logging import get_logger, log_info
from courier.sync.models import ChangeSet
from courier.templates.naming import HTML_SUFFIX

from .errors import InvalidPayloadError
from .models import PushEvent

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from courier.sync.pipeline import TemplateSyncPipeline

    from .models import InboundEvent

logger = get_logger(__name__)

DEFAULT_TEMPLATE_DIR = "email-templates/generated/"
PUSH_EVENT = "push"


class AckOutcome(enum.StrEnum):
    """How a delivery was handled."""

    IGNORED = "ignored"
    NO_OP = "no_op"
    PROCESSED = "processed"


@dc.dataclass(frozen=True, slots=True)
class WebhookAck:
    """Acknowledgement returned to the webhook sender."""

    message: str
    event: str
    outcome: AckOutcome
    details: dict[str, typ.Any] = dc.field(default_factory=dict)

    def to_media(self) -> dict[str, typ.Any]:
        """Return the JSON body for this acknowledgement."""
        return {
            "message": self.message,
            "event": self.event,
            "outcome": self.outcome.value,
            **self.details,
        }


class EventHandler(typ.Protocol):
    """Handles one kind of verified delivery."""

    async def handle(self, event: InboundEvent) -> WebhookAck:
        """Process *event* and acknowledge it."""
        ...


class EventDispatcher:
    """Route verified deliveries to handlers keyed by event kind."""

    def __init__(self, handlers: cabc.Mapping[str, EventHandler]) -> None:
        """Register the handlers; kinds without one are ignored."""
        self._handlers = dict(handlers)

    @property
    def event_kinds(self) -> frozenset[str]:
        """Return the event kinds that have a handler."""
        return frozenset(self._handlers)

    async def dispatch(self, event: InboundEvent) -> WebhookAck:
        """Hand *event* to its handler, or acknowledge it as ignored."""
        handler = self._handlers.get(event.event_kind)
        if handler is None:
            log_info(logger, "Ignoring GitHub event %s", event.event_kind or "<none>")
            return WebhookAck(
                message="Event ignored",
                event=event.event_kind,
                outcome=AckOutcome.IGNORED,
            )
        return await handler.handle(event)


def normalize_template_dir(template_dir: str) -> str:
    """Return *template_dir* ending in exactly one ``/``.

    Examples
    --------
    >>> normalize_template_dir("email-templates/generated")
    'email-templates/generated/'

    """
    return template_dir.rstrip("/") + "/"


def _qualifies(path: str, template_dir: str) -> bool:
    return path.startswith(template_dir) and path.endswith(HTML_SUFFIX)


def extract_change_set(
    push: PushEvent, template_dir: str = DEFAULT_TEMPLATE_DIR
) -> ChangeSet | None:
    """Collect the template files a push added or modified.

    Parameters
    ----------
    push
        Decoded push payload.
    template_dir
        Repository-relative directory that holds deployable templates; a
        missing trailing slash is added so sibling directories never match.

    Returns
    -------
    ChangeSet | None
        Qualifying paths in first-seen order, pinned to the head commit, or
        ``None`` when nothing qualifies or the push has no head commit.

    """
    if push.head_commit is None:
        return None

    prefix = normalize_template_dir(template_dir)
    seen: dict[str, None] = {}
    for commit in push.commits:
        for path in (*commit.added, *commit.modified):
            if _qualifies(path, prefix):
                seen.setdefault(path, None)
    if not seen:
        return None

    return ChangeSet(
        paths=tuple(seen),
        revision=push.head_commit.id,
        owner=push.repository.owner.login,
        repo=push.repository.name,
        commit_message=push.head_commit.message,
    )


class PushEventHandler:
    """Turn a push into a template sync run."""

    def __init__(
        self,
        pipeline: TemplateSyncPipeline,
        *,
        template_dir: str = DEFAULT_TEMPLATE_DIR,
    ) -> None:
        """Bind the handler to the pipeline it drives."""
        self._pipeline = pipeline
        self._template_dir = template_dir
        self._decoder = msgspec.json.Decoder(PushEvent)

    async def handle(self, event: InboundEvent) -> WebhookAck:
        """Decode the push, extract its change set and run the pipeline.

        Raises
        ------
        InvalidPayloadError
            If the body is not a well-formed push payload.

        """
        try:
            push = self._decoder.decode(event.body)
        except msgspec.DecodeError as exc:
            raise InvalidPayloadError.undecodable(event.event_kind, str(exc)) from exc

        change_set = extract_change_set(push, self._template_dir)
        if change_set is None:
            log_info(
                logger,
                "Push to %s touched no templates under %s",
                push.repository.full_name,
                self._template_dir,
            )
            return WebhookAck(
                message="No template changes detected",
                event=event.event_kind,
                outcome=AckOutcome.NO_OP,
            )

        report = await self._pipeline.run(change_set)
        return WebhookAck(
            message="Webhook processed successfully",
            event=event.event_kind,
            outcome=AckOutcome.PROCESSED,
            details={
                "repository": push.repository.full_name,
                "revision": change_set.revision,
                "files": report.counts(),
            },
        )


__all__ = [
    "DEFAULT_TEMPLATE_DIR",
    "PUSH_EVENT",
    "AckOutcome",
    "EventDispatcher",
    "EventHandler",
    "PushEventHandler",
    "WebhookAck",
    "extract_change_set",
    "normalize_template_dir",
]
