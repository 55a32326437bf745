"""Typed models for inbound webhook deliveries.

Only the fields Courier reads are declared; msgspec ignores the rest of the
GitHub and Zoho payloads.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import msgspec


@dc.dataclass(frozen=True, slots=True)
class InboundEvent:
    """One delivered webhook call, discarded once handled."""

    event_kind: str
    body: bytes
    signature: str | None = None


class RepositoryOwner(msgspec.Struct, kw_only=True):
    """Repository owner as embedded in GitHub webhook payloads."""

    login: str


class PushRepository(msgspec.Struct, kw_only=True):
    """Repository block of a GitHub push payload."""

    name: str
    full_name: str
    owner: RepositoryOwner


class PushCommit(msgspec.Struct, kw_only=True):
    """A commit listed in a push payload with the paths it touched."""

    id: str
    message: str = ""
    added: list[str] = msgspec.field(default_factory=list)
    modified: list[str] = msgspec.field(default_factory=list)
    removed: list[str] = msgspec.field(default_factory=list)


class HeadCommit(msgspec.Struct, kw_only=True):
    """The most recent commit of a push."""

    id: str
    message: str = ""


class PushEvent(msgspec.Struct, kw_only=True):
    """GitHub ``push`` webhook payload.

    ``head_commit`` is ``None`` for pushes that delete a branch.
    """

    repository: PushRepository
    commits: list[PushCommit] = msgspec.field(default_factory=list)
    head_commit: HeadCommit | None = None
    ref: str | None = None


class ZohoEvent(msgspec.Struct, kw_only=True):
    """Zoho Projects webhook body: an event name and its data."""

    event: str
    data: dict[str, typ.Any] = msgspec.field(default_factory=dict)


__all__ = [
    "HeadCommit",
    "InboundEvent",
    "PushCommit",
    "PushEvent",
    "PushRepository",
    "RepositoryOwner",
    "ZohoEvent",
]
