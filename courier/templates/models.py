"""Typed models for email templates on both sides of the sync."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import msgspec

DEFAULT_TEMPLATE_MODULE = "Contacts"


@dc.dataclass(frozen=True, slots=True)
class TemplateArtifact:
    """Sanitised HTML ready to be published as a Zoho CRM email template.

    The ``name`` is derived from the source path and is the only key used to
    decide between creating and updating the remote template.
    """

    name: str
    subject: str
    content: str
    description: str
    source_path: str
    module: str = DEFAULT_TEMPLATE_MODULE
    warnings: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, typ.Any]:
        """Return the Zoho ``email_templates`` entry for this artifact."""
        return {
            "name": self.name,
            "subject": self.subject,
            "content": self.content,
            "description": self.description,
            "module": self.module,
            "mail_format": "html",
        }


class RemoteTemplate(msgspec.Struct, frozen=True, kw_only=True):
    """An email template as stored in Zoho CRM.

    Attributes
    ----------
    id
        Zoho record identifier; authoritative once assigned.
    name
        Template name, matched exactly when looking up existing templates.
    subject
        Subject line, when Zoho returns one.
    module
        API name of the CRM module the template belongs to.

    """

    id: str
    name: str
    subject: str | None = None
    module: str | None = None


def _module_name(raw: object) -> str | None:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict):
        api_name = raw.get("api_name")
        return api_name if isinstance(api_name, str) else None
    return None


def remote_template_from_payload(
    entry: dict[str, typ.Any],
    *,
    fallback_name: str | None = None,
) -> RemoteTemplate | None:
    """Convert a Zoho template entry into a :class:`RemoteTemplate`.

    Listing responses carry ``id`` and ``name`` at the top level, while
    write responses nest the identifier under ``details``. Entries without a
    usable identifier or name yield ``None``.
    """
    details = entry.get("details")
    raw_id = entry.get("id")
    if raw_id is None and isinstance(details, dict):
        raw_id = details.get("id")
    if not isinstance(raw_id, str | int):
        return None

    raw_name = entry.get("name", fallback_name)
    if not isinstance(raw_name, str):
        return None

    subject = entry.get("subject")
    return RemoteTemplate(
        id=str(raw_id),
        name=raw_name,
        subject=subject if isinstance(subject, str) else None,
        module=_module_name(entry.get("module")),
    )


__all__ = [
    "DEFAULT_TEMPLATE_MODULE",
    "RemoteTemplate",
    "TemplateArtifact",
    "remote_template_from_payload",
]
