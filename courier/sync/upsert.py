"""Create-or-update of a single template keyed by its derived name."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .models import UpsertAction

if typ.TYPE_CHECKING:
    from courier.templates.models import TemplateArtifact
    from courier.zoho.client import TemplateStore, TemplateWriteResult


@dc.dataclass(frozen=True, slots=True)
class UpsertOutcome:
    """The branch taken and the store's tagged result."""

    action: UpsertAction
    result: TemplateWriteResult

    @property
    def ok(self) -> bool:
        """Return whether the store accepted the write."""
        return self.result.ok


async def upsert_template(
    store: TemplateStore, artifact: TemplateArtifact
) -> UpsertOutcome:
    """Update the template named ``artifact.name`` or create it when absent.

    The lookup and the write are separate calls, so a concurrent deployer
    creating the same name in between can produce a duplicate.
    """
    existing = await store.find_template_by_name(artifact.name)
    if existing is not None:
        result = await store.update_template(existing.id, artifact)
        return UpsertOutcome(action=UpsertAction.UPDATE, result=result)

    result = await store.create_template(artifact)
    return UpsertOutcome(action=UpsertAction.CREATE, result=result)
