"""Unit tests for the create-or-update decision."""

from __future__ import annotations

import pytest

from courier.sync.models import UpsertAction
from courier.sync.upsert import upsert_template
from courier.templates.naming import build_artifact
from tests.helpers.fakes import FakeTemplateStore


@pytest.mark.asyncio
async def test_creates_when_name_is_new(template_store: FakeTemplateStore) -> None:
    """Unknown names are created."""
    artifact = build_artifact("t/welcome-email.html", "<p>Hi</p>")

    outcome = await upsert_template(template_store, artifact)

    assert outcome.action is UpsertAction.CREATE
    assert outcome.ok
    assert template_store.created == [artifact]
    assert template_store.updated == []


@pytest.mark.asyncio
async def test_updates_existing_template_by_id(
    template_store: FakeTemplateStore,
) -> None:
    """Known names are updated in place using the stored id."""
    artifact = build_artifact("t/order-confirmation.html", "<p>Thanks</p>")

    outcome = await upsert_template(template_store, artifact)

    assert outcome.action is UpsertAction.UPDATE
    assert outcome.result.unwrap().id == "existing-7"
    assert template_store.updated == [("existing-7", artifact)]
    assert template_store.created == []


@pytest.mark.asyncio
async def test_failure_is_reported_not_raised() -> None:
    """Store rejections surface in the outcome."""
    store = FakeTemplateStore(reject=frozenset({"Welcome"}), error="quota exceeded")

    outcome = await upsert_template(store, build_artifact("t/welcome.html", "x"))

    assert not outcome.ok
    assert outcome.result.error == "quota exceeded"


@pytest.mark.asyncio
async def test_repeat_deploys_converge_on_one_template() -> None:
    """Deploying the same file twice creates once and then updates."""
    store = FakeTemplateStore()
    artifact = build_artifact("t/welcome.html", "<p>v1</p>")

    first = await upsert_template(store, artifact)
    second = await upsert_template(store, artifact)

    assert (first.action, second.action) == (UpsertAction.CREATE, UpsertAction.UPDATE)
    assert len(store.templates) == 1
