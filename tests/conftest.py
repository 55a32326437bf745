"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import pytest

from courier.templates.models import RemoteTemplate
from courier.zoho.config import ZohoConfig
from tests.helpers.fakes import (
    FakeActivityLog,
    FakeContentSource,
    FakeIssueCommenter,
    FakeTemplateStore,
)

WELCOME_HTML = (
    b"<html><head><title>Welcome</title></head>"
    b"<body><p style='color:#333'>Hello {{name}}</p></body></html>"
)


@pytest.fixture
def zoho_config() -> ZohoConfig:
    """Return a Zoho configuration pointing at test hosts."""
    return ZohoConfig(
        client_id="client-id",
        client_secret="client-secret",  # noqa: S106 - test fixture
        refresh_token="refresh-token",  # noqa: S106 - test fixture
        accounts_url="https://accounts.zoho.test",
        api_url="https://api.zoho.test",
        portal_id="portal-1",
        project_id="project-1",
        email_folder_id="folder-9",
    )


@pytest.fixture
def content_source() -> FakeContentSource:
    """Return an empty in-memory content source."""
    return FakeContentSource()


@pytest.fixture
def template_store() -> FakeTemplateStore:
    """Return a store that already holds the ``Order Confirmation`` template."""
    return FakeTemplateStore(
        [RemoteTemplate(id="existing-7", name="Order Confirmation")]
    )


@pytest.fixture
def activity_log() -> FakeActivityLog:
    """Return an activity log that accepts every write."""
    return FakeActivityLog()


@pytest.fixture
def issue_commenter() -> FakeIssueCommenter:
    """Return an issue commenter recording comments."""
    return FakeIssueCommenter()
