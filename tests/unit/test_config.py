"""Unit tests for environment-driven configuration."""

from __future__ import annotations

import os
from unittest import mock

import pytest

from courier.github.config import GitHubConfig
from courier.github.errors import GitHubConfigError
from courier.webhooks.config import WebhookConfig
from courier.webhooks.errors import WebhookConfigError
from courier.webhooks.events import DEFAULT_TEMPLATE_DIR
from courier.zoho.config import ZohoConfig
from courier.zoho.errors import ZohoConfigError

_ZOHO_ENV = {
    "COURIER_ZOHO_CLIENT_ID": "client",
    "COURIER_ZOHO_CLIENT_SECRET": "secret",
    "COURIER_ZOHO_REFRESH_TOKEN": "refresh",
}

_WEBHOOK_ENV = {
    "COURIER_WEBHOOK_SECRET": "github-secret",
    "COURIER_ZOHO_WEBHOOK_TOKEN": "zoho-token",
}


class TestGitHubConfig:
    """Tests for GitHubConfig.from_env."""

    def test_defaults(self) -> None:
        """Only the token is required."""
        env = {"COURIER_GITHUB_TOKEN": " ghp_test "}
        with mock.patch.dict(os.environ, env, clear=True):
            config = GitHubConfig.from_env()

        assert config.token == "ghp_test"
        assert config.api_url == "https://api.github.com"
        assert config.timeout_s == pytest.approx(20.0)

    def test_overrides(self) -> None:
        """API URL trailing slashes are dropped and the timeout is parsed."""
        env = {
            "COURIER_GITHUB_TOKEN": "ghp_test",
            "COURIER_GITHUB_API_URL": "https://github.example/api/v3/",
            "COURIER_HTTP_TIMEOUT_S": "5.5",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = GitHubConfig.from_env()

        assert config.api_url == "https://github.example/api/v3"
        assert config.timeout_s == pytest.approx(5.5)

    def test_missing_token(self) -> None:
        """A blank token is rejected."""
        with (
            mock.patch.dict(os.environ, {"COURIER_GITHUB_TOKEN": "  "}, clear=True),
            pytest.raises(GitHubConfigError, match="COURIER_GITHUB_TOKEN"),
        ):
            GitHubConfig.from_env()

    @pytest.mark.parametrize("timeout", ["0", "-3", "soon", "nan", "inf"])
    def test_invalid_timeout(self, timeout: str) -> None:
        """Non-positive or non-numeric timeouts are rejected."""
        env = {"COURIER_GITHUB_TOKEN": "ghp_test", "COURIER_HTTP_TIMEOUT_S": timeout}
        with (
            mock.patch.dict(os.environ, env, clear=True),
            pytest.raises(GitHubConfigError, match="COURIER_HTTP_TIMEOUT_S"),
        ):
            GitHubConfig.from_env()


class TestZohoConfig:
    """Tests for ZohoConfig.from_env."""

    def test_defaults(self) -> None:
        """Optional Projects identifiers default to None."""
        with mock.patch.dict(os.environ, _ZOHO_ENV, clear=True):
            config = ZohoConfig.from_env()

        assert config.client_id == "client"
        assert config.accounts_url == "https://accounts.zoho.com"
        assert config.api_url == "https://www.zohoapis.com"
        assert config.portal_id is None
        assert config.project_id is None
        assert config.email_folder_id == "default"

    def test_overrides(self) -> None:
        """Endpoint, portal, project and folder settings are read."""
        env = {
            **_ZOHO_ENV,
            "COURIER_ZOHO_ACCOUNTS_URL": "https://accounts.zoho.eu/",
            "COURIER_ZOHO_API_URL": "https://www.zohoapis.eu/",
            "COURIER_ZOHO_PORTAL_ID": "portal-1",
            "COURIER_ZOHO_PROJECT_ID": "project-1",
            "COURIER_ZOHO_EMAIL_FOLDER_ID": "folder-9",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = ZohoConfig.from_env()

        assert config.accounts_url == "https://accounts.zoho.eu"
        assert config.api_url == "https://www.zohoapis.eu"
        assert (config.portal_id, config.project_id) == ("portal-1", "project-1")
        assert config.email_folder_id == "folder-9"

    @pytest.mark.parametrize("missing", sorted(_ZOHO_ENV))
    def test_missing_credentials(self, missing: str) -> None:
        """Every OAuth credential is required."""
        env = {k: v for k, v in _ZOHO_ENV.items() if k != missing}
        with (
            mock.patch.dict(os.environ, env, clear=True),
            pytest.raises(ZohoConfigError, match=missing),
        ):
            ZohoConfig.from_env()

    def test_invalid_timeout(self) -> None:
        """An unusable timeout is a configuration error."""
        env = {**_ZOHO_ENV, "COURIER_HTTP_TIMEOUT_S": "never"}
        with (
            mock.patch.dict(os.environ, env, clear=True),
            pytest.raises(ZohoConfigError, match="never"),
        ):
            ZohoConfig.from_env()


class TestWebhookConfig:
    """Tests for WebhookConfig.from_env."""

    def test_defaults(self) -> None:
        """Repository is optional and the template directory has a default."""
        with mock.patch.dict(os.environ, _WEBHOOK_ENV, clear=True):
            config = WebhookConfig.from_env()

        assert config.github_secret == "github-secret"
        assert config.zoho_token == "zoho-token"  # noqa: S105 - test value
        assert config.repository is None
        assert config.template_dir == DEFAULT_TEMPLATE_DIR

    def test_overrides(self) -> None:
        """Repository slug and template directory are read."""
        env = {
            **_WEBHOOK_ENV,
            "COURIER_GITHUB_REPOSITORY": "acme/mailers",
            "COURIER_TEMPLATE_DIR": "mail/out/",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = WebhookConfig.from_env()

        assert config.repository == "acme/mailers"
        assert config.template_dir == "mail/out/"

    @pytest.mark.parametrize("missing", sorted(_WEBHOOK_ENV))
    def test_missing_secret(self, missing: str) -> None:
        """Both receiver secrets are required."""
        env = {k: v for k, v in _WEBHOOK_ENV.items() if k != missing}
        with (
            mock.patch.dict(os.environ, env, clear=True),
            pytest.raises(WebhookConfigError, match=missing),
        ):
            WebhookConfig.from_env()

    def test_malformed_repository(self) -> None:
        """A repository slug must be owner/name."""
        env = {**_WEBHOOK_ENV, "COURIER_GITHUB_REPOSITORY": "mailers"}
        with (
            mock.patch.dict(os.environ, env, clear=True),
            pytest.raises(WebhookConfigError, match="owner/name"),
        ):
            WebhookConfig.from_env()

    @pytest.mark.parametrize(
        "raw", ["email-templates/generated", "email-templates/generated//"]
    )
    def test_template_dir_gets_single_trailing_slash(self, raw: str) -> None:
        """The template directory always ends in exactly one slash."""
        env = {**_WEBHOOK_ENV, "COURIER_TEMPLATE_DIR": raw}
        with mock.patch.dict(os.environ, env, clear=True):
            config = WebhookConfig.from_env()

        assert config.template_dir == "email-templates/generated/"
