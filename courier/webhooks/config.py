"""Configuration for the GitHub and Zoho webhook receivers."""

from __future__ import annotations

import dataclasses

from courier.common.env import read_optional
from courier.common.slug import parse_repo_slug

from .errors import WebhookConfigError
from .events import DEFAULT_TEMPLATE_DIR, normalize_template_dir

WEBHOOK_SECRET_ENV = "COURIER_WEBHOOK_SECRET"
ZOHO_WEBHOOK_TOKEN_ENV = "COURIER_ZOHO_WEBHOOK_TOKEN"


@dataclasses.dataclass(frozen=True, slots=True)
class WebhookConfig:
    """Shared secrets and routing for inbound webhooks.

    Attributes
    ----------
    github_secret
        HMAC secret GitHub signs deliveries with.
    zoho_token
        Bearer token Zoho sends in ``Authorization``.
    repository
        ``owner/name`` slug Zoho task updates are commented on.
    template_dir
        Directory whose ``.html`` files are deployed, always ending in ``/``.

    """

    github_secret: str
    zoho_token: str
    repository: str | None = None
    template_dir: str = DEFAULT_TEMPLATE_DIR

    @classmethod
    def from_env(cls) -> WebhookConfig:
        """Build configuration from the environment.

        Raises
        ------
        WebhookConfigError
            If a secret is missing or the repository slug is malformed.

        """
        github_secret = read_optional(WEBHOOK_SECRET_ENV)
        if github_secret is None:
            raise WebhookConfigError.missing(WEBHOOK_SECRET_ENV)
        zoho_token = read_optional(ZOHO_WEBHOOK_TOKEN_ENV)
        if zoho_token is None:
            raise WebhookConfigError.missing(ZOHO_WEBHOOK_TOKEN_ENV)

        repository = read_optional("COURIER_GITHUB_REPOSITORY")
        if repository is not None:
            try:
                parse_repo_slug(repository)
            except ValueError as exc:
                raise WebhookConfigError.invalid_repository(repository) from exc

        template_dir = read_optional("COURIER_TEMPLATE_DIR") or DEFAULT_TEMPLATE_DIR
        return cls(
            github_secret=github_secret,
            zoho_token=zoho_token,
            repository=repository,
            template_dir=normalize_template_dir(template_dir),
        )


__all__ = ["WEBHOOK_SECRET_ENV", "ZOHO_WEBHOOK_TOKEN_ENV", "WebhookConfig"]
