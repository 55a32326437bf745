"""Build webhook dependencies from environment configuration.

Usage
-----
Assemble the full application::

    from courier.api.app import create_app
    from courier.api.factory import build_app_dependencies

    app = create_app(build_app_dependencies())

"""

from __future__ import annotations

from courier.api.app import AppDependencies
from courier.github import GitHubConfig, GitHubRestClient
from courier.sync import SyncSettings, TemplateSyncPipeline
from courier.webhooks.config import WebhookConfig
from courier.webhooks.events import PUSH_EVENT, EventDispatcher, PushEventHandler
from courier.webhooks.zoho import ZohoEventProcessor
from courier.zoho import ZohoClient, ZohoConfig, ZohoTokenProvider

__all__ = ["build_app_dependencies"]


def build_app_dependencies() -> AppDependencies:
    """Build the webhook receivers' collaborators from the environment.

    Creates the GitHub client, the Zoho token provider and client, the sync
    pipeline and the push handler. No network calls are made here.

    Returns
    -------
    AppDependencies
        Dependencies ready for :func:`courier.api.app.create_app`.

    Raises
    ------
    WebhookConfigError
        If webhook secrets are missing.
    GitHubConfigError
        If the GitHub token is missing.
    ZohoConfigError
        If Zoho OAuth credentials are missing.

    """
    webhook_config = WebhookConfig.from_env()
    github_config = GitHubConfig.from_env()
    zoho_config = ZohoConfig.from_env()

    github = GitHubRestClient(github_config)
    tokens = ZohoTokenProvider(zoho_config)
    zoho = ZohoClient(zoho_config, tokens)

    pipeline = TemplateSyncPipeline(
        github,
        zoho,
        activity_log=zoho,
        settings=SyncSettings(project_id=zoho_config.project_id),
    )
    dispatcher = EventDispatcher(
        {
            PUSH_EVENT: PushEventHandler(
                pipeline, template_dir=webhook_config.template_dir
            ),
        }
    )
    return AppDependencies(
        webhook_config=webhook_config,
        dispatcher=dispatcher,
        zoho_processor=ZohoEventProcessor(github, webhook_config.repository),
        closeables=(github, zoho, tokens),
    )
