"""Configuration for the GitHub REST client."""

from __future__ import annotations

import dataclasses
import os

from courier.common.env import (
    DEFAULT_HTTP_TIMEOUT_S,
    HTTP_TIMEOUT_ENV,
    read_http_timeout,
)

from .errors import GitHubConfigError

_DEFAULT_API_URL = "https://api.github.com"


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Configuration for :class:`~courier.github.client.GitHubRestClient`.

    Attributes
    ----------
    token
        Personal access or installation token used as a bearer credential.
    api_url
        Base URL of the GitHub REST API.
    timeout_s
        Request timeout in seconds.
    user_agent
        ``User-Agent`` header GitHub requires on every request.

    """

    token: str
    api_url: str = _DEFAULT_API_URL
    timeout_s: float = DEFAULT_HTTP_TIMEOUT_S
    user_agent: str = "courier/0.1"

    @classmethod
    def from_env(cls) -> GitHubConfig:
        """Build configuration from ``COURIER_GITHUB_*`` variables.

        Raises
        ------
        GitHubConfigError
            If the token is missing or the timeout is invalid.

        """
        token = os.environ.get("COURIER_GITHUB_TOKEN", "").strip()
        if not token:
            raise GitHubConfigError.missing_token()
        api_url = os.environ.get("COURIER_GITHUB_API_URL", _DEFAULT_API_URL)
        try:
            timeout_s = read_http_timeout()
        except ValueError as exc:
            raise GitHubConfigError.invalid_timeout(
                os.environ.get(HTTP_TIMEOUT_ENV, "")
            ) from exc
        return cls(token=token, api_url=api_url.rstrip("/"), timeout_s=timeout_s)
