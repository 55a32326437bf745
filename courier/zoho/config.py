"""Configuration for the Zoho OAuth token provider and API client."""

from __future__ import annotations

import dataclasses
import os

from courier.common.env import (
    DEFAULT_HTTP_TIMEOUT_S,
    HTTP_TIMEOUT_ENV,
    read_http_timeout,
    read_optional,
)

from .errors import ZohoConfigError

_DEFAULT_ACCOUNTS_URL = "https://accounts.zoho.com"
_DEFAULT_API_URL = "https://www.zohoapis.com"
_DEFAULT_EMAIL_FOLDER_ID = "default"


def _required(name: str) -> str:
    value = read_optional(name)
    if value is None:
        raise ZohoConfigError.missing(name)
    return value


@dataclasses.dataclass(frozen=True, slots=True)
class ZohoConfig:
    """Configuration for Zoho CRM and Projects access.

    Attributes
    ----------
    client_id
        OAuth client identifier.
    client_secret
        OAuth client secret.
    refresh_token
        Long-lived refresh token exchanged for short-lived access tokens.
    accounts_url
        Base URL of the Zoho accounts (OAuth) service.
    api_url
        Base URL of the Zoho REST APIs.
    portal_id
        Zoho Projects portal; required only for task and activity calls.
    project_id
        Zoho Projects project that receives deployment activities.
    email_folder_id
        CRM template folder new templates are filed under.
    timeout_s
        Request timeout in seconds.

    """

    client_id: str
    client_secret: str
    refresh_token: str
    accounts_url: str = _DEFAULT_ACCOUNTS_URL
    api_url: str = _DEFAULT_API_URL
    portal_id: str | None = None
    project_id: str | None = None
    email_folder_id: str = _DEFAULT_EMAIL_FOLDER_ID
    timeout_s: float = DEFAULT_HTTP_TIMEOUT_S

    @classmethod
    def from_env(cls) -> ZohoConfig:
        """Build configuration from ``COURIER_ZOHO_*`` variables.

        Reads the following environment variables:

        - ``COURIER_ZOHO_CLIENT_ID``, ``COURIER_ZOHO_CLIENT_SECRET`` and
          ``COURIER_ZOHO_REFRESH_TOKEN``: required OAuth credentials
        - ``COURIER_ZOHO_ACCOUNTS_URL`` and ``COURIER_ZOHO_API_URL``:
          optional endpoint overrides
        - ``COURIER_ZOHO_PORTAL_ID`` and ``COURIER_ZOHO_PROJECT_ID``:
          optional Zoho Projects identifiers
        - ``COURIER_ZOHO_EMAIL_FOLDER_ID``: optional template folder

        Raises
        ------
        ZohoConfigError
            If a required variable is missing or the timeout is invalid.

        """
        try:
            timeout_s = read_http_timeout()
        except ValueError as exc:
            raise ZohoConfigError.invalid_timeout(
                os.environ.get(HTTP_TIMEOUT_ENV, "")
            ) from exc

        return cls(
            client_id=_required("COURIER_ZOHO_CLIENT_ID"),
            client_secret=_required("COURIER_ZOHO_CLIENT_SECRET"),
            refresh_token=_required("COURIER_ZOHO_REFRESH_TOKEN"),
            accounts_url=os.environ.get(
                "COURIER_ZOHO_ACCOUNTS_URL", _DEFAULT_ACCOUNTS_URL
            ).rstrip("/"),
            api_url=os.environ.get("COURIER_ZOHO_API_URL", _DEFAULT_API_URL).rstrip(
                "/"
            ),
            portal_id=read_optional("COURIER_ZOHO_PORTAL_ID"),
            project_id=read_optional("COURIER_ZOHO_PROJECT_ID"),
            email_folder_id=read_optional("COURIER_ZOHO_EMAIL_FOLDER_ID")
            or _DEFAULT_EMAIL_FOLDER_ID,
            timeout_s=timeout_s,
        )
