"""Custom exceptions for Zoho CRM and Projects operations."""

from __future__ import annotations

_DETAIL_PREVIEW_LIMIT = 200


def _preview(detail: str) -> str:
    if len(detail) > _DETAIL_PREVIEW_LIMIT:
        return detail[:_DETAIL_PREVIEW_LIMIT] + "..."
    return detail


class ZohoError(Exception):
    """Base exception for all Zoho integration errors."""


class ZohoAPIError(ZohoError):
    """Raised when a Zoho call fails at the transport level.

    Expected write failures are reported through
    :class:`~courier.common.result.RemoteResult` instead.

    Attributes
    ----------
    status_code
        HTTP status code from the API response, if available.

    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise the error with message and optional status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def timeout(cls, operation: str) -> ZohoAPIError:
        """Create error for request timeouts."""
        return cls(f"Zoho {operation} timed out")

    @classmethod
    def network_error(cls, operation: str, detail: str) -> ZohoAPIError:
        """Create error for DNS, connection or TLS failures."""
        return cls(f"Zoho {operation} network error: {detail}")


class ZohoAuthError(ZohoError):
    """Raised when the refresh-token exchange does not yield an access token."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise the error with message and optional status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, detail: str) -> ZohoAuthError:
        """Create error for a rejected token exchange."""
        return cls(
            f"Zoho token exchange failed with HTTP {status_code}: {_preview(detail)}",
            status_code=status_code,
        )

    @classmethod
    def missing_token(cls, detail: str) -> ZohoAuthError:
        """Create error for a response without ``access_token``."""
        return cls(f"Zoho token response missing access_token: {_preview(detail)}")

    @classmethod
    def transport(cls, detail: str) -> ZohoAuthError:
        """Create error for a token exchange that never reached Zoho."""
        return cls(f"Zoho token exchange network error: {detail}")


class ZohoConfigError(ZohoError):
    """Raised when Zoho client configuration is invalid."""

    @classmethod
    def missing(cls, variable: str) -> ZohoConfigError:
        """Create error for a missing required environment variable."""
        return cls(f"{variable} environment variable is required")

    @classmethod
    def invalid_timeout(cls, value: str) -> ZohoConfigError:
        """Create error for an unusable timeout value."""
        return cls(
            f"Invalid COURIER_HTTP_TIMEOUT_S '{value}'. Must be a positive number"
        )
