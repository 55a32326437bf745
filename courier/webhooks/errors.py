"""Errors raised while authenticating and decoding webhook deliveries."""

from __future__ import annotations


class WebhookAuthenticationError(Exception):
    """Raised when a delivery fails signature or token verification.

    Attributes
    ----------
    source
        Which webhook source was rejected (``github`` or ``zoho``).

    """

    def __init__(self, source: str, reason: str) -> None:
        """Initialise with the rejected source and a short reason."""
        self.source = source
        self.reason = reason
        super().__init__(f"{source} webhook rejected: {reason}")

    @classmethod
    def invalid_signature(cls) -> WebhookAuthenticationError:
        """Create error for a GitHub delivery whose HMAC does not match."""
        return cls("github", "Invalid signature")

    @classmethod
    def invalid_authorization(cls) -> WebhookAuthenticationError:
        """Create error for a Zoho delivery with the wrong bearer token."""
        return cls("zoho", "Invalid authorization")


class InvalidPayloadError(Exception):
    """Raised when an authenticated delivery body cannot be decoded.

    Attributes
    ----------
    reason
        Human-readable description of the decoding failure.

    """

    def __init__(self, reason: str) -> None:
        """Initialise with a decoding failure reason."""
        self.reason = reason
        super().__init__(reason)

    @classmethod
    def undecodable(cls, event_kind: str, detail: str) -> InvalidPayloadError:
        """Create error for a body that does not match the expected shape."""
        return cls(f"Invalid {event_kind} payload: {detail}")


class WebhookConfigError(Exception):
    """Raised when webhook receiver configuration is missing or invalid."""

    @classmethod
    def missing(cls, variable: str) -> WebhookConfigError:
        """Create error for a required variable that is unset or blank."""
        return cls(f"{variable} is required to receive webhooks")

    @classmethod
    def invalid_repository(cls, value: str) -> WebhookConfigError:
        """Create error for a repository slug not in ``owner/name`` form."""
        return cls(
            f"Invalid COURIER_GITHUB_REPOSITORY {value!r}: expected 'owner/name'"
        )
