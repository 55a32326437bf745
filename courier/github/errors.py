"""GitHub REST client errors."""

from __future__ import annotations


class GitHubAPIError(RuntimeError):
    """Raised when a GitHub REST call fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, operation: str) -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        return cls(
            f"GitHub {operation} failed with HTTP {status_code}",
            status_code=status_code,
        )

    @classmethod
    def timeout(cls, operation: str) -> GitHubAPIError:
        """Return an error for requests that exceeded the client timeout."""
        return cls(f"GitHub {operation} timed out")

    @classmethod
    def network_error(cls, operation: str, detail: str) -> GitHubAPIError:
        """Return an error for DNS, connection or TLS failures."""
        return cls(f"GitHub {operation} network error: {detail}")


class GitHubConfigError(RuntimeError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def missing_token(cls) -> GitHubConfigError:
        """Return an error when no GitHub token is configured."""
        return cls("COURIER_GITHUB_TOKEN is required for GitHub API")

    @classmethod
    def empty_token(cls) -> GitHubConfigError:
        """Return an error when the provided token is empty."""
        return cls("GitHub token must be non-empty")

    @classmethod
    def invalid_timeout(cls, value: str) -> GitHubConfigError:
        """Return an error for a non-positive or non-numeric timeout."""
        return cls(
            f"Invalid COURIER_HTTP_TIMEOUT_S '{value}'. Must be a positive number"
        )
