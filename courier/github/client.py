"""GitHub REST client used to read template sources and report results."""

from __future__ import annotations

import typing as typ
from urllib.parse import quote

import httpx

from courier.logging import get_logger, log_info, log_warning

from .errors import GitHubAPIError, GitHubConfigError

if typ.TYPE_CHECKING:
    from .config import GitHubConfig

logger = get_logger(__name__)

_HTTP_ERROR_STATUS_THRESHOLD = 400
_API_VERSION = "2022-11-28"
_RAW_MEDIA_TYPE = "application/vnd.github.raw+json"

type JSONObject = dict[str, typ.Any]


class ContentSource(typ.Protocol):
    """Interface the sync pipeline needs from the source-control host."""

    async def fetch_file_at(
        self, owner: str, repo: str, path: str, revision: str
    ) -> bytes | None:
        """Return file bytes at *revision*, or ``None`` when unavailable."""
        ...

    async def post_commit_comment(
        self, owner: str, repo: str, revision: str, body: str
    ) -> JSONObject:
        """Attach a comment to a commit."""
        ...


class IssueCommenter(typ.Protocol):
    """Interface the Zoho receiver needs to report task updates."""

    async def add_issue_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> JSONObject:
        """Add a comment to an issue or pull request."""
        ...


def _as_object(payload: object, operation: str) -> JSONObject:
    if not isinstance(payload, dict):
        msg = f"GitHub {operation} returned a non-object payload"
        raise GitHubAPIError(msg)
    return typ.cast("JSONObject", payload)


class GitHubRestClient:
    """Async GitHub REST client implementing :class:`ContentSource`.

    Parameters
    ----------
    config
        API configuration including the bearer token.
    http_client
        Optional ``httpx.AsyncClient``; when omitted the instance creates and
        owns one.

    """

    def __init__(
        self,
        config: GitHubConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        if not config.token.strip():
            raise GitHubConfigError.empty_token()

        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)
        self._headers = {
            "Authorization": f"Bearer {config.token}",
            "User-Agent": config.user_agent,
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": _API_VERSION,
        }

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def fetch_file_at(
        self, owner: str, repo: str, path: str, revision: str
    ) -> bytes | None:
        """Return the raw content of *path* as of *revision*.

        GitHub error responses (missing file, unknown revision, permissions)
        are logged and reported as ``None`` so callers can skip the file.

        Raises
        ------
        GitHubAPIError
            If the request cannot be completed at the transport level.

        """
        operation = "content fetch"
        response = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/contents/{quote(path)}",
            operation=operation,
            params={"ref": revision},
            headers={"Accept": _RAW_MEDIA_TYPE},
        )
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            log_warning(
                logger,
                "GitHub %s for %s/%s:%s@%s failed with HTTP %d",
                operation,
                owner,
                repo,
                path,
                revision,
                response.status_code,
            )
            return None
        return response.content

    async def post_commit_comment(
        self, owner: str, repo: str, revision: str, body: str
    ) -> JSONObject:
        """Attach *body* as a comment on commit *revision*."""
        comment = await self._json_call(
            "POST",
            f"/repos/{owner}/{repo}/commits/{revision}/comments",
            operation="commit comment",
            json={"body": body},
        )
        log_info(logger, "Comment added to commit %s/%s@%s", owner, repo, revision[:7])
        return comment

    async def add_issue_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> JSONObject:
        """Add *body* as a comment on issue or pull request *issue_number*."""
        comment = await self._json_call(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            operation="issue comment",
            json={"body": body},
        )
        log_info(logger, "Comment added to issue #%d", issue_number)
        return comment

    async def request_reviewers(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        reviewers: typ.Sequence[str],
    ) -> JSONObject:
        """Request reviews from *reviewers* on pull request *pull_number*."""
        result = await self._json_call(
            "POST",
            f"/repos/{owner}/{repo}/pulls/{pull_number}/requested_reviewers",
            operation="reviewer request",
            json={"reviewers": list(reviewers)},
        )
        log_info(logger, "Reviewers requested for PR #%d", pull_number)
        return result

    async def create_pull_request(  # noqa: PLR0913
        self,
        owner: str,
        repo: str,
        *,
        title: str,
        head: str,
        base: str = "main",
        body: str | None = None,
        draft: bool = False,
    ) -> JSONObject:
        """Open a pull request from *head* into *base*."""
        pull = await self._json_call(
            "POST",
            f"/repos/{owner}/{repo}/pulls",
            operation="pull request creation",
            json={
                "title": title,
                "head": head,
                "base": base,
                "body": body,
                "draft": draft,
            },
        )
        log_info(logger, "PR created: %s", pull.get("html_url"))
        return pull

    async def get_issue(self, owner: str, repo: str, issue_number: int) -> JSONObject:
        """Return the issue payload for *issue_number*."""
        return await self._json_call(
            "GET",
            f"/repos/{owner}/{repo}/issues/{issue_number}",
            operation="issue lookup",
        )

    async def get_pull_request(
        self, owner: str, repo: str, pull_number: int
    ) -> JSONObject:
        """Return the pull request payload for *pull_number*."""
        return await self._json_call(
            "GET",
            f"/repos/{owner}/{repo}/pulls/{pull_number}",
            operation="pull request lookup",
        )

    async def _json_call(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        json: JSONObject | None = None,
    ) -> JSONObject:
        """Perform a request whose failure must reach the caller."""
        response = await self._request(method, path, operation=operation, json=json)
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise GitHubAPIError.http_error(response.status_code, operation)
        return _as_object(response.json(), operation)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        json: JSONObject | None = None,
    ) -> httpx.Response:
        """Send an authenticated request, translating transport failures."""
        merged_headers = {**self._headers, **(headers or {})}
        try:
            return await self._client.request(
                method,
                f"{self._config.api_url}{path}",
                params=params,
                headers=merged_headers,
                json=json,
            )
        except httpx.TimeoutException as exc:
            raise GitHubAPIError.timeout(operation) from exc
        except httpx.RequestError as exc:
            raise GitHubAPIError.network_error(operation, str(exc)) from exc
