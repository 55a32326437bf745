"""Unit tests for the GitHub REST client."""

from __future__ import annotations

import json
import secrets
import typing as typ

import httpx
import pytest

from courier.github import GitHubConfig, GitHubRestClient
from courier.github.errors import GitHubAPIError, GitHubConfigError

_TOKEN = secrets.token_hex(8)
_SHA = "0123456789abcdef0123456789abcdef01234567"

type Handler = typ.Callable[[httpx.Request], httpx.Response]


def _make_client(
    handler: Handler,
) -> tuple[GitHubRestClient, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def _recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(_recording))
    client = GitHubRestClient(
        GitHubConfig(token=_TOKEN, api_url="https://github.test"),
        http_client=http_client,
    )
    return client, requests


def test_blank_token_is_rejected() -> None:
    """The client refuses to start without credentials."""
    with pytest.raises(GitHubConfigError, match="non-empty"):
        GitHubRestClient(GitHubConfig(token="  "))


class TestFetchFileAt:
    """Tests for fetch_file_at."""

    @pytest.mark.asyncio
    async def test_returns_raw_bytes_at_revision(self) -> None:
        """Content is requested raw at the given ref."""
        client, requests = _make_client(
            lambda _: httpx.Response(200, content=b"<p>Hi</p>")
        )

        content = await client.fetch_file_at(
            "acme", "mailers", "email-templates/generated/welcome.html", _SHA
        )

        assert content == b"<p>Hi</p>"
        request = requests[0]
        assert request.method == "GET"
        assert request.url.path == (
            "/repos/acme/mailers/contents/email-templates/generated/welcome.html"
        )
        assert request.url.params["ref"] == _SHA
        assert request.headers["Accept"] == "application/vnd.github.raw+json"
        assert request.headers["Authorization"] == f"Bearer {_TOKEN}"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [403, 404, 500])
    async def test_error_status_returns_none(self, status: int) -> None:
        """GitHub error responses become None rather than raising."""
        client, _ = _make_client(lambda _: httpx.Response(status, json={}))
        assert await client.fetch_file_at("acme", "mailers", "x.html", _SHA) is None

    @pytest.mark.asyncio
    async def test_transport_failure_raises(self) -> None:
        """Network failures surface as GitHubAPIError."""

        def _boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = _make_client(_boom)
        with pytest.raises(GitHubAPIError, match="network error"):
            await client.fetch_file_at("acme", "mailers", "x.html", _SHA)

    @pytest.mark.asyncio
    async def test_timeout_raises(self) -> None:
        """Timeouts surface as GitHubAPIError."""

        def _slow(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client, _ = _make_client(_slow)
        with pytest.raises(GitHubAPIError, match="timed out"):
            await client.fetch_file_at("acme", "mailers", "x.html", _SHA)


class TestComments:
    """Tests for commit and issue comments."""

    @pytest.mark.asyncio
    async def test_post_commit_comment(self) -> None:
        """Commit comments are posted to the commit's comment collection."""
        client, requests = _make_client(
            lambda _: httpx.Response(201, json={"id": 99})
        )

        result = await client.post_commit_comment("acme", "mailers", _SHA, "Done")

        assert result == {"id": 99}
        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == f"/repos/acme/mailers/commits/{_SHA}/comments"
        assert json.loads(request.content) == {"body": "Done"}

    @pytest.mark.asyncio
    async def test_post_commit_comment_raises_on_error_status(self) -> None:
        """Rejected comments raise with the status code attached."""
        client, _ = _make_client(lambda _: httpx.Response(422, json={}))

        with pytest.raises(GitHubAPIError) as excinfo:
            await client.post_commit_comment("acme", "mailers", _SHA, "Done")

        assert excinfo.value.status_code == 422

    @pytest.mark.asyncio
    async def test_add_issue_comment(self) -> None:
        """Issue comments target the issue's comment collection."""
        client, requests = _make_client(lambda _: httpx.Response(201, json={"id": 1}))

        await client.add_issue_comment("acme", "mailers", 42, "Status changed")

        assert requests[0].url.path == "/repos/acme/mailers/issues/42/comments"


class TestPullRequests:
    """Tests for the pull request helpers."""

    @pytest.mark.asyncio
    async def test_create_pull_request_defaults_base_to_main(self) -> None:
        """Pull requests target main unless told otherwise."""
        client, requests = _make_client(
            lambda _: httpx.Response(201, json={"html_url": "https://pr.test/1"})
        )

        pull = await client.create_pull_request(
            "acme", "mailers", title="Add templates", head="feature/templates"
        )

        assert pull["html_url"] == "https://pr.test/1"
        assert json.loads(requests[0].content) == {
            "title": "Add templates",
            "head": "feature/templates",
            "base": "main",
            "body": None,
            "draft": False,
        }

    @pytest.mark.asyncio
    async def test_request_reviewers(self) -> None:
        """Reviewer requests post the reviewer logins."""
        client, requests = _make_client(lambda _: httpx.Response(201, json={}))

        await client.request_reviewers("acme", "mailers", 7, ["octocat"])

        assert requests[0].url.path == "/repos/acme/mailers/pulls/7/requested_reviewers"
        assert json.loads(requests[0].content) == {"reviewers": ["octocat"]}

    @pytest.mark.asyncio
    async def test_get_issue_raises_when_missing(self) -> None:
        """Lookups of unknown issues raise GitHubAPIError."""
        client, _ = _make_client(lambda _: httpx.Response(404, json={}))

        with pytest.raises(GitHubAPIError, match="HTTP 404"):
            await client.get_issue("acme", "mailers", 1)

    @pytest.mark.asyncio
    async def test_get_pull_request(self) -> None:
        """Pull request lookups return the JSON payload."""
        client, requests = _make_client(
            lambda _: httpx.Response(200, json={"number": 5})
        )

        assert await client.get_pull_request("acme", "mailers", 5) == {"number": 5}
        assert requests[0].url.path == "/repos/acme/mailers/pulls/5"
