"""Unit tests for the Zoho CRM template and Projects client."""

from __future__ import annotations

import datetime as dt
import json
import typing as typ

import httpx
import pytest

from courier.templates.models import TemplateArtifact
from courier.templates.naming import build_artifact
from courier.zoho.client import ZohoClient
from courier.zoho.config import ZohoConfig
from courier.zoho.errors import ZohoAPIError
from courier.zoho.models import ActivitySpec, TaskSpec

_TEMPLATES_PATH = "/crm/v2/settings/email_templates"
_TODAY = dt.datetime(2099, 3, 4, 23, 30, tzinfo=dt.UTC)

type Handler = typ.Callable[[httpx.Request], httpx.Response]


class _StaticTokens:
    """AccessTokenSource handing out numbered tokens on demand."""

    def __init__(self) -> None:
        self.issued = 0
        self.invalidations = 0

    async def get_access_token(self) -> str:
        if self.issued == self.invalidations:
            self.issued += 1
        return f"token-{self.issued}"

    def invalidate(self) -> None:
        self.invalidations = self.issued


def _client(
    config: ZohoConfig, handler: Handler
) -> tuple[ZohoClient, list[httpx.Request], _StaticTokens]:
    requests: list[httpx.Request] = []

    def _recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    tokens = _StaticTokens()
    client = ZohoClient(
        config,
        tokens,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(_recording)),
        clock=lambda: _TODAY,
    )
    return client, requests, tokens


def _artifact() -> TemplateArtifact:
    return build_artifact("email-templates/generated/welcome-email.html", "<p>Hi</p>")


class TestListTemplates:
    """Tests for listing and name lookup."""

    @pytest.mark.asyncio
    async def test_lists_templates(self, zoho_config: ZohoConfig) -> None:
        """Entries are converted to RemoteTemplate values."""
        payload = {
            "email_templates": [
                {"id": "1", "name": "Welcome Email", "module": {"api_name": "Leads"}},
                {"id": 2, "name": "Order Confirmation", "subject": "Your order"},
                {"name": "No id"},
            ]
        }
        client, requests, _ = _client(
            zoho_config, lambda _: httpx.Response(200, json=payload)
        )

        templates = await client.list_templates()

        assert [(t.id, t.name, t.module) for t in templates] == [
            ("1", "Welcome Email", "Leads"),
            ("2", "Order Confirmation", None),
        ]
        assert requests[0].url.path == _TEMPLATES_PATH
        assert requests[0].headers["Authorization"] == "Zoho-oauthtoken token-1"

    @pytest.mark.asyncio
    async def test_failure_yields_empty_list(self, zoho_config: ZohoConfig) -> None:
        """HTTP failures while listing degrade to no templates."""
        client, _, _ = _client(
            zoho_config, lambda _: httpx.Response(500, json={"code": "INTERNAL"})
        )
        assert await client.list_templates() == []

    @pytest.mark.asyncio
    async def test_find_is_exact_and_case_sensitive(
        self, zoho_config: ZohoConfig
    ) -> None:
        """Only an exact name match is returned."""
        payload = {"email_templates": [{"id": "1", "name": "Welcome Email"}]}
        client, _, _ = _client(zoho_config, lambda _: httpx.Response(200, json=payload))

        assert await client.find_template_by_name("welcome email") is None
        found = await client.find_template_by_name("Welcome Email")
        assert found is not None
        assert found.id == "1"


class TestTemplateWrites:
    """Tests for create_template and update_template."""

    @pytest.mark.asyncio
    async def test_create_sends_folder_and_returns_id(
        self, zoho_config: ZohoConfig
    ) -> None:
        """Creates include the folder and read the id from details."""
        response = {
            "email_templates": [
                {"code": "SUCCESS", "status": "success", "details": {"id": "555"}}
            ]
        }
        client, requests, _ = _client(
            zoho_config, lambda _: httpx.Response(201, json=response)
        )

        result = await client.create_template(_artifact())

        assert result.ok
        assert result.unwrap().id == "555"
        assert result.unwrap().name == "Welcome Email"
        body = json.loads(requests[0].content)
        entry = body["email_templates"][0]
        assert entry["folder"] == {"id": "folder-9"}
        assert entry["mail_format"] == "html"
        assert entry["module"] == "Contacts"
        assert requests[0].method == "POST"

    @pytest.mark.asyncio
    async def test_update_uses_put_without_folder(
        self, zoho_config: ZohoConfig
    ) -> None:
        """Updates target the template id and omit the folder."""
        response = {"email_templates": [{"status": "success", "details": {}}]}
        client, requests, _ = _client(
            zoho_config, lambda _: httpx.Response(200, json=response)
        )

        result = await client.update_template("777", _artifact())

        assert result.ok
        assert result.unwrap().id == "777"
        assert requests[0].method == "PUT"
        assert requests[0].url.path == f"{_TEMPLATES_PATH}/777"
        assert "folder" not in json.loads(requests[0].content)["email_templates"][0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "payload", "expected"),
        [
            (
                400,
                {"email_templates": [{"code": "INVALID_DATA", "message": "bad"}]},
                "INVALID_DATA: bad",
            ),
            (200, {"email_templates": []}, "No template data returned from Zoho"),
            (
                200,
                {
                    "email_templates": [
                        {"status": "error", "code": "DUPLICATE", "message": "exists"}
                    ]
                },
                "DUPLICATE: exists",
            ),
        ],
    )
    async def test_write_failures_are_results(
        self,
        zoho_config: ZohoConfig,
        status: int,
        payload: dict[str, typ.Any],
        expected: str,
    ) -> None:
        """Rejected writes come back as failure results, not exceptions."""
        client, _, _ = _client(
            zoho_config, lambda _: httpx.Response(status, json=payload)
        )

        result = await client.create_template(_artifact())

        assert not result.ok
        assert result.error == expected

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, zoho_config: ZohoConfig) -> None:
        """Network failures raise ZohoAPIError."""

        def _down(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("reset", request=request)

        client, _, _ = _client(zoho_config, _down)

        with pytest.raises(ZohoAPIError, match="template create"):
            await client.create_template(_artifact())


class TestUnauthorizedRetry:
    """Tests for the single retry after a rejected token."""

    @pytest.mark.asyncio
    async def test_retries_once_with_fresh_token(
        self, zoho_config: ZohoConfig
    ) -> None:
        """A 401 invalidates the token and repeats the call once."""
        statuses = iter([401, 200])

        def _handler(_: httpx.Request) -> httpx.Response:
            return httpx.Response(next(statuses), json={"email_templates": []})

        client, requests, tokens = _client(zoho_config, _handler)

        assert await client.list_templates() == []
        assert len(requests) == 2
        assert tokens.invalidations == 1
        assert requests[1].headers["Authorization"] == "Zoho-oauthtoken token-2"

    @pytest.mark.asyncio
    async def test_second_401_is_not_retried(self, zoho_config: ZohoConfig) -> None:
        """Persistent rejection surfaces as a failure after one retry."""
        client, requests, _ = _client(
            zoho_config, lambda _: httpx.Response(401, json={"code": "INVALID_TOKEN"})
        )

        result = await client.create_template(_artifact())

        assert not result.ok
        assert len(requests) == 2


class TestProjects:
    """Tests for Zoho Projects calls."""

    @pytest.mark.asyncio
    async def test_log_activity_dated_today(self, zoho_config: ZohoConfig) -> None:
        """Activities are posted under the portal and project with today's date."""
        client, requests, _ = _client(
            zoho_config,
            lambda _: httpx.Response(201, json={"activities": [{"id": "a1"}]}),
        )

        result = await client.log_activity(
            "project-1", ActivitySpec(title="Deployed", description="Welcome Email")
        )

        assert result.ok
        assert result.value == {"id": "a1"}
        assert requests[0].url.path == (
            "/projects/v3/portal/portal-1/projects/project-1/activities/"
        )
        assert json.loads(requests[0].content) == {
            "name": "Deployed",
            "description": "Welcome Email",
            "date": "2099-03-04",
            "hours": "0.5",
        }

    @pytest.mark.asyncio
    async def test_create_task_payload(self, zoho_config: ZohoConfig) -> None:
        """Tasks open with the requested priority and assignees."""
        client, requests, _ = _client(
            zoho_config, lambda _: httpx.Response(201, json={"tasks": [{"id": "t1"}]})
        )

        result = await client.create_task(
            "project-1",
            TaskSpec(title="Review", description="PR #3", assignees=("ana",)),
        )

        assert result.ok
        assert json.loads(requests[0].content) == {
            "name": "Review",
            "description": "PR #3",
            "assignees": ["ana"],
            "priority": "Medium",
            "status": "Open",
        }

    @pytest.mark.asyncio
    async def test_update_task_status_failure(self, zoho_config: ZohoConfig) -> None:
        """Rejected status updates return the error detail."""
        client, requests, _ = _client(
            zoho_config,
            lambda _: httpx.Response(404, json={"error": {"message": "no task"}}),
        )

        result = await client.update_task_status("project-1", "t9", "Closed")

        assert not result.ok
        assert requests[0].url.path.endswith("/projects/project-1/tasks/t9/")
        assert json.loads(requests[0].content) == {"status": "Closed"}

    @pytest.mark.asyncio
    async def test_missing_portal_is_a_failure(self, zoho_config: ZohoConfig) -> None:
        """Projects calls without a portal fail without contacting Zoho."""
        config = ZohoConfig(
            client_id=zoho_config.client_id,
            client_secret=zoho_config.client_secret,
            refresh_token=zoho_config.refresh_token,
        )
        client, requests, _ = _client(config, lambda _: httpx.Response(200))

        result = await client.log_activity(
            "project-1", ActivitySpec(title="x", description="y")
        )

        assert not result.ok
        assert "COURIER_ZOHO_PORTAL_ID" in (result.error or "")
        assert requests == []
