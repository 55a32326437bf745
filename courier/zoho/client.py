"""Zoho CRM email-template and Zoho Projects client.

Every remote write returns a :class:`~courier.common.result.RemoteResult`;
only transport failures raise (:class:`~courier.zoho.errors.ZohoAPIError`,
or :class:`~courier.zoho.errors.ZohoAuthError` from the token exchange).
Template listing degrades to an empty list so lookups never need special
handling.
"""

from __future__ import annotations

import datetime as dt
import json
import typing as typ

import httpx

from courier.common.result import RemoteResult
from courier.common.time import utcnow
from courier.logging import get_logger, log_error, log_info, log_warning
from courier.templates.models import RemoteTemplate, remote_template_from_payload

from .errors import ZohoAPIError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from courier.templates.models import TemplateArtifact

    from .auth import AccessTokenSource
    from .config import ZohoConfig
    from .models import ActivitySpec, TaskSpec

logger = get_logger(__name__)

_HTTP_ERROR_STATUS_THRESHOLD = 400
_HTTP_UNAUTHORIZED = 401
_HTTP_NO_CONTENT = 204
_TEMPLATES_PATH = "/crm/v2/settings/email_templates"
_DETAIL_PREVIEW_LIMIT = 300

type JSONObject = dict[str, typ.Any]
type TemplateWriteResult = RemoteResult[RemoteTemplate]


class TemplateStore(typ.Protocol):
    """Interface the sync pipeline needs from the template collection."""

    async def find_template_by_name(self, name: str) -> RemoteTemplate | None:
        """Return the template called exactly *name*, if any."""
        ...

    async def create_template(self, artifact: TemplateArtifact) -> TemplateWriteResult:
        """Create a new template from *artifact*."""
        ...

    async def update_template(
        self, template_id: str, artifact: TemplateArtifact
    ) -> TemplateWriteResult:
        """Overwrite template *template_id* with *artifact*."""
        ...


class ActivityLog(typ.Protocol):
    """Interface for recording project activities."""

    async def log_activity(
        self, project_id: str, activity: ActivitySpec
    ) -> RemoteResult[JSONObject]:
        """Record *activity* against *project_id*."""
        ...


def _decode_json(response: httpx.Response) -> object:
    if response.status_code == _HTTP_NO_CONTENT or not response.content:
        return None
    try:
        return response.json()
    except json.JSONDecodeError:
        return None


def _describe_error_entry(entry: JSONObject) -> str:
    code = entry.get("code")
    message = entry.get("message")
    if isinstance(code, str) and isinstance(message, str):
        return f"{code}: {message}"
    if isinstance(message, str):
        return message
    return json.dumps(entry, sort_keys=True, default=str)


def _first_entry(payload: object, key: str) -> JSONObject | None:
    if not isinstance(payload, dict):
        return None
    entries = payload.get(key)
    if not isinstance(entries, list) or not entries:
        return None
    first = entries[0]
    return typ.cast("JSONObject", first) if isinstance(first, dict) else None


def _error_detail(response: httpx.Response, key: str) -> str:
    """Summarise a failed Zoho response for logs and commit comments."""
    payload = _decode_json(response)
    entry = _first_entry(payload, key)
    if entry is not None:
        return _describe_error_entry(entry)
    if isinstance(payload, dict):
        return _describe_error_entry(typ.cast("JSONObject", payload))
    text = response.text.strip() or f"HTTP {response.status_code}"
    return text[:_DETAIL_PREVIEW_LIMIT]


class ZohoClient:
    """Async client for Zoho CRM email templates and Zoho Projects.

    Implements :class:`TemplateStore` and :class:`ActivityLog`.

    Parameters
    ----------
    config
        Zoho configuration (API base URL, portal and folder identifiers).
    token_source
        Credential holder supplying bearer tokens.
    http_client
        Optional ``httpx.AsyncClient`` for testing; otherwise owned.
    clock
        Callable returning the current aware UTC time; dates activities.

    """

    def __init__(
        self,
        config: ZohoConfig,
        token_source: AccessTokenSource,
        *,
        http_client: httpx.AsyncClient | None = None,
        clock: cabc.Callable[[], dt.datetime] = utcnow,
    ) -> None:
        """Initialise the client without contacting Zoho."""
        self._config = config
        self._tokens = token_source
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)
        self._clock = clock

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def list_templates(self) -> list[RemoteTemplate]:
        """Return every CRM email template, or ``[]`` when Zoho reports failure."""
        response = await self._send("GET", _TEMPLATES_PATH, operation="template list")
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            log_warning(
                logger,
                "Failed to list Zoho email templates: %s",
                _error_detail(response, "email_templates"),
            )
            return []

        payload = _decode_json(response)
        if not isinstance(payload, dict):
            return []
        entries = payload.get("email_templates")
        if not isinstance(entries, list):
            return []
        templates: list[RemoteTemplate] = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            template = remote_template_from_payload(entry)
            if template is not None:
                templates.append(template)
        return templates

    async def find_template_by_name(self, name: str) -> RemoteTemplate | None:
        """Return the first template whose name equals *name* exactly."""
        for template in await self.list_templates():
            if template.name == name:
                return template
        return None

    async def create_template(self, artifact: TemplateArtifact) -> TemplateWriteResult:
        """Create a CRM email template from *artifact*."""
        entry = artifact.to_payload()
        entry["folder"] = {"id": self._config.email_folder_id}
        response = await self._send(
            "POST",
            _TEMPLATES_PATH,
            operation="template create",
            json={"email_templates": [entry]},
        )
        result = self._template_write_result(response, artifact, template_id=None)
        if result.ok and result.value is not None:
            log_info(logger, "Email template created in Zoho CRM: %s", result.value.id)
        else:
            log_error(logger, "Failed to create email template: %s", result.error)
        return result

    async def update_template(
        self, template_id: str, artifact: TemplateArtifact
    ) -> TemplateWriteResult:
        """Overwrite CRM email template *template_id* with *artifact*."""
        response = await self._send(
            "PUT",
            f"{_TEMPLATES_PATH}/{template_id}",
            operation="template update",
            json={"email_templates": [artifact.to_payload()]},
        )
        result = self._template_write_result(
            response, artifact, template_id=template_id
        )
        if result.ok:
            log_info(logger, "Email template updated in Zoho CRM: %s", template_id)
        else:
            log_error(logger, "Failed to update email template: %s", result.error)
        return result

    async def create_task(
        self, project_id: str, task: TaskSpec
    ) -> RemoteResult[JSONObject]:
        """Create a Zoho Projects task."""
        return await self._projects_write(
            project_id,
            "tasks/",
            operation="task create",
            body=task.to_payload(),
            key="tasks",
        )

    async def update_task_status(
        self, project_id: str, task_id: str, status: str
    ) -> RemoteResult[JSONObject]:
        """Move Zoho Projects task *task_id* to *status*."""
        return await self._projects_write(
            project_id,
            f"tasks/{task_id}/",
            operation="task status update",
            body={"status": status},
            key="tasks",
        )

    async def log_activity(
        self, project_id: str, activity: ActivitySpec
    ) -> RemoteResult[JSONObject]:
        """Record a time-tracked activity dated today (UTC)."""
        return await self._projects_write(
            project_id,
            "activities/",
            operation="activity log",
            body=activity.to_payload(self._clock().date().isoformat()),
            key="activities",
        )

    async def _projects_write(  # noqa: PLR0913
        self,
        project_id: str,
        suffix: str,
        *,
        operation: str,
        body: JSONObject,
        key: str,
    ) -> RemoteResult[JSONObject]:
        portal_id = self._config.portal_id
        if portal_id is None:
            return RemoteResult.failure(
                "COURIER_ZOHO_PORTAL_ID is required for Zoho Projects calls"
            )
        response = await self._send(
            "POST",
            f"/projects/v3/portal/{portal_id}/projects/{project_id}/{suffix}",
            operation=operation,
            json=body,
        )
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            detail = _error_detail(response, key)
            log_error(logger, "Zoho %s failed: %s", operation, detail)
            return RemoteResult.failure(detail)

        payload = _decode_json(response)
        entry = _first_entry(payload, key)
        if entry is not None:
            log_info(logger, "Zoho %s succeeded: %s", operation, entry.get("id"))
            return RemoteResult.success(entry)
        if isinstance(payload, dict):
            return RemoteResult.success(typ.cast("JSONObject", payload))
        return RemoteResult.success({})

    def _template_write_result(
        self,
        response: httpx.Response,
        artifact: TemplateArtifact,
        *,
        template_id: str | None,
    ) -> TemplateWriteResult:
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            return RemoteResult.failure(_error_detail(response, "email_templates"))

        entry = _first_entry(_decode_json(response), "email_templates")
        if entry is None:
            return RemoteResult.failure("No template data returned from Zoho")
        if str(entry.get("status", "")).lower() == "error":
            return RemoteResult.failure(_describe_error_entry(entry))

        template = remote_template_from_payload(entry, fallback_name=artifact.name)
        if template is None and template_id is not None:
            template = RemoteTemplate(
                id=template_id,
                name=artifact.name,
                subject=artifact.subject,
                module=artifact.module,
            )
        if template is None:
            return RemoteResult.failure("Zoho response did not include a template id")
        return RemoteResult.success(template)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        json: JSONObject | None = None,
    ) -> httpx.Response:
        """Send an authenticated request, re-exchanging the token once on 401."""
        response = await self._send_once(method, path, operation=operation, json=json)
        if response.status_code == _HTTP_UNAUTHORIZED:
            log_warning(
                logger, "Zoho rejected access token during %s; refreshing", operation
            )
            self._tokens.invalidate()
            response = await self._send_once(
                method, path, operation=operation, json=json
            )
        return response

    async def _send_once(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        json: JSONObject | None,
    ) -> httpx.Response:
        token = await self._tokens.get_access_token()
        headers = {"Authorization": f"Zoho-oauthtoken {token}"}
        try:
            return await self._client.request(
                method,
                f"{self._config.api_url}{path}",
                headers=headers,
                json=json,
            )
        except httpx.TimeoutException as exc:
            raise ZohoAPIError.timeout(operation) from exc
        except httpx.RequestError as exc:
            raise ZohoAPIError.network_error(operation, str(exc)) from exc
