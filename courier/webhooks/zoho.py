"""Handle Zoho Projects webhook events."""

from __future__ import annotations

import typing as typ

import msgspec

from courier.common.slug import parse_repo_slug
from courier.github.errors import GitHubAPIError
from courier.logging import get_logger, log_info, log_warning
from courier.sync.comments import task_status_comment

from .errors import InvalidPayloadError
from .models import ZohoEvent

if typ.TYPE_CHECKING:
    from courier.github.client import IssueCommenter

logger = get_logger(__name__)

TASK_UPDATE_EVENT = "task_update"
MILESTONE_CHANGE_EVENT = "milestone_change"


def _issue_number(raw: object) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    return None


class ZohoEventProcessor:
    """Mirror Zoho Projects activity back onto GitHub.

    Parameters
    ----------
    commenter
        GitHub client used to comment on linked issues; task updates are
        only logged when ``None``.
    repository
        ``owner/name`` slug that linked issue numbers refer to.

    """

    def __init__(
        self,
        commenter: IssueCommenter | None = None,
        repository: str | None = None,
    ) -> None:
        """Configure where task updates are forwarded."""
        self._commenter = commenter
        self._target = parse_repo_slug(repository) if repository else None
        self._decoder = msgspec.json.Decoder(ZohoEvent)

    def decode(self, body: bytes) -> ZohoEvent:
        """Decode a Zoho webhook body.

        Raises
        ------
        InvalidPayloadError
            If the body is not ``{"event": ..., "data": {...}}``.

        """
        try:
            return self._decoder.decode(body)
        except msgspec.DecodeError as exc:
            raise InvalidPayloadError.undecodable("zoho", str(exc)) from exc

    async def process(self, event: ZohoEvent) -> None:
        """React to *event*; unknown events are logged and dropped."""
        if event.event == TASK_UPDATE_EVENT:
            await self._task_update(event.data)
        elif event.event == MILESTONE_CHANGE_EVENT:
            log_info(logger, "Zoho milestone changed: %s", event.data.get("name"))
        else:
            log_info(logger, "Unhandled Zoho webhook event: %s", event.event)

    async def _task_update(self, data: dict[str, typ.Any]) -> None:
        status = data.get("status")
        issue_number = _issue_number(data.get("github_issue_number"))
        log_info(
            logger,
            "Zoho task %s status changed to %s",
            data.get("id") or data.get("task_id"),
            status,
        )
        if issue_number is None:
            return
        if self._commenter is None or self._target is None:
            log_warning(
                logger,
                "Task update for issue #%s not forwarded: no GitHub repository set",
                issue_number,
            )
            return

        owner, repo = self._target
        try:
            await self._commenter.add_issue_comment(
                owner, repo, issue_number, task_status_comment(str(status))
            )
        except GitHubAPIError as exc:
            log_warning(
                logger,
                "Failed to comment on issue #%s: %s",
                issue_number,
                exc,
            )


__all__ = ["MILESTONE_CHANGE_EVENT", "TASK_UPDATE_EVENT", "ZohoEventProcessor"]
