"""Deploy changed email templates from a push into Zoho CRM.

The pipeline walks a :class:`~courier.sync.models.ChangeSet` one file at a
time: fetch the file at the push's head revision, sanitise it, create or
update the Zoho template that shares its derived name, then report the
result back to GitHub as a commit comment. A failure on one file never stops
the others; only transport errors from Zoho abort the run.
"""

from __future__ import annotations

import collections
import dataclasses as dc
import typing as typ

from courier.common.time import utcnow
from courier.github.errors import GitHubAPIError
from courier.logging import get_logger, log_info, log_warning
from courier.templates.models import DEFAULT_TEMPLATE_MODULE
from courier.templates.naming import build_artifact, derive_template_name
from courier.zoho.models import ActivitySpec

from .comments import failure_comment, should_announce, success_comment
from .models import FileOutcome, FileStatus, SyncReport, UpsertAction
from .observability import SyncEventLogger
from .upsert import upsert_template

if typ.TYPE_CHECKING:
    from courier.github.client import ContentSource
    from courier.templates.models import TemplateArtifact
    from courier.zoho.client import ActivityLog, TemplateStore

    from .models import ChangeSet

logger = get_logger(__name__)

DEPLOY_ACTIVITY_TITLE = "Email Template Deployed"


@dc.dataclass(frozen=True, slots=True)
class SyncSettings:
    """Optional knobs for a pipeline.

    Attributes
    ----------
    project_id
        Zoho Projects project that receives a deploy activity per success;
        activities are not logged when ``None``.
    module
        CRM module new templates are attached to.

    """

    project_id: str | None = None
    module: str = DEFAULT_TEMPLATE_MODULE


def duplicate_template_names(paths: typ.Iterable[str]) -> dict[str, list[str]]:
    """Return derived names shared by more than one path, with those paths."""
    by_name: dict[str, list[str]] = collections.defaultdict(list)
    for path in paths:
        by_name[derive_template_name(path)].append(path)
    return {name: grouped for name, grouped in by_name.items() if len(grouped) > 1}


class TemplateSyncPipeline:
    """Sequentially deploy each template in a change set."""

    def __init__(
        self,
        content_source: ContentSource,
        store: TemplateStore,
        *,
        activity_log: ActivityLog | None = None,
        settings: SyncSettings | None = None,
        event_logger: SyncEventLogger | None = None,
    ) -> None:
        """Bind the pipeline to its GitHub and Zoho collaborators."""
        self._source = content_source
        self._store = store
        self._activity_log = activity_log
        self._settings = settings or SyncSettings()
        self._event_logger = event_logger or SyncEventLogger()

    async def run(self, change_set: ChangeSet) -> SyncReport:
        """Process every path in *change_set* and return per-file outcomes.

        Raises
        ------
        ZohoAuthError
            If the Zoho token exchange fails.
        ZohoAPIError
            If a Zoho call cannot be completed at the transport level.

        """
        started_at = utcnow()
        self._event_logger.log_run_started(change_set)
        for name, paths in duplicate_template_names(change_set.paths).items():
            log_warning(
                logger,
                "Paths %s all map to template %r; the last one processed wins",
                ", ".join(paths),
                name,
            )

        outcomes: list[FileOutcome] = []
        for path in change_set.paths:
            outcomes.append(await self._sync_file(change_set, path))

        report = SyncReport(revision=change_set.revision, outcomes=tuple(outcomes))
        duration = utcnow() - started_at
        self._event_logger.log_run_completed(change_set, report, duration)
        return report

    async def _sync_file(self, change_set: ChangeSet, path: str) -> FileOutcome:
        raw = await self._source.fetch_file_at(
            change_set.owner, change_set.repo, path, change_set.revision
        )
        if raw is None:
            self._event_logger.log_file_skipped(change_set, path)
            return FileOutcome(path=path, status=FileStatus.SKIPPED)

        artifact = build_artifact(path, raw, module=self._settings.module)
        upsert = await upsert_template(self._store, artifact)
        result = upsert.result

        if not result.ok or result.value is None:
            outcome = FileOutcome(
                path=path,
                status=FileStatus.FAILED,
                template_name=artifact.name,
                warnings=artifact.warnings,
                error=result.error,
            )
            self._event_logger.log_file_failed(change_set, outcome)
            await self._comment(
                change_set, path, failure_comment(artifact, result.error)
            )
            return outcome

        status = (
            FileStatus.CREATED
            if upsert.action is UpsertAction.CREATE
            else FileStatus.UPDATED
        )
        outcome = FileOutcome(
            path=path,
            status=status,
            template_name=artifact.name,
            template_id=result.value.id,
            warnings=artifact.warnings,
        )
        self._event_logger.log_file_deployed(change_set, outcome)
        await self._record_activity(artifact)

        if should_announce(change_set.commit_message):
            await self._comment(
                change_set, path, success_comment(artifact, upsert.action)
            )
        else:
            log_info(
                logger,
                "Template %s deployed without a commit comment",
                artifact.name,
            )
        return outcome

    async def _record_activity(self, artifact: TemplateArtifact) -> None:
        project_id = self._settings.project_id
        if self._activity_log is None or project_id is None:
            return
        activity = ActivitySpec(
            title=DEPLOY_ACTIVITY_TITLE,
            description=(
                f'Template "{artifact.name}" auto-deployed to Zoho CRM '
                f"from {artifact.source_path}"
            ),
        )
        result = await self._activity_log.log_activity(project_id, activity)
        if not result.ok:
            log_warning(
                logger,
                "Could not log deploy activity for %s: %s",
                artifact.name,
                result.error,
            )

    async def _comment(self, change_set: ChangeSet, path: str, body: str) -> None:
        try:
            await self._source.post_commit_comment(
                change_set.owner, change_set.repo, change_set.revision, body
            )
        except GitHubAPIError as exc:
            self._event_logger.log_comment_failed(change_set, path, exc)


__all__ = [
    "DEPLOY_ACTIVITY_TITLE",
    "SyncSettings",
    "TemplateSyncPipeline",
    "duplicate_template_names",
]
