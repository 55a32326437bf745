"""Structured lifecycle events for template sync runs.

Every event is a single log line of the form ``[event.type] key=value ...``
so runs can be followed and aggregated without a metrics backend.
"""

from __future__ import annotations

import enum
import typing as typ

from courier.logging import get_logger, log_error, log_info, log_warning

if typ.TYPE_CHECKING:
    import datetime as dt

    from .models import ChangeSet, FileOutcome, SyncReport

logger = get_logger(__name__)


class SyncEventType(enum.StrEnum):
    """Structured log event types for sync observability."""

    RUN_STARTED = "sync.run.started"
    FILE_SKIPPED = "sync.file.skipped"
    FILE_DEPLOYED = "sync.file.deployed"
    FILE_FAILED = "sync.file.failed"
    COMMENT_FAILED = "sync.comment.failed"
    RUN_COMPLETED = "sync.run.completed"


class SyncEventLogger:
    """Emit sync events through femtologging.

    Successful steps log at INFO, skipped files and failed comments at
    WARNING, and failed deployments at ERROR.
    """

    def log_run_started(self, change_set: ChangeSet) -> None:
        """Log the start of a run."""
        log_info(
            logger,
            "[%s] repo_slug=%s revision=%s files=%d",
            SyncEventType.RUN_STARTED,
            change_set.repo_slug,
            change_set.revision,
            len(change_set.paths),
        )

    def log_file_skipped(self, change_set: ChangeSet, path: str) -> None:
        """Log a file that could not be fetched at the run's revision."""
        log_warning(
            logger,
            "[%s] repo_slug=%s revision=%s path=%s reason=unavailable",
            SyncEventType.FILE_SKIPPED,
            change_set.repo_slug,
            change_set.revision,
            path,
        )

    def log_file_deployed(self, change_set: ChangeSet, outcome: FileOutcome) -> None:
        """Log a successful create or update."""
        log_info(
            logger,
            "[%s] repo_slug=%s path=%s template_name=%s template_id=%s "
            "status=%s warnings=%d",
            SyncEventType.FILE_DEPLOYED,
            change_set.repo_slug,
            outcome.path,
            outcome.template_name,
            outcome.template_id,
            outcome.status,
            len(outcome.warnings),
        )

    def log_file_failed(self, change_set: ChangeSet, outcome: FileOutcome) -> None:
        """Log a deployment the template store rejected."""
        log_error(
            logger,
            "[%s] repo_slug=%s path=%s template_name=%s error=%s",
            SyncEventType.FILE_FAILED,
            change_set.repo_slug,
            outcome.path,
            outcome.template_name,
            outcome.error,
        )

    def log_comment_failed(
        self, change_set: ChangeSet, path: str, error: BaseException
    ) -> None:
        """Log a result comment that GitHub did not accept."""
        log_warning(
            logger,
            "[%s] repo_slug=%s revision=%s path=%s error_type=%s error_message=%s",
            SyncEventType.COMMENT_FAILED,
            change_set.repo_slug,
            change_set.revision,
            path,
            type(error).__name__,
            str(error),
        )

    def log_run_completed(
        self,
        change_set: ChangeSet,
        report: SyncReport,
        duration: dt.timedelta,
    ) -> None:
        """Log run completion with per-status counts."""
        counts = report.counts()
        log_info(
            logger,
            "[%s] repo_slug=%s revision=%s duration_seconds=%.3f "
            "created=%d updated=%d skipped=%d failed=%d",
            SyncEventType.RUN_COMPLETED,
            change_set.repo_slug,
            change_set.revision,
            duration.total_seconds(),
            counts["created"],
            counts["updated"],
            counts["skipped"],
            counts["failed"],
        )


__all__ = ["SyncEventLogger", "SyncEventType"]
