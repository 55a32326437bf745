"""Typed models describing template sync inputs and outcomes."""

from __future__ import annotations

import collections
import dataclasses as dc
import enum

from courier.common.slug import repo_slug


@dc.dataclass(frozen=True, slots=True)
class ChangeSet:
    """Template files touched by one push, pinned to the head revision.

    Attributes
    ----------
    paths
        Qualifying file paths in first-seen order, without duplicates.
    revision
        Commit SHA the files are fetched at and comments are posted on.
    owner
        Repository owner login.
    repo
        Repository name.
    commit_message
        Message of the head commit; drives success-comment visibility.

    """

    paths: tuple[str, ...]
    revision: str
    owner: str
    repo: str
    commit_message: str = ""

    @property
    def repo_slug(self) -> str:
        """Return the repository slug in ``owner/name`` form."""
        return repo_slug(self.owner, self.repo)


class UpsertAction(enum.StrEnum):
    """Which branch of the create-or-update decision was taken."""

    CREATE = "create"
    UPDATE = "update"


class FileStatus(enum.StrEnum):
    """Terminal state of one file in a sync run."""

    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dc.dataclass(frozen=True, slots=True)
class FileOutcome:
    """Result of syncing a single changed file."""

    path: str
    status: FileStatus
    template_name: str | None = None
    template_id: str | None = None
    warnings: tuple[str, ...] = ()
    error: str | None = None


@dc.dataclass(frozen=True, slots=True)
class SyncReport:
    """Per-file outcomes of one pipeline run, in processing order."""

    revision: str
    outcomes: tuple[FileOutcome, ...] = ()

    def count(self, status: FileStatus) -> int:
        """Return how many files ended in *status*."""
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    def counts(self) -> dict[str, int]:
        """Return a count for every :class:`FileStatus`, zeros included."""
        tally = collections.Counter(outcome.status for outcome in self.outcomes)
        return {status.value: tally.get(status, 0) for status in FileStatus}


__all__ = [
    "ChangeSet",
    "FileOutcome",
    "FileStatus",
    "SyncReport",
    "UpsertAction",
]
