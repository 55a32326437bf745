"""Template sync pipeline: change sets in, Zoho templates and comments out."""

from __future__ import annotations

from .models import ChangeSet, FileOutcome, FileStatus, SyncReport, UpsertAction
from .observability import SyncEventLogger, SyncEventType
from .pipeline import SyncSettings, TemplateSyncPipeline
from .upsert import UpsertOutcome, upsert_template

__all__ = [
    "ChangeSet",
    "FileOutcome",
    "FileStatus",
    "SyncEventLogger",
    "SyncEventType",
    "SyncReport",
    "SyncSettings",
    "TemplateSyncPipeline",
    "UpsertAction",
    "UpsertOutcome",
    "upsert_template",
]
