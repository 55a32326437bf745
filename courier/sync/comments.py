"""Commit comment bodies posted after a template deployment."""

from __future__ import annotations

import typing as typ

from .models import UpsertAction

if typ.TYPE_CHECKING:
    from courier.templates.models import TemplateArtifact

# Commit messages containing any of these announce the deployment publicly.
ANNOUNCED_PREFIXES: tuple[str, ...] = ("feat:", "add:", "update:")


def should_announce(commit_message: str) -> bool:
    """Return whether a successful deploy should be commented on."""
    return any(prefix in commit_message for prefix in ANNOUNCED_PREFIXES)


def success_comment(artifact: TemplateArtifact, action: UpsertAction) -> str:
    """Build the comment announcing a successful deployment.

    The wording names the branch taken: ``created`` for a new template,
    ``updated`` when one with the same name already existed.
    """
    verb = "created" if action is UpsertAction.CREATE else "updated"
    header = (
        f'📧 **Email Template Deployed**: "{artifact.name}" has been '
        f"automatically {verb} in Zoho CRM"
    )
    if artifact.warnings:
        footer = f"⚠️ **Warnings**: {', '.join(artifact.warnings)}"
    else:
        footer = "✅ No compatibility issues detected"
    return f"{header}\n\n{footer}"


def failure_comment(artifact: TemplateArtifact, error: str | None) -> str:
    """Build the comment reporting a failed deployment."""
    header = (
        f'❌ **Email Template Deployment Failed**: "{artifact.name}" could not '
        "be deployed to Zoho CRM"
    )
    return f"{header}\n\n**Error**: {error or 'unknown error'}"


def task_status_comment(status: str) -> str:
    """Build the issue comment mirroring a Zoho Projects task status change."""
    return f'📋 **Zoho Update**: Task status changed to "{status}" in Zoho Projects'
