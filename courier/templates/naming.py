"""Derive Zoho template identity from repository file paths.

The template name is the de-facto idempotency key: every deployment of
``email-templates/generated/welcome-email.html`` must map to the same
``Welcome Email`` record, so derivation depends only on the file's basename.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from .models import DEFAULT_TEMPLATE_MODULE, TemplateArtifact
from .sanitizer import sanitize

__all__ = [
    "HTML_SUFFIX",
    "build_artifact",
    "derive_description",
    "derive_subject",
    "derive_template_name",
]

HTML_SUFFIX = ".html"

_WORD_START = re.compile(r"\b\w", re.ASCII)


def derive_template_name(path: str) -> str:
    """Return the human-readable template name for *path*.

    Examples
    --------
    >>> derive_template_name("email-templates/generated/quarterly-report.html")
    'Quarterly Report'

    """
    stem = PurePosixPath(path).name
    stem = stem.removesuffix(HTML_SUFFIX)
    spaced = stem.replace("-", " ")
    return _WORD_START.sub(lambda match: match.group(0).upper(), spaced)


def derive_subject(name: str) -> str:
    """Return the default subject line for a template called *name*."""
    return f"Template: {name}"


def derive_description(path: str) -> str:
    """Return the template description pointing back at its source file."""
    return f"Auto-generated from GitHub: {path}"


def build_artifact(
    path: str,
    raw: bytes | str,
    *,
    module: str = DEFAULT_TEMPLATE_MODULE,
) -> TemplateArtifact:
    """Sanitise fetched file content and wrap it as a :class:`TemplateArtifact`."""
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    sanitized = sanitize(text)
    name = derive_template_name(path)
    return TemplateArtifact(
        name=name,
        subject=derive_subject(name),
        content=sanitized.html,
        description=derive_description(path),
        source_path=path,
        module=module,
        warnings=sanitized.warnings,
    )
