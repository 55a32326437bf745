"""Email template sanitisation, naming and models."""

from __future__ import annotations

from .models import RemoteTemplate, TemplateArtifact
from .naming import build_artifact, derive_template_name
from .sanitizer import SanitizedTemplate, clean_html, compatibility_warnings, sanitize

__all__ = [
    "RemoteTemplate",
    "SanitizedTemplate",
    "TemplateArtifact",
    "build_artifact",
    "clean_html",
    "compatibility_warnings",
    "derive_template_name",
    "sanitize",
]
