"""Zoho CRM compatibility clean-up for generated HTML email templates.

Zoho renders templates inside its own editor, which rejects scripts, forms
and frames and only honours inline CSS. :func:`clean_html` strips those
fragments and normalises the document head; :func:`compatibility_warnings`
flags constructs that survive cleaning but are unlikely to render.

Both functions are pure: the same input always yields the same output and a
second pass over cleaned markup changes nothing.

Usage
-----
>>> result = sanitize("<head></head><body><script>x</script>Hi</body>")
>>> "<script" in result.html
False
>>> result.warnings
()

"""

from __future__ import annotations

import dataclasses as dc
import re

__all__ = [
    "DOCTYPE",
    "VIEWPORT_META",
    "SanitizedTemplate",
    "clean_html",
    "compatibility_warnings",
    "sanitize",
]

DOCTYPE = "<!DOCTYPE html>"
VIEWPORT_META = (
    '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
)

EXTERNAL_CSS_URL_WARNING = "External URLs found in CSS - may not work in Zoho"
JAVASCRIPT_URL_WARNING = "JavaScript URLs found - not allowed in Zoho"


def _paired_tag(tag: str) -> re.Pattern[str]:
    """Match ``<tag ...>...</tag>`` without crossing an earlier closing tag."""
    return re.compile(
        rf"<{tag}\b[^<]*(?:(?!</{tag}>)<[^<]*)*</{tag}>",
        re.IGNORECASE,
    )


# Applied in order, one pass each.
_STRIPPED_FRAGMENTS: tuple[re.Pattern[str], ...] = (
    _paired_tag("script"),
    re.compile(r'<link[^>]*rel="stylesheet"[^>]*>', re.IGNORECASE),
    _paired_tag("style"),
    _paired_tag("form"),
    _paired_tag("iframe"),
)

_WARNING_CHECKS: tuple[tuple[str, str], ...] = (
    ("url(http", EXTERNAL_CSS_URL_WARNING),
    ("javascript:", JAVASCRIPT_URL_WARNING),
)


@dc.dataclass(frozen=True, slots=True)
class SanitizedTemplate:
    """Cleaned markup together with its advisory warnings."""

    html: str
    warnings: tuple[str, ...] = ()


def clean_html(raw_html: str) -> str:
    """Return *raw_html* with Zoho-incompatible fragments removed.

    Scripts, external stylesheet links, ``<style>`` blocks, forms and
    iframes are removed. A ``<!DOCTYPE html>`` declaration is prepended when
    missing, and a mobile viewport meta tag is inserted after the first
    ``<head>`` when the word ``viewport`` does not occur anywhere in the
    document.
    """
    cleaned = raw_html
    for pattern in _STRIPPED_FRAGMENTS:
        cleaned = pattern.sub("", cleaned)

    if DOCTYPE not in cleaned:
        cleaned = f"{DOCTYPE}\n{cleaned}"

    if "viewport" not in cleaned:
        cleaned = cleaned.replace("<head>", f"<head>\n    {VIEWPORT_META}", 1)

    return cleaned


def compatibility_warnings(html: str) -> list[str]:
    """Return advisory warnings for constructs Zoho is likely to drop.

    These checks never block a deployment.
    """
    return [message for needle, message in _WARNING_CHECKS if needle in html]


def sanitize(raw_html: str) -> SanitizedTemplate:
    """Clean *raw_html* and collect warnings against the cleaned result."""
    cleaned = clean_html(raw_html)
    return SanitizedTemplate(
        html=cleaned,
        warnings=tuple(compatibility_warnings(cleaned)),
    )
