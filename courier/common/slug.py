"""Repository slug utilities.

GitHub identifies repositories as ``owner/name``. Webhook payloads carry the
slug as ``repository.full_name`` and the Zoho receiver reads it from
``COURIER_GITHUB_REPOSITORY``; both are parsed with these helpers rather
than ``pathlib`` because slugs are not filesystem paths.
"""

from __future__ import annotations


def repo_slug(owner: str, name: str) -> str:
    """Build a repository slug from owner and name.

    Examples
    --------
    >>> repo_slug("acme", "mailers")
    'acme/mailers'

    """
    return f"{owner}/{name}"


def parse_repo_slug(slug: str) -> tuple[str, str]:
    """Parse a repository slug into ``(owner, name)``.

    Raises
    ------
    ValueError
        If the slug is not in ``owner/name`` format.

    Examples
    --------
    >>> parse_repo_slug("acme/mailers")
    ('acme', 'mailers')

    """
    owner, sep, name = slug.strip().partition("/")
    if not sep or not owner or not name or "/" in name:
        msg = f"Invalid repository slug: expected 'owner/name', got {slug!r}"
        raise ValueError(msg)
    return owner, name
