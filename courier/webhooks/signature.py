"""HMAC signature verification for GitHub webhook deliveries.

GitHub signs each delivery with HMAC-SHA256 over the raw request body and
sends the hex digest in ``X-Hub-Signature-256`` as ``sha256=<hex>``. The
body must be verified exactly as received; re-serialising parsed JSON
changes the bytes and breaks verification.
"""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_PREFIX = "sha256="


def compute_signature(body: bytes, secret: str) -> str:
    """Return the ``sha256=``-prefixed signature GitHub would send for *body*.

    Examples
    --------
    >>> compute_signature(b"{}", "s3cret")[:7]
    'sha256='

    """
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(body: bytes, signature: str | None, secret: str) -> bool:
    """Return whether *signature* matches *body* under *secret*.

    The comparison runs in constant time. A missing signature or an empty
    secret never verifies.
    """
    if not signature or not secret:
        return False
    expected = compute_signature(body, secret)
    return hmac.compare_digest(
        expected.encode("utf-8"),
        signature.strip().encode("utf-8"),
    )


def verify_bearer_token(authorization: str | None, token: str) -> bool:
    """Return whether an ``Authorization`` header carries ``Bearer <token>``."""
    if not authorization or not token:
        return False
    return hmac.compare_digest(
        authorization.strip().encode("utf-8"),
        f"Bearer {token}".encode(),
    )
