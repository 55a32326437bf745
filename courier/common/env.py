"""Environment parsing shared by subsystem configuration classes."""

from __future__ import annotations

import math
import os

HTTP_TIMEOUT_ENV = "COURIER_HTTP_TIMEOUT_S"
DEFAULT_HTTP_TIMEOUT_S = 20.0


def read_http_timeout(default: float = DEFAULT_HTTP_TIMEOUT_S) -> float:
    """Return the outbound HTTP timeout from ``COURIER_HTTP_TIMEOUT_S``.

    Raises
    ------
    ValueError
        If the variable is set to something other than a positive finite number.

    """
    raw = os.environ.get(HTTP_TIMEOUT_ENV)
    if raw is None:
        return default
    timeout = float(raw)
    if not math.isfinite(timeout) or timeout <= 0:
        msg = f"{HTTP_TIMEOUT_ENV} must be a positive finite number, got {raw!r}"
        raise ValueError(msg)
    return timeout


def read_optional(name: str) -> str | None:
    """Return the stripped value of *name*, or ``None`` when unset or blank."""
    value = os.environ.get(name, "").strip()
    return value or None
