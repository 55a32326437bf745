"""Tagged success/failure results for remote calls.

Remote writes that fail for expected reasons (validation errors, quota,
missing records) return a :class:`RemoteResult` rather than raising, so a
caller walking a batch can record the failure and move on. Transport
failures still raise.

Usage
-----
>>> result = RemoteResult.success({"id": "42"})
>>> result.ok
True
>>> RemoteResult.failure("quota exceeded").error
'quota exceeded'

"""

from __future__ import annotations

import dataclasses as dc

__all__ = ["RemoteResult"]


@dc.dataclass(frozen=True, slots=True)
class RemoteResult[T]:
    """Outcome of a remote call that can fail without raising.

    Attributes
    ----------
    ok
        ``True`` when the call succeeded and ``value`` is populated.
    value
        Payload returned by the remote service on success.
    error
        Human-readable failure detail on failure.

    """

    ok: bool
    value: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, value: T) -> RemoteResult[T]:
        """Wrap a successful payload."""
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> RemoteResult[T]:
        """Wrap a failure detail."""
        return cls(ok=False, error=error)

    def unwrap(self) -> T:
        """Return the payload, raising ``ValueError`` for failures."""
        if not self.ok or self.value is None:
            msg = f"cannot unwrap failed result: {self.error}"
            raise ValueError(msg)
        return self.value
