"""Request models for Zoho Projects tasks and activities."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

DEFAULT_ACTIVITY_HOURS = "0.5"


@dc.dataclass(frozen=True, slots=True)
class TaskSpec:
    """A Zoho Projects task to create."""

    title: str
    description: str
    assignees: tuple[str, ...] = ()
    priority: str = "Medium"

    def to_payload(self) -> dict[str, typ.Any]:
        """Return the Zoho Projects request body."""
        return {
            "name": self.title,
            "description": self.description,
            "assignees": list(self.assignees),
            "priority": self.priority,
            "status": "Open",
        }


@dc.dataclass(frozen=True, slots=True)
class ActivitySpec:
    """A time-tracked activity logged against a Zoho Projects project."""

    title: str
    description: str
    hours: str = DEFAULT_ACTIVITY_HOURS

    def to_payload(self, date: str) -> dict[str, typ.Any]:
        """Return the Zoho Projects request body dated *date* (``YYYY-MM-DD``)."""
        return {
            "name": self.title,
            "description": self.description,
            "date": date,
            "hours": self.hours,
        }
