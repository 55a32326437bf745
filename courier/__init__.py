"""Courier relays GitHub and Zoho events and syncs email templates to Zoho CRM."""

from __future__ import annotations

__all__: list[str] = []
