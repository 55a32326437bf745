"""Zoho CRM template store, Projects client and OAuth token provider."""

from __future__ import annotations

from .auth import AccessToken, AccessTokenSource, ZohoTokenProvider
from .client import ActivityLog, TemplateStore, TemplateWriteResult, ZohoClient
from .config import ZohoConfig
from .errors import ZohoAPIError, ZohoAuthError, ZohoConfigError, ZohoError
from .models import ActivitySpec, TaskSpec

__all__ = [
    "AccessToken",
    "AccessTokenSource",
    "ActivityLog",
    "ActivitySpec",
    "TaskSpec",
    "TemplateStore",
    "TemplateWriteResult",
    "ZohoAPIError",
    "ZohoAuthError",
    "ZohoClient",
    "ZohoConfig",
    "ZohoConfigError",
    "ZohoError",
    "ZohoTokenProvider",
]
