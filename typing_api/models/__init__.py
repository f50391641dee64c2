from typing_api.models.user import User
from typing_api.models.user_settings import UserSettings
from typing_api.models.preset import TestPreset
from typing_api.models.result import TestResult
from typing_api.models.audit_log import AuditLog

__all__ = [
    "User",
    "UserSettings",
    "TestPreset",
    "TestResult",
    "AuditLog",
]
