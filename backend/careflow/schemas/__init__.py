"""
Schemas package initialization.
"""

from careflow.schemas.common import HealthCheck, ErrorResponse
from careflow.schemas.auth import (
    AuthSession,
    LoginRequest,
    LoginResponse,
    ProviderRegistration,
    RecipientRegistration,
    ProviderOut,
    RecipientOut,
    ProviderRegistrationResponse,
    RecipientRegistrationResponse,
)
from careflow.schemas.report import (
    ReportCreate,
    ReportUpdate,
    ItemAdd,
    TransitionRequest,
    RejectRequest,
    ReportOut,
    ReportListResponse,
    ReportSnapshot,
    ProviderDashboard,
    RecipientDashboard,
)

__all__ = [
    "HealthCheck",
    "ErrorResponse",
    "AuthSession",
    "LoginRequest",
    "LoginResponse",
    "ProviderRegistration",
    "RecipientRegistration",
    "ProviderOut",
    "RecipientOut",
    "ProviderRegistrationResponse",
    "RecipientRegistrationResponse",
    "ReportCreate",
    "ReportUpdate",
    "ItemAdd",
    "TransitionRequest",
    "RejectRequest",
    "ReportOut",
    "ReportListResponse",
    "ReportSnapshot",
    "ProviderDashboard",
    "RecipientDashboard",
]
