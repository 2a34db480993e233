"""Database models."""

from .base import Base
from .enums import (
    ActorRole,
    Gender,
    OnboardingStatus,
    ReportStatus,
    ReportField,
    FINAL_REPORT_STATUSES,
)
from .actor import Actor, Provider, Recipient
from .report import Report

__all__ = [
    "Base",
    # Enums
    "ActorRole",
    "Gender",
    "OnboardingStatus",
    "ReportStatus",
    "ReportField",
    "FINAL_REPORT_STATUSES",
    # Identity
    "Actor",
    "Provider",
    "Recipient",
    # Reports
    "Report",
]
