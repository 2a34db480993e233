"""Enumerations shared by models, schemas and services."""

from enum import Enum


class ActorRole(str, Enum):
    PROVIDER = "provider"
    RECIPIENT = "recipient"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class OnboardingStatus(str, Enum):
    """Recipient admission state. Decided once, terminal afterwards."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReportStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class ReportField(str, Enum):
    """Ordered text sequences on a report."""

    SYMPTOMS = "symptoms"
    DIAGNOSIS = "diagnosis"
    TESTS_CONDUCTED = "tests_conducted"
    TREATMENT_PLAN = "treatment_plan"


FINAL_REPORT_STATUSES = (ReportStatus.CONFIRMED, ReportStatus.REJECTED)
