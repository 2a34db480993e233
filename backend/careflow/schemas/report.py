"""
Report request/response schemas.
"""

from datetime import date, datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from careflow.models.enums import ReportStatus, FINAL_REPORT_STATUSES
from careflow.utils.text import clean_entries

_SEQUENCE_FIELDS = ("symptoms", "diagnosis", "tests_conducted", "treatment_plan")


class ReportCreate(BaseModel):
    """New report from a recipient. ``submit`` files it for review right away."""

    report_date: Optional[date] = None
    symptoms: List[str] = []
    diagnosis: List[str] = []
    tests_conducted: List[str] = []
    treatment_plan: List[str] = []
    additional_notes: str = ""
    submit: bool = False

    @field_validator(*_SEQUENCE_FIELDS)
    @classmethod
    def drop_blank_entries(cls, v: List[str]) -> List[str]:
        return clean_entries(v)


class ReportUpdate(BaseModel):
    """Whole-report save. Omitted fields are left alone."""

    expected_status: ReportStatus
    report_date: Optional[date] = None
    symptoms: Optional[List[str]] = None
    diagnosis: Optional[List[str]] = None
    tests_conducted: Optional[List[str]] = None
    treatment_plan: Optional[List[str]] = None
    additional_notes: Optional[str] = None

    @field_validator(*_SEQUENCE_FIELDS)
    @classmethod
    def drop_blank_entries(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return None if v is None else clean_entries(v)


class ItemAdd(BaseModel):
    value: str
    expected_status: ReportStatus


class TransitionRequest(BaseModel):
    expected_status: ReportStatus


class RejectRequest(TransitionRequest):
    reason: Optional[str] = None


class ReportOut(BaseModel):
    id: str
    recipient_id: str
    recipient_name: str
    doctor_id: Optional[str] = None
    doctor_name: Optional[str] = None
    report_date: date
    symptoms: List[str]
    diagnosis: List[str]
    tests_conducted: List[str]
    treatment_plan: List[str]
    additional_notes: str
    rejection_reason: Optional[str] = None
    status: ReportStatus
    editable: bool
    version: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReportListResponse(BaseModel):
    count: int
    reports: List[ReportOut]


class ReportSnapshot(BaseModel):
    """
    Read-only copy of a report for the rendering/export collaborator.
    """

    id: str
    recipient_id: str
    recipient_name: str
    doctor_id: Optional[str] = None
    doctor_name: Optional[str] = None
    report_date: date
    symptoms: List[str]
    diagnosis: List[str]
    tests_conducted: List[str]
    treatment_plan: List[str]
    additional_notes: str
    rejection_reason: Optional[str] = None
    status: ReportStatus
    finalized: bool
    taken_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        frozen = True

    @classmethod
    def from_report(cls, report) -> "ReportSnapshot":
        status = ReportStatus(report.status)
        return cls(
            id=report.id,
            recipient_id=report.recipient_id,
            recipient_name=report.recipient_name,
            doctor_id=report.doctor_id,
            doctor_name=report.doctor_name,
            report_date=report.report_date,
            symptoms=list(report.symptoms),
            diagnosis=list(report.diagnosis),
            tests_conducted=list(report.tests_conducted),
            treatment_plan=list(report.treatment_plan),
            additional_notes=report.additional_notes,
            rejection_reason=report.rejection_reason,
            status=status,
            finalized=status in FINAL_REPORT_STATUSES,
        )


class ProviderDashboard(BaseModel):
    pending_recipients: int
    approved_recipients: int
    rejected_recipients: int
    total_recipients: int
    pending_reports: int


class RecipientDashboard(BaseModel):
    onboarding_status: Optional[str] = None
    total_reports: int
    by_status: Dict[str, int]
