"""Medical report model."""

from sqlalchemy import (
    Column,
    String,
    Integer,
    Date,
    Boolean,
    Text,
    JSON,
    ForeignKey,
    Index,
)
from .base import Base, TimestampMixin
from .enums import ReportStatus


class Report(Base, TimestampMixin):
    """
    One clinical document authored by a recipient and reviewed by a provider.

    Sequence columns hold JSON lists of trimmed, non-blank strings. They are
    always reassigned as new lists so the ORM sees the change.
    """

    __tablename__ = "reports"

    id = Column(String, primary_key=True)  # RPT-XXXXXXXX
    recipient_id = Column(
        String, ForeignKey("actors.id", ondelete="CASCADE"), nullable=False
    )
    recipient_name = Column(String, nullable=False)

    # Set only by confirm/reject
    doctor_id = Column(String, ForeignKey("actors.id"), nullable=True)
    doctor_name = Column(String, nullable=True)

    report_date = Column(Date, nullable=False)

    symptoms = Column(JSON, nullable=False, default=list)
    diagnosis = Column(JSON, nullable=False, default=list)
    tests_conducted = Column(JSON, nullable=False, default=list)
    treatment_plan = Column(JSON, nullable=False, default=list)
    additional_notes = Column(Text, nullable=False, default="")
    rejection_reason = Column(Text, nullable=True)

    status = Column(
        String, nullable=False, default=ReportStatus.DRAFT.value
    )  # draft, submitted, confirmed, rejected
    editable = Column(Boolean, nullable=False, default=True)

    # Optimistic lock: a stale flush raises StaleDataError
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index("idx_report_recipient_id", "recipient_id"),
        Index("idx_report_status", "status"),
        Index("idx_report_doctor_id", "doctor_id"),
    )
