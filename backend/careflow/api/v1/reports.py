"""Report lifecycle endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from careflow.core.dependencies import get_current_session, get_report_service
from careflow.models.enums import ReportField, ReportStatus
from careflow.schemas.auth import AuthSession
from careflow.schemas.report import (
    ItemAdd,
    RejectRequest,
    ReportCreate,
    ReportListResponse,
    ReportOut,
    ReportSnapshot,
    ReportUpdate,
    TransitionRequest,
)
from careflow.services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])


def _listing(reports) -> ReportListResponse:
    return ReportListResponse(
        count=len(reports), reports=[ReportOut.model_validate(r) for r in reports]
    )


# ============================================================
# LISTS
# ============================================================


@router.get("", response_model=ReportListResponse)
async def list_reports(
    search: Optional[str] = Query(
        None, description="Matches recipient name, report ID or doctor name"
    ),
    status: Optional[ReportStatus] = Query(None),
    session: AuthSession = Depends(get_current_session),
    reports: ReportService = Depends(get_report_service),
):
    """
    Reports visible to the caller.
    Recipients see their own; providers see what they reviewed plus the queue.
    """
    visible = reports.reports_for(session)
    return _listing(reports.search(visible, term=search, status=status))


@router.get("/pending", response_model=ReportListResponse)
async def pending_reports(
    session: AuthSession = Depends(get_current_session),
    reports: ReportService = Depends(get_report_service),
):
    """Provider review queue."""
    return _listing(reports.pending_reports(session))


# ============================================================
# SINGLE REPORT
# ============================================================


@router.post("", response_model=ReportOut, status_code=201)
async def create_report(
    payload: ReportCreate,
    session: AuthSession = Depends(get_current_session),
    reports: ReportService = Depends(get_report_service),
):
    report = reports.create(
        session,
        report_date=payload.report_date,
        symptoms=payload.symptoms,
        diagnosis=payload.diagnosis,
        tests_conducted=payload.tests_conducted,
        treatment_plan=payload.treatment_plan,
        additional_notes=payload.additional_notes,
        submit=payload.submit,
    )
    return ReportOut.model_validate(report)


@router.get("/{report_id}", response_model=ReportOut)
async def get_report(
    report_id: str,
    session: AuthSession = Depends(get_current_session),
    reports: ReportService = Depends(get_report_service),
):
    return ReportOut.model_validate(reports.get(session, report_id))


@router.put("/{report_id}", response_model=ReportOut)
async def update_report(
    report_id: str,
    payload: ReportUpdate,
    session: AuthSession = Depends(get_current_session),
    reports: ReportService = Depends(get_report_service),
):
    report = reports.update(
        session,
        report_id,
        payload.expected_status,
        report_date=payload.report_date,
        symptoms=payload.symptoms,
        diagnosis=payload.diagnosis,
        tests_conducted=payload.tests_conducted,
        treatment_plan=payload.treatment_plan,
        additional_notes=payload.additional_notes,
    )
    return ReportOut.model_validate(report)


@router.get("/{report_id}/snapshot", response_model=ReportSnapshot)
async def report_snapshot(
    report_id: str,
    session: AuthSession = Depends(get_current_session),
    reports: ReportService = Depends(get_report_service),
):
    """Read-only copy for PDF export and the assistant."""
    return reports.snapshot(session, report_id)


# ============================================================
# ITEMS
# ============================================================


@router.post("/{report_id}/items/{field}", response_model=ReportOut)
async def add_item(
    report_id: str,
    field: ReportField,
    payload: ItemAdd,
    session: AuthSession = Depends(get_current_session),
    reports: ReportService = Depends(get_report_service),
):
    report = reports.add_item(
        session, report_id, field, payload.value, payload.expected_status
    )
    return ReportOut.model_validate(report)


@router.delete("/{report_id}/items/{field}/{index}", response_model=ReportOut)
async def remove_item(
    report_id: str,
    field: ReportField,
    index: int,
    expected_status: ReportStatus = Query(...),
    session: AuthSession = Depends(get_current_session),
    reports: ReportService = Depends(get_report_service),
):
    report = reports.remove_item(session, report_id, field, index, expected_status)
    return ReportOut.model_validate(report)


# ============================================================
# TRANSITIONS
# ============================================================


@router.post("/{report_id}/submit", response_model=ReportOut)
async def submit_report(
    report_id: str,
    payload: TransitionRequest,
    session: AuthSession = Depends(get_current_session),
    reports: ReportService = Depends(get_report_service),
):
    return ReportOut.model_validate(
        reports.submit(session, report_id, payload.expected_status)
    )


@router.post("/{report_id}/confirm", response_model=ReportOut)
async def confirm_report(
    report_id: str,
    payload: TransitionRequest,
    session: AuthSession = Depends(get_current_session),
    reports: ReportService = Depends(get_report_service),
):
    return ReportOut.model_validate(
        reports.confirm(session, report_id, payload.expected_status)
    )


@router.post("/{report_id}/reject", response_model=ReportOut)
async def reject_report(
    report_id: str,
    payload: RejectRequest,
    session: AuthSession = Depends(get_current_session),
    reports: ReportService = Depends(get_report_service),
):
    report = reports.reject(
        session, report_id, payload.expected_status, reason=payload.reason
    )
    return ReportOut.model_validate(report)
