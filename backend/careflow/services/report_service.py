"""
Report Lifecycle Engine

Report lifecycle:
  DRAFT → SUBMITTED → CONFIRMED
                    ↘ REJECTED

Recipients author reports and submit them; providers review submitted
reports and either confirm or reject them. Confirming or rejecting assigns
the reviewing provider and locks the report for good.

Concurrency:
  Every mutating call carries the status the caller last saw. A mismatch
  fails with InvalidStateTransition instead of overwriting someone else's
  decision. Reports also carry a version column, so two writers that both
  pass that check still cannot both commit.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from careflow.core.config import Settings
from careflow.core.exceptions import (
    IndexOutOfRange,
    InvalidStateTransition,
    ReportNotFound,
)
from careflow.models import ActorRole, Report, ReportField, ReportStatus
from careflow.schemas.auth import AuthSession
from careflow.schemas.report import ReportSnapshot
from careflow.services.access_policy import Action, action_for_field, authorize
from careflow.services.identity_store import IdentityStore
from careflow.utils.identifiers import generate_report_id
from careflow.utils.text import clean_entries, clean_entry, matches_term

logger = logging.getLogger(__name__)


class ReportService:
    """Creates, edits and moves reports through their lifecycle."""

    def __init__(self, db: Session, identity: IdentityStore, settings: Settings):
        self.db = db
        self.identity = identity
        self.settings = settings

    # ============================================================
    # CREATION
    # ============================================================

    def create(
        self,
        actor: AuthSession,
        report_date: Optional[date] = None,
        symptoms: Iterable[str] = (),
        diagnosis: Iterable[str] = (),
        tests_conducted: Iterable[str] = (),
        treatment_plan: Iterable[str] = (),
        additional_notes: str = "",
        submit: bool = False,
    ) -> Report:
        """
        Start a new draft owned by the calling recipient.

        Args:
            actor: Session of an approved recipient
            report_date: Defaults to today
            symptoms, diagnosis, tests_conducted, treatment_plan: Initial
                entries; blanks are dropped. A recipient cannot author a
                diagnosis, so any non-blank diagnosis entry is refused.
            additional_notes: Free text
            submit: File the report for review straight away

        Returns:
            The new report (draft, or submitted when ``submit`` is set)
        """
        authorize(actor, Action.CREATE_REPORT)
        diagnosis = clean_entries(diagnosis)
        if diagnosis:
            authorize(actor, Action.EDIT_DIAGNOSIS)

        recipient = self.identity.lookup(actor.actor_id, ActorRole.RECIPIENT)
        report = Report(
            id=generate_report_id(),
            recipient_id=recipient.id,
            recipient_name=recipient.name,
            report_date=report_date or date.today(),
            symptoms=clean_entries(symptoms),
            diagnosis=diagnosis,
            tests_conducted=clean_entries(tests_conducted),
            treatment_plan=clean_entries(treatment_plan),
            additional_notes=additional_notes or "",
            status=ReportStatus.DRAFT.value,
            editable=True,
        )
        self.db.add(report)
        self._commit(report)
        logger.info(f"Report {report.id} created by {actor.actor_id}")

        if submit:
            return self.submit(actor, report.id, expected_status=ReportStatus.DRAFT)
        return report

    # ============================================================
    # READS
    # ============================================================

    def get(self, actor: AuthSession, report_id: str) -> Report:
        report = self._load(report_id)
        authorize(actor, Action.VIEW_REPORT, report)
        return report

    def snapshot(self, actor: AuthSession, report_id: str) -> ReportSnapshot:
        """Immutable copy handed to rendering/export."""
        return ReportSnapshot.from_report(self.get(actor, report_id))

    def reports_for_recipient(
        self, actor: AuthSession, recipient_id: str
    ) -> List[Report]:
        """All reports owned by a recipient, newest first."""
        if actor.role == ActorRole.RECIPIENT and actor.actor_id != recipient_id:
            authorize(actor, Action.VIEW_RECIPIENTS)
        return (
            self.db.query(Report)
            .filter(Report.recipient_id == recipient_id)
            .order_by(Report.created_at.desc())
            .all()
        )

    def reports_for_provider(
        self, actor: AuthSession, provider_id: str
    ) -> List[Report]:
        """
        Reports the provider reviewed plus every report awaiting review.
        Submitted reports are visible to any provider, assigned or not.
        """
        authorize(actor, Action.VIEW_REVIEW_QUEUE)
        return (
            self.db.query(Report)
            .filter(
                or_(
                    Report.doctor_id == provider_id,
                    Report.status == ReportStatus.SUBMITTED.value,
                )
            )
            .order_by(Report.created_at.desc())
            .all()
        )

    def pending_reports(self, actor: AuthSession) -> List[Report]:
        """Provider review queue: every submitted report."""
        authorize(actor, Action.VIEW_REVIEW_QUEUE)
        return (
            self.db.query(Report)
            .filter(Report.status == ReportStatus.SUBMITTED.value)
            .order_by(Report.created_at.asc())
            .all()
        )

    def reports_for(self, actor: AuthSession) -> List[Report]:
        """The caller's own list: own reports, or the provider's view."""
        if actor.role == ActorRole.PROVIDER:
            return self.reports_for_provider(actor, actor.actor_id)
        return self.reports_for_recipient(actor, actor.actor_id)

    @staticmethod
    def search(
        reports: Iterable[Report],
        term: Optional[str] = None,
        status: Optional[ReportStatus] = None,
    ) -> List[Report]:
        """
        Filter by a free-text term (recipient name, report ID or doctor name,
        case-insensitive) and optionally by status.
        """
        term = (term or "").strip()
        results = []
        for report in reports:
            if status is not None and report.status != ReportStatus(status).value:
                continue
            if term and not matches_term(
                term, report.recipient_name, report.id, report.doctor_name
            ):
                continue
            results.append(report)
        return results

    def count_by_status(self, recipient_id: Optional[str] = None) -> dict:
        counts = {status.value: 0 for status in ReportStatus}
        query = self.db.query(Report.status)
        if recipient_id is not None:
            query = query.filter(Report.recipient_id == recipient_id)
        for (status,) in query.all():
            counts[status] = counts.get(status, 0) + 1
        return counts

    # ============================================================
    # FIELD EDITS
    # ============================================================

    def add_item(
        self,
        actor: AuthSession,
        report_id: str,
        field: ReportField,
        value: str,
        expected_status: ReportStatus,
    ) -> Report:
        """
        Append one entry to a sequence field.

        Blank or whitespace-only input changes nothing and the report is
        returned as-is.
        """
        field = ReportField(field)
        report = self._load(report_id)
        authorize(actor, action_for_field(field), report)
        self._check_expected(report, expected_status)

        entry = clean_entry(value)
        if entry is None:
            logger.debug(f"Ignored blank {field.value} entry on {report_id}")
            return report

        setattr(report, field.value, [*getattr(report, field.value), entry])
        return self._commit(report)

    def remove_item(
        self,
        actor: AuthSession,
        report_id: str,
        field: ReportField,
        index: int,
        expected_status: ReportStatus,
    ) -> Report:
        """
        Remove the entry at ``index`` from a sequence field.

        Raises:
            IndexOutOfRange: no entry at that position (e.g. already removed)
        """
        field = ReportField(field)
        report = self._load(report_id)
        authorize(actor, action_for_field(field), report)
        self._check_expected(report, expected_status)

        items = list(getattr(report, field.value))
        if index < 0 or index >= len(items):
            raise IndexOutOfRange(
                f"{field.value} has {len(items)} entries; no index {index}"
            )
        del items[index]
        setattr(report, field.value, items)
        return self._commit(report)

    def update(
        self,
        actor: AuthSession,
        report_id: str,
        expected_status: ReportStatus,
        report_date: Optional[date] = None,
        symptoms: Optional[Iterable[str]] = None,
        diagnosis: Optional[Iterable[str]] = None,
        tests_conducted: Optional[Iterable[str]] = None,
        treatment_plan: Optional[Iterable[str]] = None,
        additional_notes: Optional[str] = None,
    ) -> Report:
        """
        Save several fields at once. ``None`` leaves a field untouched.

        Each field that actually changes is checked against the policy before
        anything is written, so a refused field leaves the whole report as it
        was. A locked report refuses the call whenever any field is supplied,
        even if nothing would change.
        """
        report = self._load(report_id)
        authorize(actor, Action.VIEW_REPORT, report)

        changes = {}
        sequences = {
            ReportField.SYMPTOMS: symptoms,
            ReportField.DIAGNOSIS: diagnosis,
            ReportField.TESTS_CONDUCTED: tests_conducted,
            ReportField.TREATMENT_PLAN: treatment_plan,
        }
        for field, values in sequences.items():
            if values is None:
                continue
            cleaned = clean_entries(values)
            if cleaned != list(getattr(report, field.value)):
                authorize(actor, action_for_field(field), report)
                changes[field.value] = cleaned

        if additional_notes is not None and additional_notes != report.additional_notes:
            authorize(actor, Action.EDIT_NOTES, report)
            changes["additional_notes"] = additional_notes

        if report_date is not None and report_date != report.report_date:
            authorize(actor, Action.EDIT_REPORT_DATE, report)
            changes["report_date"] = report_date

        supplied = (
            report_date,
            additional_notes,
            *sequences.values(),
        )
        if not report.editable and any(value is not None for value in supplied):
            raise InvalidStateTransition(
                f"Report {report_id} is {report.status} and locked"
            )

        self._check_expected(report, expected_status)
        if not changes:
            return report

        for name, value in changes.items():
            setattr(report, name, value)
        self._commit(report)
        logger.info(
            f"Report {report_id} updated by {actor.actor_id}: {sorted(changes)}"
        )
        return report

    def update_notes(
        self,
        actor: AuthSession,
        report_id: str,
        notes: str,
        expected_status: ReportStatus,
    ) -> Report:
        return self.update(
            actor, report_id, expected_status, additional_notes=notes or ""
        )

    # ============================================================
    # TRANSITIONS
    # ============================================================

    def submit(
        self, actor: AuthSession, report_id: str, expected_status: ReportStatus
    ) -> Report:
        """
        Recipient files a report for provider review. A submitted report
        that the recipient edited can be submitted again.
        """
        report = self._load(report_id)
        authorize(actor, Action.SUBMIT_REPORT, report)
        self._check_expected(report, expected_status)

        report.status = ReportStatus.SUBMITTED.value
        self._commit(report)
        logger.info(f"Report {report_id} submitted by {actor.actor_id}")
        return report

    def confirm(
        self,
        actor: AuthSession,
        report_id: str,
        expected_status: ReportStatus = ReportStatus.SUBMITTED,
    ) -> Report:
        """Provider accepts a submitted report and locks it."""
        report = self._load(report_id)
        authorize(actor, Action.CONFIRM_REPORT, report)
        self._check_expected(report, expected_status)

        self._finalize(report, actor, ReportStatus.CONFIRMED)
        logger.info(f"Report {report_id} confirmed by {actor.actor_id}")
        return report

    def reject(
        self,
        actor: AuthSession,
        report_id: str,
        expected_status: ReportStatus = ReportStatus.SUBMITTED,
        reason: Optional[str] = None,
    ) -> Report:
        """Provider turns down a submitted report with a reason and locks it."""
        report = self._load(report_id)
        authorize(actor, Action.REJECT_REPORT, report)
        self._check_expected(report, expected_status)

        reason = clean_entry(reason) or self.settings.default_rejection_reason
        self._finalize(report, actor, ReportStatus.REJECTED, reason=reason)
        logger.info(f"Report {report_id} rejected by {actor.actor_id}: {reason}")
        return report

    def _finalize(
        self,
        report: Report,
        actor: AuthSession,
        outcome: ReportStatus,
        reason: Optional[str] = None,
    ) -> None:
        provider = self.identity.lookup(actor.actor_id, ActorRole.PROVIDER)
        report.status = outcome.value
        report.doctor_id = provider.id
        report.doctor_name = provider.name
        report.editable = False
        if reason is not None:
            report.rejection_reason = reason
        self._commit(report)

    # ============================================================
    # HELPERS
    # ============================================================

    def _load(self, report_id: str) -> Report:
        report = self.db.get(Report, report_id)
        if report is None:
            raise ReportNotFound(f"No report {report_id}")
        return report

    @staticmethod
    def _check_expected(report: Report, expected_status: ReportStatus) -> None:
        expected = ReportStatus(expected_status).value
        if report.status != expected:
            raise InvalidStateTransition(
                f"Report {report.id} is {report.status}, not {expected}"
            )

    def _commit(self, report: Report) -> Report:
        report_id = report.id
        try:
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            raise InvalidStateTransition(
                f"Report {report_id} was changed by someone else; reload and retry"
            )
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(report)
        return report
