"""
Access Policy

Single place that decides whether an (actor, action, target) triple is
permitted. Both the approval workflow and the report lifecycle call
``authorize`` before mutating anything; views call ``can`` to decide what to
offer. Nothing else re-derives these rules.

Rules:
  Onboarding (target = Recipient)
    approve / reject      Provider only; recipient must still be pending
    view queue            Provider only

  Reports (target = Report)
    create                Approved recipient only
    view                  Owning recipient, any provider
    edit symptoms/tests/
      treatment/notes/date  Owning recipient while draft or submitted,
                            provider while submitted; report must be editable
    edit diagnosis        Provider only, while submitted and editable
    submit                Owning recipient; draft or submitted, and editable
    confirm / reject      Provider only; submitted
    review queue          Provider only

Role and ownership are checked before status, so a wrong-role call is always
Forbidden even if the status is also wrong.
"""

from enum import Enum
from typing import Optional

from careflow.core.exceptions import (
    CareFlowError,
    Forbidden,
    InvalidStateTransition,
)
from careflow.models.enums import (
    ActorRole,
    OnboardingStatus,
    ReportField,
    ReportStatus,
)


class Action(str, Enum):
    APPROVE_RECIPIENT = "approve_recipient"
    REJECT_RECIPIENT = "reject_recipient"
    VIEW_RECIPIENTS = "view_recipients"

    CREATE_REPORT = "create_report"
    VIEW_REPORT = "view_report"
    EDIT_SYMPTOMS = "edit_symptoms"
    EDIT_DIAGNOSIS = "edit_diagnosis"
    EDIT_TESTS_CONDUCTED = "edit_tests_conducted"
    EDIT_TREATMENT_PLAN = "edit_treatment_plan"
    EDIT_NOTES = "edit_notes"
    EDIT_REPORT_DATE = "edit_report_date"
    SUBMIT_REPORT = "submit_report"
    CONFIRM_REPORT = "confirm_report"
    REJECT_REPORT = "reject_report"
    VIEW_REVIEW_QUEUE = "view_review_queue"


FIELD_ACTIONS = {
    ReportField.SYMPTOMS: Action.EDIT_SYMPTOMS,
    ReportField.DIAGNOSIS: Action.EDIT_DIAGNOSIS,
    ReportField.TESTS_CONDUCTED: Action.EDIT_TESTS_CONDUCTED,
    ReportField.TREATMENT_PLAN: Action.EDIT_TREATMENT_PLAN,
}

EDIT_ACTIONS = frozenset(FIELD_ACTIONS.values()) | {
    Action.EDIT_NOTES,
    Action.EDIT_REPORT_DATE,
}

PROVIDER_ONLY = frozenset(
    {
        Action.APPROVE_RECIPIENT,
        Action.REJECT_RECIPIENT,
        Action.VIEW_RECIPIENTS,
        Action.EDIT_DIAGNOSIS,
        Action.CONFIRM_REPORT,
        Action.REJECT_REPORT,
        Action.VIEW_REVIEW_QUEUE,
    }
)

RECIPIENT_ONLY = frozenset({Action.CREATE_REPORT, Action.SUBMIT_REPORT})

ONBOARDING_ACTIONS = frozenset({Action.APPROVE_RECIPIENT, Action.REJECT_RECIPIENT})

# Statuses in which each role may edit an editable report
_EDITABLE_STATUSES = {
    ActorRole.RECIPIENT: (ReportStatus.DRAFT.value, ReportStatus.SUBMITTED.value),
    ActorRole.PROVIDER: (ReportStatus.SUBMITTED.value,),
}

_SUBMITTABLE_STATUSES = (ReportStatus.DRAFT.value, ReportStatus.SUBMITTED.value)


def action_for_field(field) -> Action:
    return FIELD_ACTIONS[ReportField(field)]


def evaluate(actor, action: Action, target=None) -> Optional[CareFlowError]:
    """
    Apply the rule table.

    Args:
        actor: The caller's ``AuthSession`` (needs ``actor_id``, ``role``,
            ``onboarding_status``)
        action: What the caller wants to do
        target: Recipient for onboarding actions, Report for report actions,
            None for actions without a target (create, queues)

    Returns:
        None if permitted, otherwise the error the caller should see
    """
    role = ActorRole(actor.role)
    label = action.value.replace("_", " ")

    if action in PROVIDER_ONLY and role != ActorRole.PROVIDER:
        return Forbidden(f"Only providers may {label}")
    if action in RECIPIENT_ONLY and role != ActorRole.RECIPIENT:
        return Forbidden(f"Only recipients may {label}")

    if action == Action.CREATE_REPORT:
        if actor.onboarding_status != OnboardingStatus.APPROVED:
            return Forbidden("Only approved recipients may create reports")
        return None

    if action in ONBOARDING_ACTIONS:
        if target.onboarding_status != OnboardingStatus.PENDING.value:
            return InvalidStateTransition(
                f"Recipient {target.id} is already {target.onboarding_status}"
            )
        return None

    if target is None:
        return None

    # Everything below targets a report
    if role == ActorRole.RECIPIENT and target.recipient_id != actor.actor_id:
        return Forbidden(f"Report {target.id} belongs to another recipient")

    if action == Action.VIEW_REPORT:
        return None

    if action in EDIT_ACTIONS:
        if not target.editable:
            return InvalidStateTransition(
                f"Report {target.id} is {target.status} and locked"
            )
        if target.status not in _EDITABLE_STATUSES[role]:
            return InvalidStateTransition(
                f"A {role.value} cannot edit a {target.status} report"
            )
        return None

    if action == Action.SUBMIT_REPORT:
        if not target.editable or target.status not in _SUBMITTABLE_STATUSES:
            return InvalidStateTransition(
                f"Report {target.id} is {target.status} and cannot be submitted"
            )
        return None

    if action in (Action.CONFIRM_REPORT, Action.REJECT_REPORT):
        if target.status != ReportStatus.SUBMITTED.value:
            return InvalidStateTransition(
                f"Only submitted reports can be reviewed; {target.id} is {target.status}"
            )
        return None

    return None


def can(actor, action: Action, target=None) -> bool:
    """True if the rule table permits the action."""
    return evaluate(actor, action, target) is None


def authorize(actor, action: Action, target=None) -> None:
    """Raise the matching error unless the action is permitted."""
    error = evaluate(actor, action, target)
    if error is not None:
        raise error
