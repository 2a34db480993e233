"""
Typed errors raised by the workflow services.

Every error carries a stable ``code`` for API clients and the HTTP status the
API layer answers with. A raised error means the operation changed nothing.
"""

from typing import Optional


class CareFlowError(Exception):
    """Base class for all workflow errors."""

    code = "careflow_error"
    status_code = 400

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class NotFound(CareFlowError):
    code = "not_found"
    status_code = 404


class ActorNotFound(NotFound):
    code = "actor_not_found"


class ReportNotFound(NotFound):
    code = "report_not_found"


class NotAuthenticated(CareFlowError):
    code = "not_authenticated"
    status_code = 401


class InvalidCredential(CareFlowError):
    code = "invalid_credential"
    status_code = 401


class ApprovalPending(CareFlowError):
    code = "approval_pending"
    status_code = 403


class ApprovalRejected(CareFlowError):
    code = "approval_rejected"
    status_code = 403


class Forbidden(CareFlowError):
    """Role or ownership does not allow the action."""

    code = "forbidden"
    status_code = 403


class InvalidStateTransition(CareFlowError):
    """Action attempted from the wrong status, or against a stale status."""

    code = "invalid_state_transition"
    status_code = 409


class IndexOutOfRange(CareFlowError):
    code = "index_out_of_range"
    status_code = 409


class ValidationFailed(CareFlowError):
    code = "validation_failed"
    status_code = 422
