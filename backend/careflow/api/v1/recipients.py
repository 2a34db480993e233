"""Recipient onboarding endpoints (provider only)."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from careflow.core.dependencies import get_approval_workflow, get_current_session
from careflow.models.enums import OnboardingStatus
from careflow.schemas.auth import AuthSession, RecipientOut
from careflow.services.approval_workflow import ApprovalWorkflow

router = APIRouter(prefix="/recipients", tags=["recipients"])


@router.get("", response_model=List[RecipientOut])
async def list_recipients(
    status: Optional[OnboardingStatus] = Query(
        None, description="pending | approved | rejected"
    ),
    session: AuthSession = Depends(get_current_session),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
):
    recipients = workflow.recipients(session, status)
    return [RecipientOut.model_validate(r) for r in recipients]


@router.post("/{recipient_id}/approve", response_model=RecipientOut)
async def approve_recipient(
    recipient_id: str,
    session: AuthSession = Depends(get_current_session),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
):
    return RecipientOut.model_validate(workflow.approve(session, recipient_id))


@router.post("/{recipient_id}/reject", response_model=RecipientOut)
async def reject_recipient(
    recipient_id: str,
    session: AuthSession = Depends(get_current_session),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
):
    return RecipientOut.model_validate(workflow.reject(session, recipient_id))
