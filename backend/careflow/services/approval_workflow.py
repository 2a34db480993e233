"""
Approval Workflow

Recipient onboarding:
  pending → approved
          ↘ rejected

Each recipient is decided exactly once, by a provider. There is no re-review.
Approval is what later lets the recipient log in.
"""

import logging
from typing import List

from careflow.models import ActorRole, OnboardingStatus, Recipient
from careflow.schemas.auth import AuthSession
from careflow.services.access_policy import Action, authorize
from careflow.services.identity_store import IdentityStore

logger = logging.getLogger(__name__)


class ApprovalWorkflow:
    """Provider decisions on pending recipient applications."""

    def __init__(self, identity: IdentityStore):
        self.identity = identity

    def approve(self, actor: AuthSession, recipient_id: str) -> Recipient:
        """Approve a pending recipient."""
        return self._decide(
            actor, recipient_id, Action.APPROVE_RECIPIENT, OnboardingStatus.APPROVED
        )

    def reject(self, actor: AuthSession, recipient_id: str) -> Recipient:
        """Reject a pending recipient."""
        return self._decide(
            actor, recipient_id, Action.REJECT_RECIPIENT, OnboardingStatus.REJECTED
        )

    def _decide(
        self,
        actor: AuthSession,
        recipient_id: str,
        action: Action,
        outcome: OnboardingStatus,
    ) -> Recipient:
        recipient = self.identity.lookup(recipient_id, ActorRole.RECIPIENT)
        authorize(actor, action, recipient)

        recipient = self.identity.set_onboarding_status(
            recipient_id,
            expected=OnboardingStatus.PENDING,
            new_status=outcome,
            decided_by=actor.actor_id,
        )
        logger.info(f"Recipient {recipient_id} {outcome.value} by {actor.actor_id}")
        return recipient

    def pending_recipients(self, actor: AuthSession) -> List[Recipient]:
        """Applications awaiting a decision (provider onboarding queue)."""
        authorize(actor, Action.VIEW_RECIPIENTS)
        return self.identity.list_recipients(OnboardingStatus.PENDING)

    def approved_recipients(self, actor: AuthSession) -> List[Recipient]:
        authorize(actor, Action.VIEW_RECIPIENTS)
        return self.identity.list_recipients(OnboardingStatus.APPROVED)

    def recipients(self, actor: AuthSession, status=None) -> List[Recipient]:
        """All recipients, optionally filtered by onboarding status."""
        authorize(actor, Action.VIEW_RECIPIENTS)
        return self.identity.list_recipients(status)
