"""Identity store: the single source of truth for actor records."""

import logging
from datetime import datetime
from typing import List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careflow.core.exceptions import ActorNotFound, InvalidStateTransition
from careflow.models import Actor, Provider, Recipient, ActorRole, OnboardingStatus
from careflow.utils.identifiers import format_actor_id
from careflow.utils.security import verify_credential

logger = logging.getLogger(__name__)


class IdentityStore:
    """Stores and looks up providers and recipients."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def register(self, actor: Actor) -> Actor:
        """
        Store a new actor, assigning its ID unless one is preset.

        Args:
            actor: Unsaved Provider or Recipient

        Returns:
            The persisted actor
        """
        if not actor.id:
            actor.id = self._next_id(ActorRole(actor.role))
        self.db.add(actor)
        self._commit()
        self.db.refresh(actor)
        logger.info(f"Registered {actor.role} {actor.id} ({actor.name})")
        return actor

    def _next_id(self, role: ActorRole) -> str:
        sequence = self.db.query(Actor).filter(Actor.role == role.value).count() + 1
        candidate = format_actor_id(role, sequence)
        while self.db.get(Actor, candidate) is not None:
            sequence += 1
            candidate = format_actor_id(role, sequence)
        return candidate

    def lookup(
        self, actor_id: str, role: Optional[ActorRole] = None
    ) -> Union[Provider, Recipient]:
        """
        Fetch an actor by ID, optionally restricted to one role.

        Raises:
            ActorNotFound: no actor with that ID (and role)
        """
        actor = self.db.get(Actor, actor_id)
        if actor is None or (role is not None and actor.role != ActorRole(role).value):
            suffix = f" with role {ActorRole(role).value}" if role is not None else ""
            raise ActorNotFound(f"No actor {actor_id}{suffix}")
        return actor

    def exists(self, actor_id: str) -> bool:
        return self.db.get(Actor, actor_id) is not None

    def verify(self, actor_id: str, supplied_credential: str) -> bool:
        """Check a credential. Unknown IDs simply do not match."""
        actor = self.db.get(Actor, actor_id)
        if actor is None:
            return False
        return verify_credential(supplied_credential, actor.credential)

    def list_recipients(
        self, status: Optional[OnboardingStatus] = None
    ) -> List[Recipient]:
        query = self.db.query(Recipient)
        if status is not None:
            query = query.filter(
                Recipient.onboarding_status == OnboardingStatus(status).value
            )
        return query.order_by(Recipient.submitted_at.desc(), Recipient.id).all()

    def count_recipients(self, status: Optional[OnboardingStatus] = None) -> int:
        query = self.db.query(Recipient)
        if status is not None:
            query = query.filter(
                Recipient.onboarding_status == OnboardingStatus(status).value
            )
        return query.count()

    def set_onboarding_status(
        self,
        recipient_id: str,
        expected: OnboardingStatus,
        new_status: OnboardingStatus,
        decided_by: str,
    ) -> Recipient:
        """
        Compare-and-set a recipient's onboarding status.

        The UPDATE only matches while the stored status still equals
        ``expected``, so of two racing decisions exactly one wins.

        Raises:
            InvalidStateTransition: the status was no longer ``expected``
        """
        updated = (
            self.db.query(Actor)
            .filter(
                Actor.id == recipient_id,
                Actor.role == ActorRole.RECIPIENT.value,
                Actor.onboarding_status == expected.value,
            )
            .update(
                {
                    Actor.onboarding_status: new_status.value,
                    Actor.decided_by: decided_by,
                    Actor.decided_at: datetime.utcnow(),
                },
                synchronize_session=False,
            )
        )
        if updated == 0:
            self.db.rollback()
            raise InvalidStateTransition(
                f"Recipient {recipient_id} is no longer {expected.value}"
            )
        self._commit()
        recipient = self.lookup(recipient_id, ActorRole.RECIPIENT)
        self.db.refresh(recipient)
        return recipient

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
