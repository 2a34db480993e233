"""
Session / Authentication

Registration hands out the configured default credential and stores only its
bcrypt hash. Login checks, in order: the ID exists for the requested role, the
credential matches, and (for recipients) the application has been approved.
Only then is a session opened.
"""

import logging
from datetime import datetime

from careflow.core.config import Settings
from careflow.core.exceptions import (
    ApprovalPending,
    ApprovalRejected,
    InvalidCredential,
    NotAuthenticated,
    ValidationFailed,
)
from careflow.core.sessions import SessionRegistry
from careflow.models import ActorRole, OnboardingStatus, Provider, Recipient
from careflow.schemas.auth import (
    AuthSession,
    ProviderRegistration,
    RecipientRegistration,
)
from careflow.services.identity_store import IdentityStore
from careflow.utils.security import hash_credential

logger = logging.getLogger(__name__)

PHONE_NOT_PROVIDED = "Not provided"
NO_HISTORY_REPORTED = "None reported"


class AuthService:
    """Registers actors and manages their login sessions."""

    def __init__(
        self, identity: IdentityStore, sessions: SessionRegistry, settings: Settings
    ):
        self.identity = identity
        self.sessions = sessions
        self.settings = settings

    # ============================================================
    # REGISTRATION
    # ============================================================

    def register_provider(self, data: ProviderRegistration) -> Provider:
        """Create a provider. Providers need no approval."""
        provider = Provider(
            name=data.name,
            age=data.age,
            date_of_birth=data.date_of_birth,
            gender=data.gender.value,
            phone=(data.phone or "").strip() or PHONE_NOT_PROVIDED,
            license=data.license.strip(),
            specialization=data.specialization.strip(),
            credential=self._hashed(self.settings.provider_default_credential),
        )
        return self.identity.register(provider)

    def register_recipient(self, data: RecipientRegistration) -> Recipient:
        """Create a recipient application in ``pending``."""
        phone = data.phone.strip()
        if not phone:
            raise ValidationFailed("A contact phone is required for recipients")

        recipient = Recipient(
            name=data.name,
            age=data.age,
            date_of_birth=data.date_of_birth,
            gender=data.gender.value,
            phone=phone,
            medical_history=(data.medical_history or "").strip()
            or NO_HISTORY_REPORTED,
            onboarding_status=OnboardingStatus.PENDING.value,
            submitted_at=datetime.utcnow(),
            credential=self._hashed(self.settings.recipient_default_credential),
        )
        return self.identity.register(recipient)

    def _hashed(self, credential: str) -> str:
        return hash_credential(credential, rounds=self.settings.credential_hash_rounds)

    # ============================================================
    # SESSIONS
    # ============================================================

    def login(self, role: ActorRole, actor_id: str, credential: str) -> AuthSession:
        """
        Authenticate and open a session.

        Raises:
            ActorNotFound: no actor with this ID and role
            InvalidCredential: credential mismatch
            ApprovalPending / ApprovalRejected: recipient not approved
        """
        role = ActorRole(role)
        actor = self.identity.lookup(actor_id, role)

        if not self.identity.verify(actor_id, credential):
            logger.warning(f"Invalid credential for {role.value} {actor_id}")
            raise InvalidCredential("Invalid ID or credential")

        if role == ActorRole.RECIPIENT:
            status = OnboardingStatus(actor.onboarding_status)
            if status == OnboardingStatus.PENDING:
                raise ApprovalPending(
                    f"Registration for {actor_id} is still under review"
                )
            if status == OnboardingStatus.REJECTED:
                raise ApprovalRejected(f"Registration for {actor_id} was rejected")

        session = self.sessions.open(actor)
        logger.info(f"{role.value.capitalize()} {actor_id} logged in")
        return session

    def logout(self, token: str) -> bool:
        """Discard a session. Returns False if it was already gone."""
        discarded = self.sessions.discard(token)
        if discarded:
            logger.info("Session closed")
        return discarded

    def resolve(self, token: str) -> AuthSession:
        """Return the live session for a token."""
        session = self.sessions.get(token) if token else None
        if session is None:
            raise NotAuthenticated("Session is missing or has ended")
        return session
