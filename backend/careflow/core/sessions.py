"""In-process registry of live login sessions."""

import threading
from typing import Dict, Optional

from careflow.models.enums import ActorRole, OnboardingStatus
from careflow.schemas.auth import AuthSession
from careflow.utils.identifiers import generate_session_token


class SessionRegistry:
    """Maps opaque tokens to sessions. Owned by a ``Store``."""

    def __init__(self):
        self._sessions: Dict[str, AuthSession] = {}
        self._lock = threading.Lock()

    def open(self, actor) -> AuthSession:
        """Create a session for an authenticated actor."""
        status = None
        if actor.role == ActorRole.RECIPIENT.value:
            status = OnboardingStatus(actor.onboarding_status)

        session = AuthSession(
            token=generate_session_token(),
            actor_id=actor.id,
            role=ActorRole(actor.role),
            name=actor.name,
            onboarding_status=status,
        )
        with self._lock:
            self._sessions[session.token] = session
        return session

    def get(self, token: str) -> Optional[AuthSession]:
        with self._lock:
            return self._sessions.get(token)

    def discard(self, token: str) -> bool:
        """Drop a session. Returns False if the token was unknown."""
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
