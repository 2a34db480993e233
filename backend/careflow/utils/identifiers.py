"""
Identifier generation.
"""

import uuid

from careflow.models.enums import ActorRole

ACTOR_ID_PREFIXES = {
    ActorRole.PROVIDER: "DOC",
    ActorRole.RECIPIENT: "PAT",
}


def format_actor_id(role: ActorRole, sequence: int) -> str:
    """
    Build a human-facing actor ID such as ``DOC001`` or ``PAT012``.

    Args:
        role: Actor role that selects the prefix
        sequence: 1-based sequence number within the role

    Returns:
        Prefixed, zero-padded identifier
    """
    return f"{ACTOR_ID_PREFIXES[ActorRole(role)]}{sequence:03d}"


def generate_report_id() -> str:
    """Generate a unique report ID (``RPT-`` plus 8 hex characters)."""
    return "RPT-" + uuid.uuid4().hex[:8].upper()


def generate_session_token() -> str:
    return uuid.uuid4().hex
