"""
Utils package initialization.
"""

from careflow.utils.text import clean_entry, clean_entries, matches_term
from careflow.utils.identifiers import (
    format_actor_id,
    generate_report_id,
    generate_session_token,
)
from careflow.utils.security import hash_credential, verify_credential

__all__ = [
    "clean_entry",
    "clean_entries",
    "matches_term",
    "format_actor_id",
    "generate_report_id",
    "generate_session_token",
    "hash_credential",
    "verify_credential",
]
