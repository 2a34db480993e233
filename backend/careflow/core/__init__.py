"""
Core package initialization.
"""

from careflow.core.config import Settings, get_settings
from careflow.core.database import Store
from careflow.core.sessions import SessionRegistry

__all__ = [
    "Settings",
    "get_settings",
    "Store",
    "SessionRegistry",
]
