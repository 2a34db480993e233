"""
API package initialization.
"""

from careflow.api.v1 import router

__all__ = ["router"]
