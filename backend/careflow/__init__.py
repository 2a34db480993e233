"""
CareFlow: role-based clinical report workflow backend.
"""

__version__ = "1.0.0"
