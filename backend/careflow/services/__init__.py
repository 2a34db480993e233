"""
Services package initialization.
"""

from careflow.services.identity_store import IdentityStore
from careflow.services.approval_workflow import ApprovalWorkflow
from careflow.services.auth_service import AuthService
from careflow.services.report_service import ReportService
from careflow.services.dashboard_service import DashboardService

__all__ = [
    "IdentityStore",
    "ApprovalWorkflow",
    "AuthService",
    "ReportService",
    "DashboardService",
]
