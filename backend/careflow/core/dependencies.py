"""
Shared dependencies for FastAPI dependency injection.
"""

from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from careflow.core.config import Settings
from careflow.core.database import Store
from careflow.core.exceptions import NotAuthenticated
from careflow.schemas.auth import AuthSession
from careflow.services.approval_workflow import ApprovalWorkflow
from careflow.services.auth_service import AuthService
from careflow.services.dashboard_service import DashboardService
from careflow.services.identity_store import IdentityStore
from careflow.services.report_service import ReportService

security = HTTPBearer(auto_error=False)


def get_store(request: Request) -> Store:
    """Dependency to get the store bound to this application."""
    return request.app.state.store


def get_settings_dependency(request: Request) -> Settings:
    """Dependency to get application settings."""
    return request.app.state.settings


def get_db(store: Store = Depends(get_store)) -> Generator[Session, None, None]:
    """Dependency that yields a database session for one request."""
    yield from store.get_db()


def get_identity_store(db: Session = Depends(get_db)) -> IdentityStore:
    return IdentityStore(db)


def get_auth_service(
    identity: IdentityStore = Depends(get_identity_store),
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthService:
    return AuthService(identity, store.sessions, settings)


def get_approval_workflow(
    identity: IdentityStore = Depends(get_identity_store),
) -> ApprovalWorkflow:
    return ApprovalWorkflow(identity)


def get_report_service(
    db: Session = Depends(get_db),
    identity: IdentityStore = Depends(get_identity_store),
    settings: Settings = Depends(get_settings_dependency),
) -> ReportService:
    return ReportService(db, identity, settings)


def get_dashboard_service(
    identity: IdentityStore = Depends(get_identity_store),
    reports: ReportService = Depends(get_report_service),
) -> DashboardService:
    return DashboardService(identity, reports)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    if credentials is None:
        raise NotAuthenticated("Authentication required")
    return credentials.credentials


def get_current_session(
    token: str = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
) -> AuthSession:
    """Dependency: require a live session."""
    return auth.resolve(token)
