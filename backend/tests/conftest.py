"""
Shared fixtures: a fresh in-memory store per test, the services built on it,
and an HTTP client bound to the same store.
"""

import pytest
from fastapi.testclient import TestClient

from careflow.core.config import Settings
from careflow.core.database import Store
from careflow.main import create_app
from careflow.models import ActorRole
from careflow.services import (
    ApprovalWorkflow,
    AuthService,
    DashboardService,
    IdentityStore,
    ReportService,
)

from .factories import provider_form, recipient_form


@pytest.fixture
def settings():
    """Settings fixture for testing."""
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        seed_demo_data=False,
        credential_hash_rounds=4,
    )


@pytest.fixture
def store(settings):
    store = Store(settings.DATABASE_URL)
    store.init_db()
    yield store
    store.dispose()


@pytest.fixture
def db(store):
    with store.session_scope() as session:
        yield session


@pytest.fixture
def identity(db):
    return IdentityStore(db)


@pytest.fixture
def auth(identity, store, settings):
    return AuthService(identity, store.sessions, settings)


@pytest.fixture
def workflow(identity):
    return ApprovalWorkflow(identity)


@pytest.fixture
def reports(db, identity, settings):
    return ReportService(db, identity, settings)


@pytest.fixture
def dashboard(identity, reports):
    return DashboardService(identity, reports)


@pytest.fixture
def provider(auth):
    return auth.register_provider(provider_form())


@pytest.fixture
def provider_session(auth, provider, settings):
    return auth.login(
        ActorRole.PROVIDER, provider.id, settings.provider_default_credential
    )


@pytest.fixture
def second_provider_session(auth, settings):
    other = auth.register_provider(provider_form(name="Dr. Tomas Lind"))
    return auth.login(ActorRole.PROVIDER, other.id, settings.provider_default_credential)


@pytest.fixture
def recipient(auth, workflow, provider_session):
    recipient = auth.register_recipient(recipient_form())
    return workflow.approve(provider_session, recipient.id)


@pytest.fixture
def recipient_session(auth, recipient, settings):
    return auth.login(
        ActorRole.RECIPIENT, recipient.id, settings.recipient_default_credential
    )


@pytest.fixture
def other_recipient_session(auth, workflow, provider_session, settings):
    other = auth.register_recipient(recipient_form(name="Priya Natarajan"))
    workflow.approve(provider_session, other.id)
    return auth.login(ActorRole.RECIPIENT, other.id, settings.recipient_default_credential)


@pytest.fixture
def draft_report(reports, recipient_session):
    return reports.create(recipient_session, symptoms=["fever", "headache"])


@pytest.fixture
def submitted_report(reports, recipient_session):
    return reports.create(recipient_session, symptoms=["fever"], submit=True)


@pytest.fixture
def client(settings, store):
    """Test client fixture bound to the per-test store."""
    app = create_app(settings, store)
    with TestClient(app) as client:
        yield client
