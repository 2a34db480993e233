"""
Test dashboard counters and demo seeding.
"""

import pytest

from careflow.core.exceptions import Forbidden
from careflow.models import ActorRole
from careflow.schemas.report import ProviderDashboard, RecipientDashboard
from careflow.services.seed_service import DEMO_RECIPIENTS, seed_demo_data

from .factories import recipient_form


def test_provider_summary(dashboard, auth, workflow, provider_session, submitted_report):
    rejected = auth.register_recipient(recipient_form(name="Sam Reed"))
    workflow.reject(provider_session, rejected.id)
    auth.register_recipient(recipient_form(name="Kim Park"))

    summary = dashboard.summary(provider_session)
    assert isinstance(summary, ProviderDashboard)
    assert summary.pending_recipients == 1
    assert summary.approved_recipients == 1
    assert summary.rejected_recipients == 1
    assert summary.total_recipients == 3
    assert summary.pending_reports == 1


def test_recipient_summary(
    dashboard, recipient_session, other_recipient_session, reports, draft_report
):
    reports.create(other_recipient_session, submit=True)

    summary = dashboard.summary(recipient_session)
    assert isinstance(summary, RecipientDashboard)
    assert summary.onboarding_status == "approved"
    assert summary.total_reports == 1
    assert summary.by_status["draft"] == 1
    assert summary.by_status["submitted"] == 0


def test_recipient_cannot_read_provider_summary(dashboard, recipient_session):
    with pytest.raises(Forbidden):
        dashboard.provider_summary(recipient_session)


def test_seed_is_idempotent(db, settings, auth):
    created = seed_demo_data(db, settings)
    assert sorted(actor.id for actor in created) == [
        "DOC001",
        "DOC002",
        "PAT001",
        "PAT002",
    ]
    assert seed_demo_data(db, settings) == []
    assert all(
        actor.credential not in (
            settings.provider_default_credential,
            settings.recipient_default_credential,
        )
        for actor in created
    )

    session = auth.login(
        ActorRole.RECIPIENT,
        DEMO_RECIPIENTS[0]["id"],
        settings.recipient_default_credential,
    )
    assert session.name == "John Smith"


def test_registration_continues_after_demo_ids(db, settings, auth):
    seed_demo_data(db, settings)
    assert auth.register_recipient(recipient_form()).id == "PAT003"
