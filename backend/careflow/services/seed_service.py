"""
Demo accounts.

Seeds the two doctors and two patients the login screen advertises
(DOC001/DOC002 and PAT001/PAT002). Existing IDs are left untouched, so
seeding on every startup is safe.
"""

import logging
from datetime import date, datetime
from typing import List

from sqlalchemy.orm import Session

from careflow.core.config import Settings
from careflow.models import Actor, OnboardingStatus, Provider, Recipient
from careflow.services.identity_store import IdentityStore
from careflow.utils.security import hash_credential

logger = logging.getLogger(__name__)


DEMO_PROVIDERS = [
    {
        "id": "DOC001",
        "name": "Dr. Sarah Johnson",
        "age": 45,
        "date_of_birth": date(1979, 3, 15),
        "gender": "Female",
        "phone": "+1-555-0101",
        "license": "MD-2024-001",
        "specialization": "Internal Medicine",
    },
    {
        "id": "DOC002",
        "name": "Dr. Michael Chen",
        "age": 38,
        "date_of_birth": date(1986, 7, 22),
        "gender": "Male",
        "phone": "+1-555-0102",
        "license": "MD-2024-002",
        "specialization": "Cardiology",
    },
]

DEMO_RECIPIENTS = [
    {
        "id": "PAT001",
        "name": "John Smith",
        "age": 34,
        "date_of_birth": date(1990, 5, 10),
        "gender": "Male",
        "phone": "+1-555-0201",
        "medical_history": "Mild asthma",
    },
    {
        "id": "PAT002",
        "name": "Emily Davis",
        "age": 29,
        "date_of_birth": date(1995, 11, 2),
        "gender": "Female",
        "phone": "+1-555-0202",
        "medical_history": "None reported",
    },
]


def seed_demo_data(db: Session, settings: Settings) -> List[Actor]:
    """
    Insert any missing demo actor. Demo recipients are pre-approved.

    Returns:
        The actors created by this call
    """
    identity = IdentityStore(db)
    rounds = settings.credential_hash_rounds
    created = []

    for data in DEMO_PROVIDERS:
        if identity.exists(data["id"]):
            continue
        provider = Provider(
            credential=hash_credential(settings.provider_default_credential, rounds),
            **data,
        )
        created.append(identity.register(provider))

    for data in DEMO_RECIPIENTS:
        if identity.exists(data["id"]):
            continue
        recipient = Recipient(
            credential=hash_credential(settings.recipient_default_credential, rounds),
            onboarding_status=OnboardingStatus.APPROVED.value,
            submitted_at=datetime.utcnow(),
            decided_by="DOC001",
            decided_at=datetime.utcnow(),
            **data,
        )
        created.append(identity.register(recipient))

    if created:
        logger.info(f"Seeded demo actors: {[actor.id for actor in created]}")
    return created
