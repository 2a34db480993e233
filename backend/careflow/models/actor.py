"""Actor models: providers and recipients share one table keyed by role."""

from sqlalchemy import Column, String, Integer, Date, DateTime, Text, Index
from .base import Base, TimestampMixin
from .enums import ActorRole


class Actor(Base, TimestampMixin):
    """Common identity record for every provider and recipient."""

    __tablename__ = "actors"

    id = Column(String, primary_key=True)  # DOC001, PAT001, ...
    role = Column(String, nullable=False)  # provider, recipient
    name = Column(String, nullable=False)
    age = Column(Integer, nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(String, nullable=False)  # Male, Female, Other
    phone = Column(String, nullable=False)
    credential = Column(String, nullable=False)

    # Provider columns
    license = Column(String, nullable=True)
    specialization = Column(String, nullable=True)

    # Recipient columns
    medical_history = Column(Text, nullable=True)
    onboarding_status = Column(String, nullable=True)  # pending, approved, rejected
    submitted_at = Column(DateTime, nullable=True)
    decided_by = Column(String, nullable=True)
    decided_at = Column(DateTime, nullable=True)

    __mapper_args__ = {"polymorphic_on": role}

    __table_args__ = (
        Index("idx_actor_role", "role"),
        Index("idx_actor_onboarding_status", "onboarding_status"),
    )


class Provider(Actor):
    """Care provider (doctor). Usable as soon as registered."""

    __mapper_args__ = {"polymorphic_identity": ActorRole.PROVIDER.value}


class Recipient(Actor):
    """Care recipient (patient). Must be approved before logging in."""

    __mapper_args__ = {"polymorphic_identity": ActorRole.RECIPIENT.value}
