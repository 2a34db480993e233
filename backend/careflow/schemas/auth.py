"""
Authentication and registration schemas.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from careflow.models.enums import ActorRole, Gender, OnboardingStatus


# ============================================================
# SESSION
# ============================================================


class AuthSession(BaseModel):
    """
    Opaque login session. The only identity the workflow services trust.
    """

    token: str
    actor_id: str
    role: ActorRole
    name: str
    onboarding_status: Optional[OnboardingStatus] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        frozen = True


class LoginRequest(BaseModel):
    role: ActorRole
    id: str = Field(..., min_length=1)
    credential: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    token: str
    session: AuthSession


# ============================================================
# REGISTRATION
# ============================================================


class _RegistrationBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    date_of_birth: date
    gender: Gender

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class ProviderRegistration(_RegistrationBase):
    """Doctor signup form."""

    age: int = Field(..., ge=25, le=80)
    license: str = Field(..., min_length=1)
    specialization: str = Field(..., min_length=1)
    phone: Optional[str] = None


class RecipientRegistration(_RegistrationBase):
    """Patient application form."""

    age: int = Field(..., ge=1, le=120)
    phone: str = Field(..., min_length=1)
    medical_history: Optional[str] = None


# ============================================================
# ACTOR RESPONSES
# ============================================================


class ActorOut(BaseModel):
    id: str
    role: ActorRole
    name: str
    age: int
    date_of_birth: date
    gender: Gender
    phone: str

    class Config:
        from_attributes = True


class ProviderOut(ActorOut):
    license: str
    specialization: str


class RecipientOut(ActorOut):
    medical_history: Optional[str] = None
    onboarding_status: OnboardingStatus
    submitted_at: Optional[datetime] = None
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None


class ProviderRegistrationResponse(BaseModel):
    """Returned once at signup; the only time the credential is shown."""

    actor: ProviderOut
    credential: str


class RecipientRegistrationResponse(BaseModel):
    actor: RecipientOut
    credential: str
