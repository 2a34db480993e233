"""Registration and login endpoints."""

from fastapi import APIRouter, Depends

from careflow.core.dependencies import (
    get_auth_service,
    get_bearer_token,
    get_current_session,
)
from careflow.schemas.auth import (
    AuthSession,
    LoginRequest,
    LoginResponse,
    ProviderOut,
    ProviderRegistration,
    ProviderRegistrationResponse,
    RecipientOut,
    RecipientRegistration,
    RecipientRegistrationResponse,
)
from careflow.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/providers", response_model=ProviderRegistrationResponse, status_code=201
)
async def register_provider(
    payload: ProviderRegistration,
    auth: AuthService = Depends(get_auth_service),
):
    """Register a doctor. Usable immediately with the returned credential."""
    provider = auth.register_provider(payload)
    return ProviderRegistrationResponse(
        actor=ProviderOut.model_validate(provider),
        credential=auth.settings.provider_default_credential,
    )


@router.post(
    "/recipients", response_model=RecipientRegistrationResponse, status_code=201
)
async def register_recipient(
    payload: RecipientRegistration,
    auth: AuthService = Depends(get_auth_service),
):
    """
    Submit a patient application.
    Login is refused until a provider approves it.
    """
    recipient = auth.register_recipient(payload)
    return RecipientRegistrationResponse(
        actor=RecipientOut.model_validate(recipient),
        credential=auth.settings.recipient_default_credential,
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
):
    session = auth.login(payload.role, payload.id, payload.credential)
    return LoginResponse(token=session.token, session=session)


@router.post("/logout")
async def logout(
    token: str = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
):
    return {"success": auth.logout(token)}


@router.get("/me", response_model=AuthSession)
async def me(session: AuthSession = Depends(get_current_session)):
    return session
