"""
Authentication API endpoints
"""
from fastapi import APIRouter, Depends

from constants import HTTPStatus
from domain.entities import IdentityContext
from dependencies import get_account_service, get_identity
from dtos.request import ChangePasswordRequest, LoginRequest, SignupRequest
from dtos.response import IdentityResponse, LoginResponse, MessageResponse, UserResponse
from services.account_service import AccountService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.post("/auth/signup", response_model=UserResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Sign up")
def signup(payload: SignupRequest, accounts: AccountService = Depends(get_account_service)):
    """Register a normal-user account."""
    user = accounts.signup(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        address=payload.address,
    )
    return UserResponse.model_validate(user)


@router.post("/auth/login", response_model=LoginResponse)
@handle_api_errors("Login")
def login(payload: LoginRequest, accounts: AccountService = Depends(get_account_service)):
    """
    Exchange email and password for a bearer credential.

    The credential embeds the account's current role and expires after
    TOKEN_TTL_HOURS. A role change takes effect for the caller only after
    logging in again.
    """
    result = accounts.login(email=payload.email, password=payload.password)
    return LoginResponse(token=result.token, user=UserResponse.model_validate(result.user))


@router.post("/auth/change-password", response_model=MessageResponse)
@handle_api_errors("Change password")
def change_password(
    payload: ChangePasswordRequest,
    identity: IdentityContext = Depends(get_identity),
    accounts: AccountService = Depends(get_account_service),
):
    accounts.change_password(
        identity=identity,
        old_password=payload.old_password,
        new_password=payload.new_password,
    )
    return MessageResponse(message="Password updated")


@router.get("/auth/me", response_model=IdentityResponse)
def me(identity: IdentityContext = Depends(get_identity)):
    """The caller as resolved from its credential."""
    return IdentityResponse(
        user_id=identity.user_id,
        role=identity.role.value,
        credential_version=identity.credential_version,
    )
