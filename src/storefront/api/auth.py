"""Account endpoints: registration, the signed-in account and password management."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_user, current_user_id
from storefront.api.schemas import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    IdResponse,
    MeResponse,
    RegisterRequest,
    ResetPasswordRequest,
    ResetTokenResponse,
    StatusResponse,
)
from storefront.identity.user.password import ChangePassword, RequestPasswordReset, ResetPassword, reset_token_owner
from storefront.identity.user.registration import RegisterUser
from storefront.identity.user.user import User
from storefront.ordering.order.order import Order

router = APIRouter(prefix="/api/auth", tags=["auth"])

RESET_REQUESTED_MESSAGE = "If an account exists for this email, a reset link has been sent"


@router.post("/register", status_code=201, response_model=IdResponse)
async def register(body: RegisterRequest) -> IdResponse:
    command = RegisterUser(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return IdResponse(id=user_id)


@router.get("/me", response_model=MeResponse)
async def me(user: User = Depends(current_user)) -> MeResponse:
    return MeResponse(
        id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=user.full_name,
        is_verified=user.is_verified,
        is_admin=user.is_admin,
        created_at=user.created_at,
        addresses=len(user.addresses),
        orders=len(current_domain.repository_for(Order).for_user(str(user.id))),
    )


@router.post("/forgot-password", response_model=StatusResponse)
async def forgot_password(body: ForgotPasswordRequest) -> StatusResponse:
    """Same answer whether or not the email belongs to an account."""
    current_domain.process(RequestPasswordReset(email=body.email), asynchronous=False)
    return StatusResponse(message=RESET_REQUESTED_MESSAGE)


@router.get("/verify-reset-token/{token}", response_model=ResetTokenResponse)
async def verify_reset_token(token: str) -> ResetTokenResponse:
    return ResetTokenResponse(email=reset_token_owner(token).email)


@router.post("/reset-password", response_model=StatusResponse)
async def reset_password(body: ResetPasswordRequest) -> StatusResponse:
    command = ResetPassword(token=body.token, new_password=body.new_password)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Password has been reset")


@router.post("/change-password", response_model=StatusResponse)
async def change_password(body: ChangePasswordRequest, user_id: str = Depends(current_user_id)) -> StatusResponse:
    command = ChangePassword(
        user_id=user_id,
        current_password=body.current_password,
        new_password=body.new_password,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Password changed")
