"""Session API: issue a fresh token to an existing user, or revoke one."""

import logging

from fastapi import APIRouter, Depends

from papertrade.api.deps import get_bearer_token, get_context, get_user_service
from papertrade.api.schemas import LoginRequest, LoginResponse, MessageResponse
from papertrade.app_context import AppContext
from papertrade.services import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    data: LoginRequest,
    service: UserService = Depends(get_user_service),
    ctx: AppContext = Depends(get_context),
):
    """Issue a new bearer token to the user matching username and email."""
    user = service.login(data.username, data.email)
    token = ctx.auth.issue_token(user.user_id)
    logger.info("Issued token for user %s", user.user_id)
    return LoginResponse(user_id=user.user_id, token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    token: str = Depends(get_bearer_token),
    ctx: AppContext = Depends(get_context),
):
    """Revoke the bearer token used for this request."""
    user_id = ctx.auth.authenticate(token)
    ctx.auth.revoke_token(token)
    logger.info("Revoked token for user %s", user_id)
    return MessageResponse(message="Logged out successfully")
