"""User registration API."""

from fastapi import APIRouter, Depends

from papertrade.api.deps import get_context, get_current_user_id, get_user_service
from papertrade.api.schemas import UserCreateRequest, UserCreateResponse, UserResponse
from papertrade.app_context import AppContext
from papertrade.services import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserCreateResponse, status_code=201)
def register_user(
    data: UserCreateRequest,
    service: UserService = Depends(get_user_service),
    ctx: AppContext = Depends(get_context),
):
    """Create a user funded with the initial balance and issue a bearer token."""
    user = service.register(data.username, data.first_name, data.last_name, data.email)
    token = ctx.auth.issue_token(user.user_id)
    return UserCreateResponse(user=UserResponse.model_validate(user), token=token)


@router.get("/me", response_model=UserResponse)
def get_me(
    user_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    """Return the authenticated user."""
    return UserResponse.model_validate(service.get_user(user_id))
