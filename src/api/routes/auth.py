"""Authentication routes."""

from fastapi import APIRouter, Depends

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_user_service
from api.schemas.user import LoginRequest, TokenResponse, UserResponse
from domain.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=UserResponse,
    summary="Get authenticated user",
    responses={401: {"description": "Missing or invalid token"}},
)
async def get_me(
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return the identity the token was issued for, without its password."""
    me = await service.get_me(user.id)
    return UserResponse(
        id=me.id,
        name=me.name,
        email=me.email,
        avatar=me.avatar,
        date=me.created_at,
    )


@router.post(
    "",
    response_model=TokenResponse,
    summary="Authenticate user and get token",
    responses={400: {"description": "Validation failed or invalid credentials"}},
)
async def login(
    body: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Log in with email and password."""
    token = await service.authenticate(email=body.email, password=body.password)
    return TokenResponse(token=token)
