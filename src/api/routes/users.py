"""Registration route."""

from fastapi import APIRouter, Depends

from api.dependencies.services import get_user_service
from api.schemas.user import TokenResponse, UserCreate
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    summary="Register user",
    responses={
        200: {"description": "User registered, token issued"},
        400: {"description": "Validation failed or user already exists"},
    },
)
async def register_user(
    body: UserCreate,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Register a new user and return a session token."""
    token = await service.register(
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return TokenResponse(token=token)
