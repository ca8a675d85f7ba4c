"""User service: registration, login and identity lookup."""

from typing import Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IAuthProvider, IPasswordHasher, TokenUser
from infrastructure.database.dialects import is_unique_violation
from infrastructure.gravatar import gravatar_url

logger = structlog.get_logger()


class UserService:
    """Service layer for identity business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
        password_hasher: IPasswordHasher,
        avatar_for: Callable[[str], str] = gravatar_url,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth_provider = auth_provider
        self._password_hasher = password_hasher
        self._avatar_for = avatar_for

    async def register(self, name: str, email: str, password: str) -> str:
        """Create an identity and return a session token for it."""
        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise UserAlreadyExistsError(email)

            user = User(
                name=name,
                email=email,
                password=self._password_hasher.hash(password),
                avatar=self._avatar_for(email),
            )
            try:
                created = await uow.users.create(user)
            except IntegrityError as exc:
                # Another registration for this email committed after our check
                await uow.rollback()
                if is_unique_violation(exc):
                    raise UserAlreadyExistsError(email) from exc
                raise
            await uow.commit()

        logger.info("user_registered", user_id=str(created.id))
        return self._issue_token(created)

    async def authenticate(self, email: str, password: str) -> str:
        """Verify credentials and return a session token.

        Unknown email and wrong password raise the same error.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        if not user or not self._password_hasher.verify(password, user.password):
            logger.info("login_failed")
            raise InvalidCredentialsError()

        return self._issue_token(user)

    async def get_me(self, user_id: UUID) -> User:
        """Get the authenticated identity."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

    def _issue_token(self, user: User) -> str:
        return self._auth_provider.create_token(TokenUser(id=user.id, email=user.email))
