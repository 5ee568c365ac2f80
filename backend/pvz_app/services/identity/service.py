"""
IdentityService
===============

Aggregate service responsible for the `User` aggregate and token issuance:
- Registration with a role and a hashed password
- Authentication by email and password
- Synthetic "dummy" logins for a bare role
"""

from __future__ import annotations

import logging
from uuid import UUID, uuid4

from pvz_app.models.user import EMAIL_CONSTRAINT, Role, User
from pvz_app.repositories.user import UserRepository
from pvz_app.services._shared.base import BaseService, ServiceContext
from pvz_app.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidRoleError,
    NotFoundError,
    ValidationError,
)
from pvz_app.services._shared.ports import TokenProvider
from pvz_app.services.identity.dto import TokenOut, UserAuthIn, UserPublicOut, UserRegisterIn
from pvz_app.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class IdentityService(BaseService):
    """
    Application service for the `User` aggregate.

    Responsibilities
    ----------------
    - Register users ensuring email uniqueness.
    - Authenticate credentials and issue role-bearing access tokens.
    - Retrieve and delete users.
    """

    users = UserRepository()
    business_constraints = frozenset({EMAIL_CONSTRAINT})

    def __init__(
        self,
        *,
        token_provider: TokenProvider | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        if token_provider is None:
            from pvz_app.infra.jwt.flask_jwt_token_provider import JWTTokenProvider

            token_provider = JWTTokenProvider()
        self.tokens = token_provider

    @staticmethod
    def _ensure_role(role: str) -> None:
        if not Role.is_valid(role):
            raise InvalidRoleError(role)

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register(self, dto: UserRegisterIn) -> UserPublicOut:
        """
        Register a new user.

        :param dto: User registration input DTO.
        :type dto: UserRegisterIn
        :returns: Public-safe user DTO.
        :rtype: UserPublicOut
        :raises InvalidRoleError: If the role is unknown.
        :raises ValidationError: If the password is too short or the email malformed.
        :raises ConflictError: If the email is already registered.
        """
        self._ensure_role(dto.role)
        if len(dto.password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        def work(uow: SQLAlchemyUnitOfWork) -> UserPublicOut:
            if uow.users.exists_by_email(dto.email):
                raise ConflictError("User", "email already in use", EMAIL_CONSTRAINT)
            try:
                user = User(email=dto.email, password=dto.password, role=dto.role)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            uow.users.add(user)
            return UserPublicOut.from_model(user)

        created = self.run_in_transaction(work)
        log.info("user.registered", extra=self._log_extra(user_id=created.id))
        return created

    # --------------------------------------------------------------------- #
    # Authentication
    # --------------------------------------------------------------------- #

    def login(self, dto: UserAuthIn) -> TokenOut:
        """
        Authenticate a user and issue an access token.

        :param dto: Authentication input DTO.
        :type dto: UserAuthIn
        :returns: Token carrying the user's role.
        :rtype: TokenOut
        :raises InvalidCredentialsError: When email or password do not match.
        """
        with self.reading() as session:
            user = self.users.get_by_email(session, dto.email)
            if user is None or not user.verify_password(dto.password):
                raise InvalidCredentialsError()
            identity, role = str(user.id), user.role
        return TokenOut(
            access_token=self.tokens.create_access_token(identity=identity, role=role),
            role=role,
        )

    def dummy_login(self, role: str) -> TokenOut:
        """
        Issue a token for a bare role, without a stored user.

        :param role: ``employee`` or ``moderator``.
        :type role: str
        :returns: Token for a fresh synthetic identity.
        :rtype: TokenOut
        :raises InvalidRoleError: If the role is unknown.
        """
        self._ensure_role(role)
        return TokenOut(
            access_token=self.tokens.create_access_token(identity=str(uuid4()), role=role),
            role=role,
        )

    # --------------------------------------------------------------------- #
    # Retrieval / deletion
    # --------------------------------------------------------------------- #

    def get_user(self, user_id: UUID) -> UserPublicOut:
        """
        Retrieve a user by identifier.

        :raises NotFoundError: If user does not exist.
        """
        with self.reading() as session:
            user = self.users.get(session, user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserPublicOut.from_model(user)

    def delete_user(self, user_id: UUID) -> None:
        """
        Delete a user.

        :raises NotFoundError: If user does not exist.
        """

        def work(uow: SQLAlchemyUnitOfWork) -> None:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            uow.users.delete(user)

        self.run_in_transaction(work)
        log.info("user.deleted", extra=self._log_extra(user_id=user_id))
