"""Unit tests for IdentityService."""

import uuid

import pytest

from pvz_app.repositories.user import UserRepository
from pvz_app.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidRoleError,
    NotFoundError,
    ValidationError,
)
from pvz_app.services._shared.ports import StubTokenProvider
from pvz_app.services.identity.dto import UserAuthIn, UserRegisterIn
from pvz_app.services.identity.service import IdentityService
from tests.factories.user import UserFactory


class TestIdentityService:
    """Validate IdentityService behaviours for the User aggregate."""

    @pytest.fixture()
    def tokens(self) -> StubTokenProvider:
        return StubTokenProvider()

    @pytest.fixture()
    def service(self, tokens) -> IdentityService:
        """Return a fresh service instance per test."""
        return IdentityService(token_provider=tokens)

    @pytest.fixture()
    def repo(self, session):
        """Provide repository bound to the current transactional session."""
        return UserRepository().bind(session)

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def test_register_creates_user_with_hashed_password(self, service, repo):
        result = service.register(
            UserRegisterIn(email="New@Example.com", password="password123", role="moderator")
        )

        assert result.email == "new@example.com"
        assert result.role == "moderator"
        stored = repo.get_by_email("new@example.com")
        assert stored is not None
        assert stored.verify_password("password123")

    def test_register_rejects_duplicate_email(self, service):
        UserFactory(email="dup@example.com")

        with pytest.raises(ConflictError):
            service.register(
                UserRegisterIn(email="dup@example.com", password="otherpass", role="employee")
            )

    def test_email_constraint_race_stays_a_conflict(self, service, monkeypatch):
        """
        GIVEN a concurrent registration that slipped past the email lookup
        WHEN the insert hits the unique email constraint
        THEN the caller still gets the business conflict, not a storage failure.
        """
        UserFactory(email="race@example.com")
        monkeypatch.setattr(UserRepository, "exists_by_email", lambda self, session, email: False)

        with pytest.raises(ConflictError) as excinfo:
            service.register(
                UserRegisterIn(email="race@example.com", password="otherpass", role="employee")
            )

        assert excinfo.value.constraint == "uq_users_email"

    def test_register_rejects_unknown_role(self, service):
        with pytest.raises(InvalidRoleError):
            service.register(
                UserRegisterIn(email="x@example.com", password="secret1", role="admin")
            )

    def test_register_rejects_short_password(self, service, repo):
        with pytest.raises(ValidationError):
            service.register(UserRegisterIn(email="x@example.com", password="123", role="employee"))

        assert not repo.exists_by_email("x@example.com")

    # --------------------------------------------------------------------- #
    # Authentication
    # --------------------------------------------------------------------- #

    def test_login_issues_token_with_role(self, service, tokens):
        user = UserFactory(password="validpass", role="moderator")

        token = service.login(UserAuthIn(email=user.email, password="validpass"))

        claims = tokens.decode(token.access_token)
        assert token.role == "moderator"
        assert claims["sub"] == str(user.id)
        assert claims["role"] == "moderator"

    def test_login_rejects_wrong_password_and_unknown_email(self, service):
        user = UserFactory(password="rightpass")

        with pytest.raises(InvalidCredentialsError):
            service.login(UserAuthIn(email=user.email, password="wrongpass"))
        with pytest.raises(InvalidCredentialsError):
            service.login(UserAuthIn(email="ghost@example.com", password="rightpass"))

    def test_dummy_login_issues_distinct_identities(self, service, tokens):
        first = service.dummy_login("employee")
        second = service.dummy_login("employee")

        assert tokens.decode(first.access_token)["role"] == "employee"
        assert tokens.decode(first.access_token)["sub"] != tokens.decode(second.access_token)["sub"]

    def test_dummy_login_rejects_unknown_role(self, service):
        with pytest.raises(InvalidRoleError):
            service.dummy_login("admin")

    # --------------------------------------------------------------------- #
    # Retrieval / deletion
    # --------------------------------------------------------------------- #

    def test_get_and_delete_user(self, service, repo):
        user = UserFactory()

        assert service.get_user(user.id).email == user.email
        service.delete_user(user.id)

        assert repo.get(user.id) is None
        with pytest.raises(NotFoundError):
            service.get_user(user.id)
        with pytest.raises(NotFoundError):
            service.delete_user(uuid.uuid4())
