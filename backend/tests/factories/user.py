"""Factory Boy definition for :class:`pvz_app.models.User`."""

from __future__ import annotations

import factory

from pvz_app.models.base import new_id
from pvz_app.models.user import Role, User
from tests.factories import BaseFactory


class UserFactory(BaseFactory):
    """Build persisted :class:`User` instances with a hashed password."""

    class Meta:
        model = User

    id = factory.LazyFunction(new_id)
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    role = Role.EMPLOYEE.value
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        obj.password = extracted or "Passw0rd!"
