"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class DummyLoginSchema(Schema):
    """Input payload for a role-only login."""

    class Meta:
        unknown = EXCLUDE

    role = fields.String(required=True)


class RegisterSchema(Schema):
    """Input payload for account registration."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(max=128))
    role = fields.String(required=True)


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(max=128))


class TokenResponseSchema(Schema):
    """Response payload containing an access token."""

    token = fields.String(required=True, attribute="access_token")
    role = fields.String(required=True)
    token_type = fields.String(data_key="tokenType", dump_default="bearer")


class UserSchema(Schema):
    """Public representation of a user."""

    id = fields.UUID(required=True)
    email = fields.Email(required=True)
    role = fields.String(required=True)
