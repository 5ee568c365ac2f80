"""Authentication endpoints using the identity service."""

from __future__ import annotations

from flask import Blueprint

from pvz_app.api.deps import json_body, json_response, timing
from pvz_app.schemas import (
    DummyLoginSchema,
    LoginSchema,
    RegisterSchema,
    TokenResponseSchema,
    UserSchema,
)
from pvz_app.services.identity.dto import UserAuthIn, UserRegisterIn
from pvz_app.services.identity.service import IdentityService

bp = Blueprint("auth", __name__)

dummy_login_schema = DummyLoginSchema()
register_schema = RegisterSchema()
login_schema = LoginSchema()
token_schema = TokenResponseSchema()
user_schema = UserSchema()


@bp.post("/dummyLogin")
@timing
def dummy_login():
    """Issue a token for a bare role."""

    data = dummy_login_schema.load(json_body())
    token = IdentityService().dummy_login(data["role"])
    return json_response({"data": token_schema.dump(token)})


@bp.post("/register")
@timing
def register():
    """Register a new user and return the created representation."""

    data = register_schema.load(json_body())
    user = IdentityService().register(
        UserRegisterIn(email=data["email"], password=data["password"], role=data["role"])
    )
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue an access token."""

    data = login_schema.load(json_body())
    token = IdentityService().login(UserAuthIn(email=data["email"], password=data["password"]))
    return json_response({"data": token_schema.dump(token)})
