"""Registration and login routes."""

from __future__ import annotations

from ...extensions import get_services
from ...serializers import serialize_user
from ...services import auth as auth_service
from ...services.tokens import issue_token
from ..common import json_body, respond
from . import bp
from .forms import LoginForm, RegisterForm


@bp.post("/register")
def register():
    """Create an account and return a session token."""

    data = RegisterForm.from_mapping(json_body()).validated()
    user = auth_service.register_user(
        name=data["name"],
        email=data["email"],
        password=data["password"],
        session_factory=get_services().session_factory,
    )
    return respond(status=201, token=issue_token(user.id), user=serialize_user(user))


@bp.post("/login")
def login():
    """Exchange credentials for a session token."""

    data = LoginForm.from_mapping(json_body()).validated()
    user = auth_service.authenticate(
        email=data["email"],
        password=data["password"],
        session_factory=get_services().session_factory,
    )
    return respond(token=issue_token(user.id), user=serialize_user(user))
