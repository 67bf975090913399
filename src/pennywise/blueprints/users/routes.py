"""Profile, password, and admin user-management routes."""

from __future__ import annotations

from ...errors import ForbiddenError
from ...extensions import get_services
from ...security import current_identity, login_required, role_required
from ...serializers import serialize_many, serialize_user
from ...services import auth as auth_service
from ..common import json_body, respond
from . import bp
from .forms import PasswordForm, ProfileForm


def _apply_profile(user_id: int, data: dict):
    return auth_service.update_profile(
        user_id=user_id,
        session_factory=get_services().session_factory,
        name=data.get("name"),
        email=data.get("email"),
        currency=data.get("currency"),
        role=data.get("role"),
    )


@bp.get("/profile")
@login_required
def get_profile():
    return respond(serialize_user(current_identity()))


@bp.put("/profile")
@login_required
def update_profile():
    """Update name, email, or currency for the signed-in user."""

    data = ProfileForm.from_mapping(json_body(), partial=True).validated()
    user = _apply_profile(current_identity().id, data)
    return respond(serialize_user(user))


@bp.delete("/profile")
@login_required
def delete_profile():
    """Delete the signed-in account and everything it owns."""

    auth_service.delete_account(
        user_id=current_identity().id, session_factory=get_services().session_factory
    )
    return respond(message="User deleted")


@bp.put("/password")
@login_required
def change_password():
    data = PasswordForm.from_mapping(json_body()).validated()
    auth_service.change_password(
        user_id=current_identity().id,
        current_password=data["current_password"],
        new_password=data["new_password"],
        session_factory=get_services().session_factory,
    )
    return respond(message="Password updated successfully")


@bp.get("")
@role_required("admin")
def list_users():
    users = auth_service.list_users(get_services().session_factory)
    return respond(serialize_many(users))


@bp.get("/<int:user_id>")
@role_required("admin")
def get_user(user_id: int):
    user = auth_service.require_user(user_id, get_services().session_factory)
    return respond(serialize_user(user))


@bp.put("/<int:user_id>")
@login_required
def update_user(user_id: int):
    """Owners may edit their own profile; admins may edit anyone's, role included."""

    identity = current_identity()
    is_admin = identity.role == "admin"
    if identity.id != user_id and not is_admin:
        raise ForbiddenError()

    data = ProfileForm.from_mapping(json_body(), partial=True, allow_role=is_admin).validated()
    user = _apply_profile(user_id, data)
    return respond(serialize_user(user))


@bp.delete("/<int:user_id>")
@role_required("admin")
def delete_user(user_id: int):
    auth_service.delete_account(user_id=user_id, session_factory=get_services().session_factory)
    return respond(message="User deleted")
