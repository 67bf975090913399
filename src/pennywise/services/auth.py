"""Authentication and user management services."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ..constants.categories import USER_ROLES
from ..errors import ConflictError, InvalidCredentialsError, NotFoundError, ValidationError
from ..infra.database import SessionFactory
from ..logging_config import get_logger
from ..models import Budget, Goal, Transaction
from ..models.user import User

logger = get_logger("auth")

_hasher = PasswordHasher()


def normalize_email(email: str) -> str:
    """Emails are the identity key and compare case-insensitively."""

    return (email or "").strip().lower()


def _normalize_role(role: str) -> str:
    role = (role or "user").lower()
    if role not in USER_ROLES:
        raise ValidationError.single("role", f"Invalid role: {role}")
    return role


def _verify_password(password_hash: str, password: str) -> bool:
    try:
        return _hasher.verify(password_hash, password)
    except (VerifyMismatchError, InvalidHash, VerificationError):
        return False


def list_users(session_factory: SessionFactory) -> list[User]:
    """Return all users ordered by creation time."""
    with session_factory() as session:
        users = list(session.exec(select(User).order_by(User.created_at, User.id)).all())
        session.expunge_all()
    return users


def get_user(user_id: int, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by id."""
    with session_factory() as session:
        user = session.get(User, user_id)
        if user:
            session.expunge(user)
        return user


def require_user(user_id: int, session_factory: SessionFactory) -> User:
    user = get_user(user_id, session_factory)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_email(email: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by (normalized) email."""
    email = normalize_email(email)
    with session_factory() as session:
        user = session.exec(select(User).where(User.email == email)).first()
        if user:
            session.expunge(user)
        return user


def register_user(
    *,
    name: str,
    email: str,
    password: str,
    role: str = "user",
    session_factory: SessionFactory,
) -> User:
    """Create a new user with hashed password."""

    normalized_role = _normalize_role(role)
    email = normalize_email(email)
    password_hash = _hasher.hash(password)
    try:
        with session_factory() as session:
            existing = session.exec(select(User.id).where(User.email == email)).first()
            if existing is not None:
                raise ConflictError("User already exists")
            user = User(
                name=name.strip(),
                email=email,
                password_hash=password_hash,
                role=normalized_role,
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
    except IntegrityError as exc:
        # Lost a race with a concurrent registration for the same email.
        raise ConflictError("User already exists") from exc

    logger.info("User registered", extra={"user_id": user.id, "role": user.role})
    return user


def authenticate(*, email: str, password: str, session_factory: SessionFactory) -> User:
    """Validate credentials and return the user.

    Unknown email and wrong password raise the same error.
    """

    email = normalize_email(email)
    with session_factory() as session:
        user = session.exec(select(User).where(User.email == email)).first()
        if user is None or not _verify_password(user.password_hash, password):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()

        user.last_login = datetime.now()
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def update_profile(
    *,
    user_id: int,
    session_factory: SessionFactory,
    name: Optional[str] = None,
    email: Optional[str] = None,
    currency: Optional[str] = None,
    role: Optional[str] = None,
) -> User:
    """Apply a partial profile update; only supplied fields change.

    Profile fields and an optional role change are written in one session.
    """

    normalized_role = _normalize_role(role) if role is not None else None
    with session_factory() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")

        if email is not None:
            email = normalize_email(email)
            if email != user.email:
                taken = session.exec(
                    select(User.id).where(User.email == email, User.id != user_id)
                ).first()
                if taken is not None:
                    raise ConflictError("Email is already in use")
                user.email = email
        if name is not None:
            user.name = name.strip()
        if currency is not None:
            user.currency = currency.upper()
        if normalized_role is not None:
            user.role = normalized_role

        user.updated_at = datetime.now()
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def change_password(
    *,
    user_id: int,
    current_password: str,
    new_password: str,
    session_factory: SessionFactory,
) -> User:
    """Replace the password after verifying the current one."""

    with session_factory() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        if not _verify_password(user.password_hash, current_password):
            raise InvalidCredentialsError("Current password is incorrect")

        user.password_hash = _hasher.hash(new_password)
        user.updated_at = datetime.now()
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)

    logger.info("Password changed", extra={"user_id": user_id})
    return user


def set_role(*, user_id: int, role: str, session_factory: SessionFactory) -> User:
    """Update the role for a user."""

    normalized_role = _normalize_role(role)
    with session_factory() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        user.role = normalized_role
        user.updated_at = datetime.now()
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def delete_account(*, user_id: int, session_factory: SessionFactory) -> None:
    """Delete the user together with every transaction, budget, and goal they own."""

    with session_factory() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")

        connection = session.connection()
        removed = {
            model.__tablename__: connection.execute(
                delete(model).where(model.user_id == user_id)
            ).rowcount
            for model in (Transaction, Budget, Goal)
        }
        session.delete(user)

    logger.info("Account deleted", extra={"user_id": user_id, "removed": removed})
