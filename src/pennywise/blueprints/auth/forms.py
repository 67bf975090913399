"""Registration, login, and credential form validation."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..forms import JSONForm

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6


@dataclass
class CredentialsForm(JSONForm):
    """Adds email and password checks to the base form."""

    def email(self, key: str, *, required: bool = False) -> None:
        self.text(key, "email", "Email", required=required, max_length=255)
        if "email" in self.cleaned and not EMAIL_PATTERN.match(self.cleaned["email"]):
            del self.cleaned["email"]
            self._add_error(key, "Please include a valid email.")

    def password(self, key: str, attr: str, label: str) -> None:
        value = self.raw_data.get(key)
        if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
            self._add_error(key, f"{label} must be at least {MIN_PASSWORD_LENGTH} characters.")
            return
        self.cleaned[attr] = value


@dataclass
class RegisterForm(CredentialsForm):
    """Represents registration input prior to validation."""

    def clean(self) -> None:
        self.text("name", "name", "Name", required=True, max_length=64)
        self.email("email", required=True)
        self.password("password", "password", "Password")


@dataclass
class LoginForm(JSONForm):
    """Represents login input prior to validation."""

    def clean(self) -> None:
        self.text("email", "email", "Email", required=True)
        value = self.raw_data.get("password")
        if not isinstance(value, str) or not value:
            self._add_error("password", "Password is required.")
        else:
            self.cleaned["password"] = value
