"""Profile and password form validation."""

from __future__ import annotations

from dataclasses import dataclass

from ...constants.categories import USER_ROLES
from ..auth.forms import CredentialsForm


@dataclass
class ProfileForm(CredentialsForm):
    """Partial profile update; admins may also change ``role``."""

    allow_role: bool = False

    def clean(self) -> None:
        self.text("name", "name", "Name", required=True, max_length=64)
        self.email("email", required=True)
        self.text("currency", "currency", "Currency", max_length=3)
        if "role" in self.raw_data:
            if self.allow_role:
                self.choice("role", "role", "Role", USER_ROLES, required=True)
            else:
                self._add_error("role", "Only administrators can change roles.")


@dataclass
class PasswordForm(CredentialsForm):
    """Represents a password change request."""

    def clean(self) -> None:
        current = self.raw_data.get("currentPassword")
        if not isinstance(current, str) or not current:
            self._add_error("currentPassword", "Current password is required.")
        else:
            self.cleaned["current_password"] = current
        self.password("newPassword", "new_password", "New password")
