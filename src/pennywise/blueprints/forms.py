"""Shared JSON form validation helpers."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Sequence

from ..errors import ValidationError

_MISSING = object()


def parse_datetime(raw: Any) -> datetime:
    """Parse ``YYYY-MM-DD`` or ISO-8601 input into a naive local datetime."""

    if isinstance(raw, datetime):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        if len(text) == 10:
            value = datetime.strptime(text, "%Y-%m-%d")
        else:
            value = datetime.fromisoformat(text)
    else:
        raise ValueError(f"not a date: {raw!r}")
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def parse_amount(raw: Any) -> float:
    """Parse a finite number; booleans are rejected."""

    if isinstance(raw, bool) or raw is None:
        raise ValueError("not a number")
    try:
        value = float(raw)
    except OverflowError as exc:
        raise ValueError("out of range") from exc
    if not math.isfinite(value):
        raise ValueError("not finite")
    return value


@dataclass
class JSONForm:
    """Binds a JSON body and validates it into snake_case model fields.

    With ``partial`` set only the keys present in the body are validated, and
    required fields may be omitted but not cleared.
    """

    partial: bool = False
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    raw_data: dict[str, Any] = field(default_factory=dict, init=False)
    cleaned: dict[str, Any] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, *, partial: bool = False, **options: Any):
        """Create a form populated from request data."""

        form = cls(partial=partial, **options)
        form.load(data or {})
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        """Bind incoming mapping data to the form state."""

        self.raw_data = dict(data)

    def validate(self) -> bool:
        """Validate the bound data and populate ``cleaned``."""

        self.errors.clear()
        self.cleaned = {}
        self.clean()
        return not self.errors

    def validated(self) -> dict[str, Any]:
        """Return cleaned data or raise ``ValidationError`` with the field errors."""

        if not self.validate():
            raise ValidationError(self.errors)
        return self.cleaned

    def clean(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def _add_error(self, field: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field, []).append(message)

    # Field helpers -----------------------------------------------------------

    def _fetch(self, key: str, label: str, *, required: bool) -> Any:
        """Return the raw value for ``key`` or ``_MISSING`` when absent or blank."""

        value = self.raw_data.get(key, _MISSING)
        blank = value is _MISSING or value is None or (isinstance(value, str) and not value.strip())
        if not blank:
            return value
        if required and (not self.partial or key in self.raw_data):
            self._add_error(key, f"{label} is required.")
        return _MISSING

    def text(
        self,
        key: str,
        attr: str,
        label: str,
        *,
        required: bool = False,
        max_length: int | None = None,
        nullable: bool = False,
    ) -> None:
        if nullable and key in self.raw_data and self.raw_data[key] in (None, ""):
            self.cleaned[attr] = None
            return
        value = self._fetch(key, label, required=required)
        if value is _MISSING:
            return
        if not isinstance(value, str):
            self._add_error(key, f"{label} must be text.")
            return
        value = value.strip()
        if max_length is not None and len(value) > max_length:
            self._add_error(key, f"{label} must be {max_length} characters or fewer.")
            return
        self.cleaned[attr] = value

    def amount(
        self,
        key: str,
        attr: str,
        label: str,
        *,
        required: bool = False,
        minimum: float | None = 0.0,
        maximum: float | None = None,
        exclusive_minimum: bool = False,
    ) -> None:
        value = self._fetch(key, label, required=required)
        if value is _MISSING:
            return
        try:
            parsed = parse_amount(value)
        except (TypeError, ValueError):
            self._add_error(key, f"Enter a valid number for {label.lower()}.")
            return
        if minimum is not None:
            if exclusive_minimum and parsed <= minimum:
                self._add_error(key, f"{label} must be greater than {minimum:g}.")
                return
            if parsed < minimum:
                self._add_error(key, f"{label} cannot be less than {minimum:g}.")
                return
        if maximum is not None and parsed > maximum:
            self._add_error(key, f"{label} cannot be more than {maximum:g}.")
            return
        self.cleaned[attr] = parsed

    def date(
        self,
        key: str,
        attr: str,
        label: str,
        *,
        required: bool = False,
        nullable: bool = False,
    ) -> None:
        if nullable and key in self.raw_data and self.raw_data[key] in (None, ""):
            self.cleaned[attr] = None
            return
        value = self._fetch(key, label, required=required)
        if value is _MISSING:
            return
        try:
            self.cleaned[attr] = parse_datetime(value)
        except (TypeError, ValueError):
            self._add_error(key, f"Enter a valid date for {label.lower()} (YYYY-MM-DD).")

    def choice(
        self,
        key: str,
        attr: str,
        label: str,
        choices: Sequence[str],
        *,
        required: bool = False,
    ) -> None:
        value = self._fetch(key, label, required=required)
        if value is _MISSING:
            return
        if value not in choices:
            self._add_error(key, f"{label} must be one of: {', '.join(choices)}.")
            return
        self.cleaned[attr] = value

    def flag(self, key: str, attr: str, label: str) -> None:
        if key not in self.raw_data:
            return
        value = self.raw_data[key]
        if not isinstance(value, bool):
            self._add_error(key, f"{label} must be true or false.")
            return
        self.cleaned[attr] = value

    def string_list(self, key: str, attr: str, label: str) -> None:
        """Trimmed, de-duplicated list of non-empty strings (order preserved)."""

        if key not in self.raw_data:
            return
        value = self.raw_data[key]
        if value is None:
            self.cleaned[attr] = []
            return
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            self._add_error(key, f"{label} must be a list of strings.")
            return
        seen: dict[str, None] = {}
        for item in value:
            item = item.strip()
            if item:
                seen.setdefault(item, None)
        self.cleaned[attr] = list(seen)
