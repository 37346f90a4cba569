"""Value objects for the appointment request form."""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping

DEFAULT_SERVICE = "Ultrasound (USG)"

SERVICES: tuple[str, ...] = (
    DEFAULT_SERVICE,
    "Doppler",
    "Fetal Doppler",
    "X-ray",
    "Other",
)

REQUIRED_FIELDS: tuple[str, ...] = ("name", "phone", "date")


@dataclass(frozen=True, slots=True)
class AppointmentDraft:
    """The in-progress appointment request held by a booking form."""

    name: str = ""
    phone: str = ""
    email: str = ""
    date: str = ""
    time: str = ""
    service: str = DEFAULT_SERVICE
    message: str = ""

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(item.name for item in fields(cls))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AppointmentDraft":
        """Build a draft from submitted form or JSON data, ignoring unknown keys."""

        values: dict[str, str] = {}
        for key in cls.field_names():
            raw = data.get(key)
            if raw is None:
                continue
            values[key] = raw if isinstance(raw, str) else str(raw)
        return cls(**values)

    def with_field(self, name: str, value: str) -> "AppointmentDraft":
        """Return a copy of the draft with exactly one field replaced."""

        if name not in self.field_names():
            raise ValueError(f"Unknown appointment field: {name!r}")
        return replace(self, **{name: "" if value is None else str(value)})

    def missing_required(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name).strip()]

    def as_form_fields(self) -> dict[str, str]:
        """Serialize all seven fields in form order."""

        return {key: value or "" for key, value in asdict(self).items()}


@dataclass(frozen=True, slots=True)
class SubmissionStatus:
    """Outcome of the latest submission attempt, kept only for display."""

    kind: str = "none"
    message: str = ""

    NONE = "none"
    SUCCESS = "success"
    FAILURE = "failure"

    @classmethod
    def none(cls) -> "SubmissionStatus":
        return cls()

    @classmethod
    def success(cls, message: str) -> "SubmissionStatus":
        return cls(kind=cls.SUCCESS, message=message)

    @classmethod
    def failure(cls, message: str) -> "SubmissionStatus":
        return cls(kind=cls.FAILURE, message=message)

    @property
    def ok(self) -> bool:
        return self.kind == self.SUCCESS

    @property
    def is_none(self) -> bool:
        return self.kind == self.NONE
