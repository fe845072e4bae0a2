"""Value types exchanged between validation rules and the validator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Verdict returned by a single rule.

    A passing verdict carries no message. A failing verdict carries the rule's
    error message and the member names it applies to.
    """

    is_valid: bool
    error_message: str | None = None
    member_names: tuple[str, ...] = ()

    @classmethod
    def success(cls) -> "ValidationResult":
        return _SUCCESS

    @classmethod
    def failure(cls, message: str | None, *member_names: str) -> "ValidationResult":
        return cls(is_valid=False, error_message=message, member_names=tuple(member_names))

    def __bool__(self) -> bool:
        return self.is_valid

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses and structured logs."""

        if self.is_valid:
            return {"valid": True}
        return {"valid": False, "message": self.error_message, "members": list(self.member_names)}


_SUCCESS = ValidationResult(is_valid=True)


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Describes the member being validated and the object that owns it."""

    instance: Any
    member_name: str | None = None
    display_name: str | None = field(default=None)

    def __post_init__(self) -> None:
        if self.display_name is None and self.member_name:
            object.__setattr__(self, "display_name", self.member_name)


__all__ = ["ValidationResult", "ValidationContext"]
