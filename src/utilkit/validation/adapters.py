"""Run utilkit rules inside pydantic models.

``rule_validator`` wraps a rule as a pydantic ``AfterValidator``::

    class Booking(BaseModel):
        starts_at: Annotated[datetime, rule_validator(AfterToday("Start must be in the future"))]
        ends_at: Annotated[datetime, rule_validator(CompareNotEqual("starts_at"))]

Failing verdicts raise ``ValueError`` so pydantic reports them as
``ValidationError`` entries. ``TypeMismatchError`` is not a ``ValueError``
subclass and propagates unchanged, keeping programmer errors apart from
invalid input.

``CompareNotEqual`` only sees siblings declared before the validated field.
Pydantic leaves a field that failed its own validation out of the validated
data, and ``ValidationInfo`` does not expose the model's field list, so a
sibling missing from that data skips the comparison: pydantic then reports
the sibling's own error instead of a crash.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import AfterValidator, ValidationInfo

from utilkit.validation.results import ValidationContext
from utilkit.validation.rules import CompareNotEqual, ValidationRule

logger = logging.getLogger(__name__)


def rule_validator(rule: ValidationRule, *, display_name: str | None = None) -> AfterValidator:
    """Return an ``AfterValidator`` that applies ``rule`` to the field value."""

    def _check(value: Any, info: ValidationInfo) -> Any:
        data = dict(info.data) if info.data is not None else {}
        if isinstance(rule, CompareNotEqual) and rule.other_property not in data:
            logger.debug(
                "Skipping %s on %s: %s was not validated",
                rule.constraint_name,
                info.field_name,
                rule.other_property,
            )
            return value

        context = ValidationContext(
            instance=data,
            member_name=info.field_name,
            display_name=display_name,
        )
        result = rule.validate(value, context)
        if not result.is_valid:
            raise ValueError(result.error_message or f"{rule.constraint_name} failed")
        return value

    return AfterValidator(_check)


__all__ = ["rule_validator"]
