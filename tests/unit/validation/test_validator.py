"""Unit tests for the rule registry and the validator that runs it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

import pytest

from utilkit.exceptions import (
    InvalidArgumentError,
    PropertyNotFoundError,
    TypeMismatchError,
    ValidationFailedError,
)
from utilkit.validation import (
    AfterToday,
    BeforeToday,
    CompareNotEqual,
    RuleRegistry,
    SpecificValue,
    Validator,
    validates,
)

NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture()
def registry() -> RuleRegistry:
    return RuleRegistry()


@pytest.fixture()
def validator(registry: RuleRegistry) -> Validator:
    return Validator(registry=registry, clock=lambda: NOW)


def _booking_type(registry: RuleRegistry):
    @validates("status", SpecificValue("draft", "final"), display_name="Status", registry=registry)
    @validates("ends_at", CompareNotEqual("starts_at", "End must differ from start"), registry=registry)
    @validates("starts_at", AfterToday("Start must be after today"), registry=registry)
    @dataclass
    class Booking:
        starts_at: datetime
        ends_at: datetime
        status: str

    return Booking


def test_validates_registers_rules_in_order(registry):
    """Decorated fields are listed in registration order."""
    booking_cls = _booking_type(registry)
    assert registry.fields_for(booking_cls) == ("starts_at", "ends_at", "status")
    assert registry.display_name(booking_cls, "status") == "Status"
    assert registry.display_name(booking_cls, "starts_at") == "starts_at"
    assert len(registry.rules_for(booking_cls, "starts_at")) == 1


def test_register_rejects_bad_arguments(registry):
    """Owner, field name and rule types are checked on registration."""
    with pytest.raises(InvalidArgumentError):
        registry.register(None, "field", AfterToday("x"))
    with pytest.raises(InvalidArgumentError):
        registry.register(object, "", AfterToday("x"))
    with pytest.raises(InvalidArgumentError):
        registry.register(object, "field", "not a rule")


def test_validate_property_passes_and_fails(registry, validator):
    """The current member value is validated unless a value is supplied."""
    booking_cls = _booking_type(registry)
    booking = booking_cls(
        starts_at=NOW + timedelta(days=1),
        ends_at=NOW + timedelta(days=2),
        status="draft",
    )

    assert validator.validate_property(booking, "starts_at") == []
    assert validator.try_validate_property(booking, "starts_at")

    failures = validator.validate_property(booking, "starts_at", NOW - timedelta(days=1))
    assert [result.error_message for result in failures] == ["Start must be after today"]
    assert not validator.try_validate_property(booking, "starts_at", NOW)


def test_validate_object_collects_every_failure(registry, validator):
    """Every registered member is checked and every failure reported."""
    booking_cls = _booking_type(registry)
    start = NOW - timedelta(days=1)
    booking = booking_cls(starts_at=start, ends_at=start, status="archived")

    failures = validator.validate_object(booking)
    assert [result.member_names for result in failures] == [("starts_at",), ("ends_at",), ("status",)]
    assert failures[1].error_message == "End must differ from start"
    assert failures[2].error_message == "The Status must be one of: 'draft', 'final'"
    assert not validator.try_validate_object(booking)


def test_ensure_valid_raises_with_results(registry, validator):
    """ensure_valid surfaces failures as a single exception."""
    booking_cls = _booking_type(registry)
    booking = booking_cls(starts_at=NOW, ends_at=NOW + timedelta(days=1), status="draft")

    with pytest.raises(ValidationFailedError) as excinfo:
        validator.ensure_valid(booking)
    assert len(excinfo.value.results) == 1
    assert "Start must be after today" in str(excinfo.value)

    booking.starts_at = NOW + timedelta(hours=1)
    validator.ensure_valid(booking)


def test_subclasses_inherit_rules(registry, validator):
    """Rules declared on a base class apply to subclasses."""

    @validates("born_on", BeforeToday("Birth date must be in the past"), registry=registry)
    class Person:
        def __init__(self, born_on: datetime) -> None:
            self.born_on = born_on

    @validates("role", SpecificValue("admin", "user"), registry=registry)
    class Employee(Person):
        def __init__(self, born_on: datetime, role: str) -> None:
            super().__init__(born_on)
            self.role = role

    assert registry.fields_for(Employee) == ("born_on", "role")
    employee = Employee(NOW + timedelta(days=1), "guest")
    assert len(validator.validate_object(employee)) == 2
    assert registry.fields_for(Person) == ("born_on",)


def test_programmer_errors_are_not_verdicts(registry, validator):
    """Type mismatches and missing members raise instead of returning results."""

    @validates("when", AfterToday("after"), registry=registry)
    class Event:
        def __init__(self, when: object) -> None:
            self.when = when

    with pytest.raises(TypeMismatchError):
        validator.validate_property(Event("tomorrow"), "when")
    with pytest.raises(PropertyNotFoundError):
        validator.validate_property(Event(NOW), "missing")
    with pytest.raises(InvalidArgumentError):
        validator.validate_property(None, "when")
    with pytest.raises(InvalidArgumentError):
        validator.validate_property(Event(NOW), "")


def test_unregistered_members_are_valid(validator):
    """A member with no rules has nothing to fail."""

    class Plain:
        name = "x"

    assert validator.validate_property(Plain(), "name") == []
    assert validator.validate_object(Plain()) == []


def test_clear_drops_registrations(registry):
    """clear removes one owner or everything."""
    booking_cls = _booking_type(registry)
    registry.clear(booking_cls)
    assert registry.fields_for(booking_cls) == ()
    assert registry.display_name(booking_cls, "status") == "status"


def test_failures_are_logged(registry, validator, caplog):
    """Failed verdicts emit a validation.failed event at debug level."""
    booking_cls = _booking_type(registry)
    booking = booking_cls(starts_at=NOW, ends_at=NOW + timedelta(days=1), status="draft")

    with caplog.at_level(logging.DEBUG, logger="utilkit.observability"):
        validator.validate_property(booking, "starts_at")
    messages = [record.getMessage() for record in caplog.records if "validation.failed" in record.getMessage()]
    assert messages
    assert "'result': {'valid': False, 'message': 'Start must be after today', 'members': ['starts_at']}" in messages[-1]
