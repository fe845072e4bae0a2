"""Unit tests for utilkit.validation.rules."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, dataclass
from datetime import date, datetime, timedelta, timezone

import pytest

from utilkit.exceptions import InvalidArgumentError, PropertyNotFoundError, TypeMismatchError
from utilkit.validation import (
    AfterToday,
    BeforeToday,
    CompareNotEqual,
    SpecificValue,
    ValidationContext,
    ValidationResult,
)

NOW = datetime(2024, 6, 1, 12, 0, 0)


@dataclass
class Credentials:
    username: str | None
    password: str | None


def _context(instance: object = None, member: str = "value") -> ValidationContext:
    return ValidationContext(instance=instance, member_name=member)


@pytest.mark.parametrize("message", [None, ""])
def test_date_rules_require_error_message(message):
    """Empty or missing error messages fail at construction."""
    with pytest.raises(InvalidArgumentError):
        AfterToday(message)
    with pytest.raises(InvalidArgumentError):
        BeforeToday(message)


@pytest.mark.parametrize(
    "offset,expected",
    [
        (timedelta(seconds=1), True),
        (timedelta(days=365), True),
        (timedelta(0), False),
        (timedelta(seconds=-1), False),
        (timedelta(days=-365), False),
    ],
)
def test_after_today_is_strict(offset, expected):
    """Only moments strictly later than now pass."""
    rule = AfterToday("must be after today")
    result = rule.validate(NOW + offset, _context(), now=NOW)
    assert result.is_valid is expected
    if not expected:
        assert result.error_message == "must be after today"
        assert result.member_names == ("value",)


@pytest.mark.parametrize(
    "offset,expected",
    [
        (timedelta(seconds=-1), True),
        (timedelta(days=-365), True),
        (timedelta(0), False),
        (timedelta(seconds=1), False),
    ],
)
def test_before_today_is_strict(offset, expected):
    """Only moments strictly earlier than now pass."""
    rule = BeforeToday("must be before today")
    assert rule.validate(NOW + offset, _context(), now=NOW).is_valid is expected


def test_date_rules_default_to_current_time():
    """Without an explicit reference moment the current time is used."""
    future = datetime.now() + timedelta(days=365)
    past = datetime.now() - timedelta(days=365)

    assert AfterToday("after").validate(future, _context()).is_valid
    assert not AfterToday("after").validate(past, _context()).is_valid
    assert BeforeToday("before").validate(past, _context()).is_valid
    assert not BeforeToday("before").validate(future, _context()).is_valid


def test_date_rules_handle_aware_values():
    """Timezone-aware values are compared against an aware now."""
    future = datetime.now(timezone.utc) + timedelta(hours=1)
    assert AfterToday("after").validate(future, _context()).is_valid


@pytest.mark.parametrize("value", ["2030-01-01", 42, None, date(2030, 1, 1)])
def test_date_rules_reject_non_datetime_values(value):
    """A non-datetime value is a programmer error, not an invalid verdict."""
    with pytest.raises(TypeMismatchError):
        AfterToday("after").validate(value, _context())
    with pytest.raises(TypeMismatchError):
        BeforeToday("before").validate(value, _context())


def test_date_rules_reject_mixed_naive_and_aware():
    """Comparing naive values with an aware reference is a type mismatch."""
    aware_now = datetime(2024, 6, 1, tzinfo=timezone.utc)
    with pytest.raises(TypeMismatchError):
        AfterToday("after").validate(NOW, _context(), now=aware_now)


def test_rules_are_immutable():
    """Rules cannot be changed after construction."""
    rule = AfterToday("after")
    with pytest.raises(FrozenInstanceError):
        rule.error_message = "changed"  # type: ignore[misc]
    allowed = SpecificValue("a")
    with pytest.raises(AttributeError):
        allowed.extra = 1  # type: ignore[attr-defined]


@pytest.mark.parametrize("other", [None, ""])
def test_compare_not_equal_requires_other_property(other):
    """The sibling property name is mandatory."""
    with pytest.raises(InvalidArgumentError):
        CompareNotEqual(other)


def test_compare_not_equal_passes_when_values_differ():
    """Different sibling values pass."""
    creds = Credentials(username="alice", password="s3cret")
    rule = CompareNotEqual("username")
    assert rule.validate(creds.password, _context(creds, "password")).is_valid


def test_compare_not_equal_fails_with_synthesised_message():
    """Equal values fail and name the validated member when no message is set."""
    creds = Credentials(username="alice", password="alice")
    context = ValidationContext(instance=creds, member_name="password", display_name="Password")
    result = CompareNotEqual("username").validate(creds.password, context)
    assert not result.is_valid
    assert result.error_message == "The Password is invalid"


def test_compare_not_equal_uses_configured_message():
    """A configured message wins over the synthesised one."""
    creds = Credentials(username="alice", password="alice")
    rule = CompareNotEqual("username", "Password must differ from username")
    result = rule.validate(creds.password, _context(creds, "password"))
    assert result.error_message == "Password must differ from username"
    assert rule.error_message == "Password must differ from username"


def test_compare_not_equal_reads_mapping_instances():
    """Mappings are read by key."""
    rule = CompareNotEqual("username")
    assert not rule.validate("bob", _context({"username": "bob"}, "password")).is_valid
    assert rule.validate("bob", _context({"username": "eve"}, "password")).is_valid


def test_compare_not_equal_missing_sibling_raises_by_default():
    """A sibling that does not exist is an error."""
    creds = Credentials(username="alice", password="x")
    with pytest.raises(PropertyNotFoundError):
        CompareNotEqual("email").validate("x", _context(creds, "password"))


def test_compare_not_equal_missing_sibling_reads_as_none_when_not_required():
    """Legacy mode treats a missing sibling as None."""
    creds = Credentials(username="alice", password="x")
    rule = CompareNotEqual("email", require_sibling=False)
    assert rule.validate("x", _context(creds, "password")).is_valid
    assert not rule.validate(None, _context(creds, "password")).is_valid


def test_compare_not_equal_follows_settings(monkeypatch):
    """The default for missing siblings comes from settings."""
    from utilkit.settings import reload_settings

    monkeypatch.setenv("UTILKIT_VALIDATION_REQUIRE_SIBLING_PROPERTY", "false")
    reload_settings()
    creds = Credentials(username="alice", password="x")
    assert CompareNotEqual("email").validate("x", _context(creds, "password")).is_valid


def test_specific_value_rejects_absent_set():
    """The allowed set itself may not be None."""
    with pytest.raises(InvalidArgumentError):
        SpecificValue(None)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("draft", True),
        ("final", True),
        (3, True),
        ("archived", False),
        (None, False),
        (4, False),
    ],
)
def test_specific_value_membership(value, expected):
    """Valid iff the value is present and in the allowed set."""
    rule = SpecificValue("draft", "final", 3)
    assert rule.is_valid(value) is expected
    assert rule.validate(value, _context(member="status")).is_valid is expected


def test_specific_value_with_empty_set_rejects_everything():
    """An empty allowed set is permitted and accepts nothing."""
    rule = SpecificValue()
    assert rule.values == ()
    assert not rule.is_valid("anything")


def test_specific_value_failure_message_lists_allowed_values():
    """The failure message names the member and the allowed values."""
    result = SpecificValue("a", "b").validate("c", _context(member="grade"))
    assert result.error_message == "The grade must be one of: 'a', 'b'"


def test_validation_result_helpers():
    """Success and failure constructors produce the expected values."""
    assert ValidationResult.success().is_valid
    assert bool(ValidationResult.success())
    failure = ValidationResult.failure("bad", "field")
    assert not failure
    assert failure.to_dict() == {"valid": False, "message": "bad", "members": ["field"]}
    assert ValidationResult.success().to_dict() == {"valid": True}
