"""Declarative validation rules, their registry and the validator that runs them."""

from .adapters import rule_validator
from .registry import RuleRegistry, default_registry, validates
from .results import ValidationContext, ValidationResult
from .rules import AfterToday, BeforeToday, CompareNotEqual, SpecificValue, ValidationRule
from .validator import Validator

__all__ = [
    "AfterToday",
    "BeforeToday",
    "CompareNotEqual",
    "SpecificValue",
    "ValidationRule",
    "ValidationContext",
    "ValidationResult",
    "RuleRegistry",
    "default_registry",
    "validates",
    "Validator",
    "rule_validator",
]
