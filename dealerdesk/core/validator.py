"""
Declarative form validation.

An EntitySchema maps field names to rules. validate() checks every field,
then the cross-field rules, and returns ALL failures at once; it never
raises for bad input.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from dateutil import parser as date_parser

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

Cleaned = Tuple[Any, Optional[str]]
CrossFieldRule = Callable[[Dict[str, Any]], Mapping[str, str]]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# =====================================================
# FIELD RULES
# =====================================================

@dataclass
class StringField:
    message: str = "Required"
    min_length: int = 1
    optional: bool = False
    email: bool = False
    choices: Optional[Sequence[str]] = None
    invalid_message: str = "Invalid value"

    def clean(self, value: Any) -> Cleaned:
        if _is_blank(value):
            return ("", None) if self.optional else (None, self.message)

        if isinstance(value, bool):
            return None, self.invalid_message

        text = str(value).strip()

        if self.choices is not None:
            if text not in self.choices:
                return None, self.invalid_message
            return text, None

        if len(text) < self.min_length:
            return None, self.message

        if self.email and not EMAIL_RE.match(text):
            return None, self.invalid_message

        return text, None


@dataclass
class NumberField:
    message: str = "Must be positive"
    minimum: Optional[float] = None
    kind: str = "decimal"  # decimal | int | float
    default: Any = None
    optional: bool = False
    required_message: str = "Required"

    def _convert(self, value: Any):
        number = Decimal(str(value).strip())
        if not number.is_finite():
            raise InvalidOperation(value)
        if self.kind == "int":
            if number != number.to_integral_value():
                raise ValueError("Must be a whole number")
            return int(number)
        if self.kind == "float":
            return float(number)
        return number

    def clean(self, value: Any) -> Cleaned:
        if _is_blank(value):
            if self.default is not None:
                return self._convert(self.default), None
            if self.optional:
                return None, None
            return None, self.required_message

        if isinstance(value, bool):
            return None, "Must be a number"

        try:
            number = self._convert(value)
        except ValueError as exc:
            return None, str(exc)
        except (InvalidOperation, ArithmeticError):
            return None, "Must be a number"

        if self.minimum is not None and number < self.minimum:
            return None, self.message

        return number, None


@dataclass
class BooleanField:
    default: bool = False

    TRUE = ("true", "yes", "on", "1")
    FALSE = ("false", "no", "off", "0")

    def clean(self, value: Any) -> Cleaned:
        if value is None or value == "":
            return self.default, None
        if isinstance(value, bool):
            return value, None
        text = str(value).strip().lower()
        if text in self.TRUE:
            return True, None
        if text in self.FALSE:
            return False, None
        return None, "Must be true or false"


@dataclass
class DateField:
    message: str = "Date is required"
    invalid_message: str = "Invalid date"

    def clean(self, value: Any) -> Cleaned:
        if _is_blank(value):
            return None, self.message
        if isinstance(value, datetime):
            return value.date().isoformat(), None
        if isinstance(value, date):
            return value.isoformat(), None
        try:
            return date_parser.parse(str(value)).date().isoformat(), None
        except (ValueError, OverflowError):
            return None, self.invalid_message


# =====================================================
# RESULT CONTRACT
# =====================================================

@dataclass
class ValidationResult:
    record: Optional[Dict[str, Any]] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors and self.record is not None


# =====================================================
# SCHEMA
# =====================================================

@dataclass
class EntitySchema:
    fields: Dict[str, Any]
    rules: List[CrossFieldRule] = field(default_factory=list)

    def validate(self, values: Optional[Mapping[str, Any]]) -> ValidationResult:
        values = values or {}
        record: Dict[str, Any] = {}
        errors: Dict[str, str] = {}

        for name, rule in self.fields.items():
            cleaned, error = rule.clean(values.get(name))
            if error:
                errors[name] = error
            else:
                record[name] = cleaned

        # Cross-field rules see only fields that passed on their own
        for rule in self.rules:
            for name, message in (rule(record) or {}).items():
                errors.setdefault(name, message)

        if errors:
            return ValidationResult(errors=errors)
        return ValidationResult(record=record)

    def coerce(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Lenient typing for trusted seed records: every field that cleans
        is replaced by its typed value, anything else is kept as given.
        """
        typed = dict(record)
        for name, rule in self.fields.items():
            if name not in typed:
                continue
            cleaned, error = rule.clean(typed[name])
            if not error:
                typed[name] = cleaned
        return typed
