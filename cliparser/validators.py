# cliparser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value validators applied to declared options.

Each validator is a small frozen dataclass that is called with the raw option
value (`str`, or `None` when the option was given without a value) and either
returns the coerced scalar to store or raises `ValidationFailure`.

Included Validators:
- AcceptAny: Store the value verbatim (presence becomes `True`).
- ParseInteger: Decimal integers, optionally hex/octal, with a range check.
- ParseFloat: Floating point numbers with a range check.
- ParseBoolean: Truthy/falsy words such as "yes", "off", "1".
- ParseDatetime: Dates and times via `dateutil`.
- MatchPattern: Values matching a regular expression.
- CustomPredicate: Values accepted by a user callable.

`ValidatorKind` names these for declarative schemas (YAML/TOML configs or
plain dicts) and `build_validator()` turns a kind plus its flags and options
into an instance.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Iterable

from dateutil import parser as date_parser

from cliparser.exceptions import SchemaError, ValidationFailure

_DECIMAL = re.compile(r"[+-]?(0|[1-9][0-9]*)")
_HEX = re.compile(r"0[xX][0-9a-fA-F]+")
_OCTAL = re.compile(r"0[oO]?[0-7]+")

TRUE_WORDS = {"1", "true", "on", "yes"}
FALSE_WORDS = {"0", "false", "off", "no"}


class Validator:
    """Base class for option validators."""

    def __call__(self, value: str | None) -> Any:
        raise NotImplementedError

    def _require(self, value: str | None) -> str:
        if value is None:
            raise ValidationFailure(value, "A value is required")
        return value


@dataclass(frozen=True)
class AcceptAny(Validator):
    """Accept any value as given. A missing value is stored as presence."""

    def __call__(self, value: str | None) -> Any:
        return True if value is None else value


@dataclass(frozen=True)
class ParseInteger(Validator):
    """
    Parse an integer.

    Leading zeros are rejected unless `allow_octal` is set, in which case
    `0755` and `0o755` are read as octal. `allow_hex` accepts `0x1F`.
    Surrounding whitespace is ignored.
    """

    minimum: int | None = None
    maximum: int | None = None
    allow_hex: bool = False
    allow_octal: bool = False

    def __call__(self, value: str | None) -> int:
        text = self._require(value).strip()
        if _DECIMAL.fullmatch(text):
            number = int(text, 10)
        elif self.allow_hex and _HEX.fullmatch(text):
            number = int(text[2:], 16)
        elif self.allow_octal and _OCTAL.fullmatch(text):
            number = int(text.lstrip("0oO") or "0", 8)
        else:
            raise ValidationFailure(value, f"'{value}' is not an integer")
        if self.minimum is not None and number < self.minimum:
            raise ValidationFailure(value, f"{number} is less than {self.minimum}")
        if self.maximum is not None and number > self.maximum:
            raise ValidationFailure(value, f"{number} is greater than {self.maximum}")
        return number


@dataclass(frozen=True)
class ParseFloat(Validator):
    """Parse a finite floating point number within an optional range."""

    minimum: float | None = None
    maximum: float | None = None

    def __call__(self, value: str | None) -> float:
        text = self._require(value).strip()
        try:
            number = float(text)
        except ValueError:
            raise ValidationFailure(value, f"'{value}' is not a number") from None
        if number != number or number in (float("inf"), float("-inf")):
            raise ValidationFailure(value, f"'{value}' is not a finite number")
        if self.minimum is not None and number < self.minimum:
            raise ValidationFailure(value, f"{number} is less than {self.minimum}")
        if self.maximum is not None and number > self.maximum:
            raise ValidationFailure(value, f"{number} is greater than {self.maximum}")
        return number


@dataclass(frozen=True)
class ParseBoolean(Validator):
    """
    Parse a boolean word.

    An option given without a value counts as `True`, so `--verbose` and
    `--verbose=yes` are equivalent.
    """

    def __call__(self, value: str | None) -> bool:
        if value is None:
            return True
        text = value.strip().lower()
        if text in TRUE_WORDS:
            return True
        if text in FALSE_WORDS or text == "":
            return False
        raise ValidationFailure(value, f"'{value}' is not a boolean")


@dataclass(frozen=True)
class ParseDatetime(Validator):
    """Parse a date or datetime with `dateutil`."""

    dayfirst: bool = False

    def __call__(self, value: str | None) -> datetime:
        text = self._require(value)
        try:
            return date_parser.parse(text, dayfirst=self.dayfirst)
        except (ValueError, OverflowError) as error:
            raise ValidationFailure(
                value, f"'{value}' could not be parsed as a datetime"
            ) from error


@dataclass(frozen=True)
class MatchPattern(Validator):
    """Accept values in which `pattern` is found."""

    pattern: str
    ignore_case: bool = False
    _compiled: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re.compile(self.pattern, re.IGNORECASE if self.ignore_case else 0)
        except re.error as error:
            raise SchemaError(f"Invalid pattern {self.pattern!r}: {error}") from error
        object.__setattr__(self, "_compiled", compiled)

    def __call__(self, value: str | None) -> str:
        text = self._require(value)
        if not self._compiled.search(text):
            raise ValidationFailure(value, f"'{value}' does not match {self.pattern!r}")
        return text


@dataclass(frozen=True)
class CustomPredicate(Validator):
    """Accept values for which `predicate(value)` is truthy."""

    predicate: Callable[[str | None], Any]

    def __post_init__(self) -> None:
        if not callable(self.predicate):
            raise SchemaError(f"{self.predicate!r} is not callable")

    def __call__(self, value: str | None) -> Any:
        try:
            accepted = self.predicate(value)
        except ValidationFailure:
            raise
        except Exception as error:
            raise ValidationFailure(value, f"Predicate failed: {error}") from error
        if not accepted:
            raise ValidationFailure(value, "Predicate rejected the value")
        return True if value is None else value


class ValidatorKind(Enum):
    """
    Names of the validators for declarative schemas.

    Aliases:
        - "default" → "any"
        - "int" → "integer"
        - "bool" → "boolean"
        - "regexp" / "regex" → "pattern"
        - "callback" → "predicate"
    """

    ANY = "any"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    PATTERN = "pattern"
    PREDICATE = "predicate"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "default": "any",
            "int": "integer",
            "bool": "boolean",
            "regexp": "pattern",
            "regex": "pattern",
            "callback": "predicate",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ValidatorKind:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


_FLAG_NAMES: dict[ValidatorKind, set[str]] = {
    ValidatorKind.INTEGER: {"allow_hex", "allow_octal"},
    ValidatorKind.DATETIME: {"dayfirst"},
    ValidatorKind.PATTERN: {"ignore_case"},
}

_OPTION_NAMES: dict[ValidatorKind, dict[str, str]] = {
    ValidatorKind.INTEGER: {"min": "minimum", "max": "maximum"},
    ValidatorKind.FLOAT: {"min": "minimum", "max": "maximum"},
    ValidatorKind.PATTERN: {"pattern": "pattern", "regexp": "pattern"},
    ValidatorKind.PREDICATE: {"callback": "predicate", "predicate": "predicate"},
}

_VALIDATORS: dict[ValidatorKind, type[Validator]] = {
    ValidatorKind.ANY: AcceptAny,
    ValidatorKind.INTEGER: ParseInteger,
    ValidatorKind.FLOAT: ParseFloat,
    ValidatorKind.BOOLEAN: ParseBoolean,
    ValidatorKind.DATETIME: ParseDatetime,
    ValidatorKind.PATTERN: MatchPattern,
    ValidatorKind.PREDICATE: CustomPredicate,
}


def build_validator(
    kind: ValidatorKind | str,
    flags: Iterable[str] = (),
    options: dict[str, Any] | None = None,
) -> Validator:
    """
    Build a validator from a kind name, boolean flags and keyword options.

    Args:
        kind (ValidatorKind | str): Validator kind or one of its aliases.
        flags (Iterable[str]): Boolean switches, e.g. `["allow_hex"]`.
        options (dict[str, Any] | None): Parameters such as `min`, `max` or
            `pattern`. A `default` entry is ignored here; it belongs to the rule.

    Returns:
        Validator: The configured validator.

    Raises:
        SchemaError: If the kind, a flag or an option is not recognized.
    """
    try:
        kind = ValidatorKind(kind)
    except ValueError as error:
        raise SchemaError(str(error)) from error

    kwargs: dict[str, Any] = {}
    allowed_flags = _FLAG_NAMES.get(kind, set())
    for flag in flags:
        normalized = flag.strip().lower()
        if normalized not in allowed_flags:
            raise SchemaError(f"Flag '{flag}' is not supported by the {kind} validator")
        kwargs[normalized] = True

    allowed_options = _OPTION_NAMES.get(kind, {})
    for name, value in (options or {}).items():
        if name == "default":
            continue
        if name not in allowed_options:
            raise SchemaError(
                f"Option '{name}' is not supported by the {kind} validator"
            )
        kwargs[allowed_options[name]] = value

    try:
        return _VALIDATORS[kind](**kwargs)
    except TypeError as error:
        raise SchemaError(f"Invalid {kind} validator options: {error}") from error
