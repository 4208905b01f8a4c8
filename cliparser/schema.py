# cliparser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Option and flag schema declarations for `CLIParser`.

A schema is assembled with `SchemaBuilder`, which absorbs any number of
setter calls, and frozen into a `ParserSchema` snapshot every time the parser
runs. Option declarations come in two forms:

- names form: a set/list/tuple of option names, accepted without validation.
- rules form: a mapping of option name to an `OptionRule`, which carries a
  `Validator` plus an optional default, value label and description.

Rule values in the mapping may be given as `None` or `{}` (accept anything),
a `Validator`, an `OptionRule`, or a plain dict that is validated through the
`RawOptionRule` pydantic model (the same shape used in YAML/TOML configs).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cliparser.exceptions import SchemaError
from cliparser.logger import logger
from cliparser.validators import AcceptAny, Validator, ValidatorKind, build_validator


class SchemaForm(Enum):
    """How allowed options were declared."""

    NAMES = "names"
    RULES = "rules"


@dataclass(frozen=True)
class OptionRule:
    """
    Validation and display metadata for one option.

    Attributes:
        validator (Validator): Checks and coerces the option value.
        default (Any): Seeded into the results before parsing, as a string.
        value_label (str): Placeholder shown in usage, e.g. `--count=N`.
        description (str): Help text shown in usage.
    """

    validator: Validator = field(default_factory=AcceptAny)
    default: Any = None
    value_label: str = ""
    description: str = ""


class RawOptionRule(BaseModel):
    """Declarative option rule as written in dicts and config files."""

    model_config = ConfigDict(extra="forbid")

    validator: ValidatorKind = ValidatorKind.ANY
    flags: list[str] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)
    value_label: str = ""
    description: str = ""

    @field_validator("validator", mode="before")
    @classmethod
    def validate_validator(cls, value: Any) -> ValidatorKind:
        if isinstance(value, ValidatorKind):
            return value
        return ValidatorKind(value)

    def to_rule(self) -> OptionRule:
        return OptionRule(
            validator=build_validator(self.validator, self.flags, self.options),
            default=self.options.get("default"),
            value_label=self.value_label,
            description=self.description,
        )


def normalize_rule(name: str, declaration: Any) -> OptionRule:
    """Convert any supported rule declaration into an `OptionRule`."""
    if not isinstance(name, str) or not name:
        raise SchemaError(f"Option names must be non-empty strings, got {name!r}")
    if declaration is None or (isinstance(declaration, Mapping) and not declaration):
        return OptionRule()
    if isinstance(declaration, OptionRule):
        return declaration
    if isinstance(declaration, Validator):
        return OptionRule(validator=declaration)
    if isinstance(declaration, Mapping):
        try:
            return RawOptionRule.model_validate(dict(declaration)).to_rule()
        except ValidationError as error:
            raise SchemaError(f"Invalid rule for option '{name}': {error}") from error
    raise SchemaError(
        f"Invalid rule for option '{name}': expected a Validator, OptionRule, "
        f"dict or None, got {type(declaration).__name__}"
    )


@dataclass(frozen=True)
class ParserSchema:
    """Immutable snapshot of the allowed options, flags and strictness."""

    form: SchemaForm | None = None
    names: frozenset[str] = frozenset()
    rules: Mapping[str, OptionRule] = field(default_factory=dict)
    flags: Mapping[str, str] | None = None
    strict: bool = False

    @property
    def has_options(self) -> bool:
        return self.form is not None

    def defaults(self) -> dict[str, str]:
        """Declared defaults, stringified, in declaration order."""
        return {
            name: str(rule.default)
            for name, rule in self.rules.items()
            if rule.default is not None
        }

    def option_names(self) -> list[str]:
        if self.form == SchemaForm.RULES:
            return list(self.rules)
        return sorted(self.names)

    def flags_for(self, option: str) -> list[str]:
        """Flags aliasing `option`, in declaration order."""
        return [flag for flag, target in (self.flags or {}).items() if target == option]


class SchemaBuilder:
    """
    Accumulates option, flag and strict-mode declarations.

    Declaring options in the rules form merges with earlier rules; switching
    between the names and rules forms replaces what was declared before.
    """

    def __init__(self) -> None:
        self._form: SchemaForm | None = None
        self._names: set[str] = set()
        self._rules: dict[str, OptionRule] = {}
        self._flags: dict[str, str] | None = None
        self._strict: bool = False

    def allow_options(self, options: Any) -> SchemaBuilder:
        if isinstance(options, Mapping):
            rules = {name: normalize_rule(name, rule) for name, rule in options.items()}
            if self._form != SchemaForm.RULES:
                self._names = set()
                self._rules = {}
            self._form = SchemaForm.RULES
            self._rules.update(rules)
        elif isinstance(options, (set, frozenset, list, tuple)):
            for name in options:
                if not isinstance(name, str) or not name:
                    raise SchemaError(
                        f"Option names must be non-empty strings, got {name!r}"
                    )
            self._form = SchemaForm.NAMES
            self._names = set(options)
            self._rules = {}
        else:
            raise SchemaError(
                "Allowed options must be a set/list of names or a mapping of rules, "
                f"got {type(options).__name__}"
            )
        logger.debug("Allowed options (%s form): %s", self._form.value, options)
        return self

    def allow_flags(self, flags: Mapping[str, str]) -> SchemaBuilder:
        if not isinstance(flags, Mapping):
            raise SchemaError(
                f"Allowed flags must be a mapping of flag to option, got {type(flags).__name__}"
            )
        for flag, target in flags.items():
            if not isinstance(flag, str) or len(flag) != 1:
                raise SchemaError(f"Flag '{flag}' must be a single character")
            if flag in ("-", "="):
                raise SchemaError(f"'{flag}' cannot be used as a flag")
            if not isinstance(target, str) or not target:
                raise SchemaError(
                    f"Flag '{flag}' must map to an option name, got {target!r}"
                )
        self._flags = dict(flags)
        logger.debug("Allowed flags: %s", self._flags)
        return self

    def strict(self, strict: bool = True) -> SchemaBuilder:
        self._strict = bool(strict)
        return self

    def build(self) -> ParserSchema:
        return ParserSchema(
            form=self._form,
            names=frozenset(self._names),
            rules=MappingProxyType(dict(self._rules)),
            flags=MappingProxyType(dict(self._flags)) if self._flags is not None else None,
            strict=self._strict,
        )
