# cliparser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value, diagnostic and cursor types used by `CLIParser`.

Contents:
- `Present` / `Value`: Tagged option values. An option given without a value
  is `Present`; anything a validator returned is wrapped in `Value`.
- `ErrorKind` / `ParseIssue`: Structured diagnostics recorded during parsing.
- `TokenCursor`: Index-based reader over the immutable token tuple, including
  the greedy value lookahead shared by options and flags.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


@dataclass(frozen=True)
class Present:
    """An option or flag given without a value."""

    def unwrap(self) -> bool:
        return True


@dataclass(frozen=True)
class Value:
    """An option or flag carrying a validated value."""

    value: Any

    def unwrap(self) -> Any:
        return self.value


OptionValue = Union[Present, Value]


def wrap_value(value: Any) -> OptionValue:
    """Wrap a raw result, treating `None` and `True` as presence."""
    if value is None or value is True:
        return Present()
    return Value(value)


class ErrorKind(Enum):
    """Kinds of diagnostics recorded while parsing."""

    UNKNOWN_OPTION = "unknown_option"
    UNKNOWN_FLAG = "unknown_flag"
    INVALID_OPTION_VALUE = "invalid_option_value"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ParseIssue:
    """A single unknown or invalid option or flag."""

    kind: ErrorKind
    name: str
    value: str | None = None
    reason: str = ""

    @property
    def message(self) -> str:
        if self.kind == ErrorKind.UNKNOWN_OPTION:
            return f'Unknown option "{self.name}"'
        if self.kind == ErrorKind.UNKNOWN_FLAG:
            return f'Unknown flag "{self.name}"'
        shown = "null" if self.value is None else self.value
        return f'Invalid value for option "{self.name}": "{shown}"'

    def __str__(self) -> str:
        return self.message


def takes_value(token: str | None) -> bool:
    """Whether a token can be absorbed as a value rather than a new option."""
    return bool(token) and not token.startswith("-")


class TokenCursor:
    """Read position over an immutable sequence of tokens."""

    def __init__(self, tokens: tuple[str, ...]) -> None:
        self.tokens: tuple[str, ...] = tokens
        self.index: int = 0

    def __iter__(self) -> TokenCursor:
        return self

    def __next__(self) -> str:
        if self.index >= len(self.tokens):
            raise StopIteration
        token = self.tokens[self.index]
        self.index += 1
        return token

    def peek(self) -> str | None:
        """Return the next token without consuming it."""
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def consume_value(self) -> str | None:
        """
        Consume consecutive tokens that do not start with a hyphen.

        Returns:
            str | None: The tokens joined by single spaces, or `None` when the
            next token is missing, empty or hyphen-prefixed.
        """
        values: list[str] = []
        while takes_value(self.peek()):
            values.append(self.tokens[self.index])
            self.index += 1
        if not values:
            return None
        return " ".join(values)
