# cliparser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `CLIParser`, a small classifier for raw process
invocation tokens.

Every token ends up in one of four buckets:
- options: `--name`, `--name=value` or `--name value ...`
- flags: `-x`, bundled `-xyz`, `-xyz=value` or `-xyz value ...`, stored under
  the flag itself or under the option it aliases
- commands: bare tokens before the end-of-options marker `--`
- arguments: every token after `--`

Option values are checked against an optional schema. Unknown or invalid
options are recorded as errors; in strict mode the first one aborts the parse
and discards all results except the errors.

Example Usage:
    parser = CLIParser(sys.argv)
    parser.set_allowed_options({"count": ParseInteger(minimum=0), "name": None})
    parser.set_allowed_flags({"c": "count", "n": "name"})
    if not parser.parse():
        print(parser.get_errors())
    parser.get_options()   # {'count': 3, 'name': 'demo'}
    parser.get_commands()  # ['build']
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

from rich.console import Console

from cliparser.logger import logger
from cliparser.parser_types import (
    ErrorKind,
    OptionValue,
    ParseIssue,
    TokenCursor,
    Value,
    wrap_value,
)
from cliparser.schema import ParserSchema, SchemaBuilder, SchemaForm
from cliparser.usage import get_usage_text, render_usage


class _StrictAbort(Exception):
    """Internal signal unwinding `parse()` on the first strict failure."""


class CLIParser:
    """
    Classifies command-line tokens into options, flags, commands and arguments.

    The first element of `args` is taken to be the program name and is not
    parsed. Schema setters may be called any number of times before `parse()`;
    each `parse()` call works from a fresh snapshot of the schema and the
    original tokens, so repeated calls give identical results.
    """

    def __init__(self, args: Sequence[str], usage: str = "") -> None:
        args = list(args)
        self.program: str = args[0] if args else ""
        self.usage: str = usage
        self._tokens: tuple[str, ...] = tuple(args[1:])
        self._builder: SchemaBuilder = SchemaBuilder()
        self._schema: ParserSchema = self._builder.build()
        self._options: dict[str, OptionValue] = {}
        self._commands: list[str] = []
        self._arguments: list[str] = []
        self._issues: list[ParseIssue] = []

    @classmethod
    def from_config(cls, args: Sequence[str], path: Path | str) -> CLIParser:
        """Create a parser configured from a YAML or TOML schema file."""
        from cliparser.config import load_config

        config = load_config(path)
        parser = cls(args, usage=config.usage)
        config.apply(parser)
        return parser

    def set_allowed_options(self, allowed_options: Any) -> None:
        """
        Declare the options accepted by `parse()`.

        Args:
            allowed_options: Either a set/list of option names, accepted with
                any value, or a mapping of option name to a rule (`None`/`{}`,
                a `Validator`, an `OptionRule`, or a rule dict).

        Raises:
            SchemaError: If a rule declaration is malformed.
        """
        self._builder.allow_options(allowed_options)

    def set_allowed_flags(self, allowed_flags: Mapping[str, str]) -> None:
        """
        Declare single-character flags and the options they alias.

        Raises:
            SchemaError: If a flag is not a single character.
        """
        self._builder.allow_flags(allowed_flags)

    def set_strict_mode(self, strict_mode: bool) -> None:
        """Abort `parse()` on the first unknown or invalid option when True."""
        self._builder.strict(strict_mode)

    @property
    def schema(self) -> ParserSchema:
        """Snapshot of the currently declared schema."""
        return self._builder.build()

    @property
    def strict(self) -> bool:
        return self.schema.strict

    def _reset(self) -> None:
        self._options = {}
        self._commands = []
        self._arguments = []

    def _fail(self, issue: ParseIssue) -> bool:
        self._issues.append(issue)
        logger.debug("Parse issue: %s", issue.message)
        if self._schema.strict:
            raise _StrictAbort(issue.message)
        return False

    def _validate_option(self, option: str, value: str | None) -> bool:
        schema = self._schema
        if not schema.has_options or (
            schema.form == SchemaForm.NAMES and option in schema.names
        ):
            self._options[option] = wrap_value(value)
            return True
        if schema.form == SchemaForm.RULES and option in schema.rules:
            rule = schema.rules[option]
            try:
                result = rule.validator(value)
            except Exception as error:
                return self._fail(
                    ParseIssue(ErrorKind.INVALID_OPTION_VALUE, option, value, str(error))
                )
            self._options[option] = wrap_value(result)
            return True
        return self._fail(ParseIssue(ErrorKind.UNKNOWN_OPTION, option))

    def _validate_flag(self, flag: str, value: str | None) -> bool:
        flags = self._schema.flags
        if flags is None:
            self._options[flag] = wrap_value(value)
            return True
        if flag in flags and self._schema.has_options:
            return self._validate_option(flags[flag], value)
        return self._fail(ParseIssue(ErrorKind.UNKNOWN_FLAG, flag))

    def _handle_option(self, token: str, cursor: TokenCursor) -> None:
        spec = token[2:]
        name, equals, value = spec.partition("=")
        if not equals:
            value = cursor.consume_value() or ""
        logger.debug("Option '%s' -> %r", name, value or None)
        self._validate_option(name, value or None)

    def _handle_flags(self, token: str, cursor: TokenCursor) -> None:
        # -abc=value: every flag is first seen without a value, then c gets "value"
        bundle, equals, inline = token[1:].partition("=")
        if not bundle:
            logger.debug("Ignoring flag token without flags: %r", token)
            return
        for flag in bundle:
            self._validate_flag(flag, None)
        last = bundle[-1]
        value = inline if equals else cursor.consume_value()
        logger.debug("Flags %s -> last '%s' = %r", list(bundle), last, value)
        self._validate_flag(last, value)

    def parse(self) -> bool:
        """
        Parse the tokens given at construction against the declared schema.

        Returns:
            bool: False if strict mode aborted on an unknown or invalid option
            or flag, True otherwise. Inspect `get_errors()` in both cases.
        """
        self._schema = self._builder.build()
        self._issues = []
        self._reset()
        self._options.update(
            {name: Value(default) for name, default in self._schema.defaults().items()}
        )

        cursor = TokenCursor(self._tokens)
        end_of_options = False
        try:
            for token in cursor:
                if end_of_options:
                    self._arguments.append(token)
                elif token.startswith("--"):
                    # "--" and any "--x" end options
                    if len(token) <= 3:
                        logger.debug("End of options at %r", token)
                        end_of_options = True
                    else:
                        self._handle_option(token, cursor)
                elif token.startswith("-"):
                    self._handle_flags(token, cursor)
                else:
                    self._commands.append(token)
        except _StrictAbort as abort:
            logger.debug("Strict mode abort: %s", abort)
            self._reset()
            return False

        logger.debug(
            "Parsed %d option(s), %d command(s), %d argument(s), %d error(s)",
            len(self._options),
            len(self._commands),
            len(self._arguments),
            len(self._issues),
        )
        return True

    def get_options(self) -> dict[str, Any]:
        """Parsed options: `True` for bare presence, otherwise the value."""
        return {name: value.unwrap() for name, value in self._options.items()}

    def get_option_values(self) -> dict[str, OptionValue]:
        """Parsed options as tagged `Present` / `Value` entries."""
        return dict(self._options)

    def get_commands(self) -> list[str]:
        return list(self._commands)

    def get_arguments(self) -> list[str]:
        return list(self._arguments)

    def get_errors(self) -> list[str]:
        return [issue.message for issue in self._issues]

    def get_issues(self) -> list[ParseIssue]:
        return list(self._issues)

    def get_usage_text(self, plain_text: bool = False) -> str:
        return get_usage_text(self.schema, self.usage, plain_text=plain_text)

    def render_usage(self, console: Console | None = None) -> None:
        """Print the usage banner for the declared options and flags."""
        render_usage(self.schema, self.usage, console=console)

    def __str__(self) -> str:
        schema = self.schema
        return (
            f"CLIParser(tokens={len(self._tokens)}, "
            f"options={len(schema.option_names())}, "
            f"flags={len(schema.flags or {})}, strict={schema.strict})"
        )

    def __repr__(self) -> str:
        return str(self)
