"""
cliparser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.

Inspect how a token list is classified:

    python -m cliparser --schema=cliparser.yaml --strict -- build --count 3 -v
"""
from __future__ import annotations

import sys
from typing import Any, Sequence

from rich import box
from rich.markup import escape
from rich.table import Table

from cliparser.config import find_config
from cliparser.console import console
from cliparser.exceptions import CLIParserError
from cliparser.parser import CLIParser
from cliparser.schema import OptionRule
from cliparser.utils import setup_logging
from cliparser.validators import AcceptAny, MatchPattern, ParseBoolean

USAGE = "cliparser [options] -- TOKENS..."

CLI_OPTIONS = {
    "schema": OptionRule(
        validator=AcceptAny(),
        value_label="PATH",
        description="Schema config file (YAML or TOML)",
    ),
    "strict": OptionRule(
        validator=ParseBoolean(),
        description="Abort on the first unknown or invalid option",
    ),
    "json": OptionRule(validator=ParseBoolean(), description="Print the result as JSON"),
    "log-mode": OptionRule(
        validator=MatchPattern(r"^(cli|json)$"),
        value_label="MODE",
        description="Enable logging in 'cli' or 'json' mode",
    ),
    "help": OptionRule(validator=ParseBoolean(), description="Show usage and exit"),
}
CLI_FLAGS = {"s": "schema", "j": "json", "h": "help"}


def get_cli_parser(argv: Sequence[str]) -> CLIParser:
    """Parser for the inspection CLI's own options."""
    parser = CLIParser(argv, usage=USAGE)
    parser.set_allowed_options(CLI_OPTIONS)
    parser.set_allowed_flags(CLI_FLAGS)
    parser.set_strict_mode(True)
    return parser


def result_as_dict(parser: CLIParser, success: bool) -> dict[str, Any]:
    return {
        "success": success,
        "options": parser.get_options(),
        "commands": parser.get_commands(),
        "arguments": parser.get_arguments(),
        "errors": parser.get_errors(),
    }


def build_result_table(parser: CLIParser) -> Table:
    """Rich table listing every classified token."""
    table = Table(title="Parse result", box=box.SIMPLE)
    table.add_column("Kind", style="bold")
    table.add_column("Name")
    table.add_column("Value")
    for name, value in parser.get_options().items():
        table.add_row("option", escape(name), escape(repr(value)))
    for position, command in enumerate(parser.get_commands()):
        table.add_row("command", str(position), escape(command))
    for position, argument in enumerate(parser.get_arguments()):
        table.add_row("argument", str(position), escape(argument))
    return table


def main(argv: Sequence[str] | None = None) -> int:
    cli = get_cli_parser(sys.argv if argv is None else argv)
    if not cli.parse():
        for error in cli.get_errors():
            console.print(f"[result.error]{escape(error)}[/]")
        cli.render_usage()
        return 2

    options = cli.get_options()
    if options.get("schema") is True:
        console.print('[result.error]Option "schema" needs a PATH[/]')
        cli.render_usage()
        return 2
    if options.get("log-mode"):
        setup_logging(mode=options["log-mode"])

    if cli.get_commands():
        console.print(
            f"[result.error]Unexpected command(s): {escape(' '.join(cli.get_commands()))}[/]"
            "\nPut the tokens to inspect after '--'."
        )
        return 2

    schema_path = options.get("schema") or find_config()
    tokens = [cli.program, *cli.get_arguments()]
    try:
        if schema_path:
            parser = CLIParser.from_config(tokens, schema_path)
        else:
            parser = CLIParser(tokens)
    except (CLIParserError, FileNotFoundError) as error:
        console.print(f"[result.error]{escape(str(error))}[/]")
        return 2

    if "strict" in options:
        parser.set_strict_mode(options["strict"])

    if options.get("help"):
        if schema_path:
            parser.render_usage()
            console.print()
        cli.render_usage()
        return 0

    success = parser.parse()
    if options.get("json"):
        console.print_json(data=result_as_dict(parser, success), default=str)
    else:
        console.print(build_result_table(parser))
        for error in parser.get_errors():
            console.print(f"[result.error]{escape(error)}[/]")
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
