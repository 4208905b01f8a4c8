# cliparser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Usage banner rendering for a `ParserSchema`.

Lists every declared option together with the flags aliasing it, aligned in
columns and followed by its description and default:

    usage: prog [options] command

    options:
      -c, --count=N      How many times (default: 1)
      -n, --name         Name to greet

Flags whose option is not declared are listed on their own. This module only
reads the schema; it never touches parser state.
"""
from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from cliparser.console import console as default_console
from cliparser.schema import ParserSchema, SchemaForm

MAX_COLUMN_WIDTH = 30


def _usage_entries(schema: ParserSchema) -> list[tuple[str, str, str]]:
    """Return `(flags, description, default)` triples in display order."""
    entries: list[tuple[str, str, str]] = []
    declared = set(schema.option_names()) if schema.has_options else set()
    for name in schema.option_names():
        flags = [f"-{flag}" for flag in schema.flags_for(name)]
        rule = schema.rules.get(name) if schema.form == SchemaForm.RULES else None
        option = f"--{name}"
        if rule and rule.value_label:
            option = f"{option}={rule.value_label}"
        description = rule.description if rule else ""
        default = str(rule.default) if rule and rule.default is not None else ""
        entries.append((", ".join(flags + [option]), description, default))

    for flag, target in (schema.flags or {}).items():
        if target not in declared:
            entries.append((f"-{flag}, --{target}", "", ""))
    return entries


def get_usage_text(schema: ParserSchema, usage: str = "", plain_text: bool = False) -> str:
    """
    Render the usage banner as text.

    Args:
        schema (ParserSchema): Declared options and flags.
        usage (str): Synopsis line shown after `usage:`.
        plain_text (bool): Omit Rich markup when True.

    Returns:
        str: The banner, one entry per line.
    """
    lines: list[str] = []
    if usage:
        header = f"usage: {usage if plain_text else escape(usage)}"
        lines.append(header if plain_text else f"[usage.header]{header}[/]")
        lines.append("")

    entries = _usage_entries(schema)
    if not entries:
        return "\n".join(lines).rstrip("\n")

    width = min(max(len(flags) for flags, _, _ in entries), MAX_COLUMN_WIDTH)
    lines.append("options:" if plain_text else "[usage.header]options:[/]")
    for flags, description, default in entries:
        column = f"{flags:<{width}}"
        help_text = description if plain_text else escape(description)
        if default:
            default_text = f"(default: {default})"
            if not plain_text:
                default_text = f"[usage.default]{escape(default_text)}[/]"
            help_text = f"{help_text} {default_text}".strip()
        if not plain_text:
            column = f"[usage.flags]{escape(column)}[/]"
        if help_text and len(flags) > width:
            lines.append(f"  {column}")
            lines.append(f"{'':<{width + 4}}{help_text}")
        else:
            lines.append(f"  {column}  {help_text}".rstrip())
    return "\n".join(lines)


def render_usage(
    schema: ParserSchema, usage: str = "", console: Console | None = None
) -> None:
    """Print the usage banner through the shared Rich console."""
    (console or default_console).print(get_usage_text(schema, usage))
