# cliparser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for cliparser output."""
from rich.console import Console
from rich.theme import Theme

CLIPARSER_THEME = Theme(
    {
        "usage.header": "bold",
        "usage.flags": "bold cyan",
        "usage.default": "dim",
        "result.error": "bold red",
        "result.ok": "bold green",
    }
)

console = Console(theme=CLIPARSER_THEME)
