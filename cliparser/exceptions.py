# cliparser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by cliparser.

Parsing itself never raises: unknown and invalid options are reported through
`CLIParser.get_errors()`. These exceptions cover mistakes made while declaring
a schema or loading one from disk, plus the failure type validators raise.

Exception Hierarchy:
- CLIParserError
    ├── SchemaError
    ├── ConfigError
    └── ValidationFailure (also a ValueError)
"""


class CLIParserError(Exception):
    """Base exception for cliparser."""


class SchemaError(CLIParserError):
    """Exception raised when an option or flag declaration is malformed."""


class ConfigError(CLIParserError):
    """Exception raised when a schema config file cannot be read."""


class ValidationFailure(CLIParserError, ValueError):
    """Exception raised by a validator that rejects a value."""

    def __init__(self, value: str | None, reason: str = "") -> None:
        self.value = value
        self.reason = reason
        super().__init__(reason or f"Rejected value: {value!r}")
