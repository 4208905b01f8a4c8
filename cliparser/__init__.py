"""
cliparser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import CLIParserError, ConfigError, SchemaError, ValidationFailure
from .parser import CLIParser
from .parser_types import ErrorKind, ParseIssue, Present, Value
from .schema import OptionRule, ParserSchema, SchemaBuilder
from .validators import (
    AcceptAny,
    CustomPredicate,
    MatchPattern,
    ParseBoolean,
    ParseDatetime,
    ParseFloat,
    ParseInteger,
    Validator,
    ValidatorKind,
)

logger = logging.getLogger("cliparser")


__all__ = [
    "CLIParser",
    "OptionRule",
    "ParserSchema",
    "SchemaBuilder",
    "Validator",
    "ValidatorKind",
    "AcceptAny",
    "ParseInteger",
    "ParseFloat",
    "ParseBoolean",
    "ParseDatetime",
    "MatchPattern",
    "CustomPredicate",
    "Present",
    "Value",
    "ErrorKind",
    "ParseIssue",
    "CLIParserError",
    "SchemaError",
    "ConfigError",
    "ValidationFailure",
]
