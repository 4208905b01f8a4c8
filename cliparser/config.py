# cliparser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Schema configuration loader for cliparser.

A config file declares the allowed options, flag aliases, strictness and
usage line of a `CLIParser` in YAML or TOML:

    strict: true
    usage: "deploy [options] target"
    options:
      count:
        validator: integer
        options: {min: 0, default: 1}
        value_label: N
        description: Number of replicas
      tag: {}
    flags:
      t: tag

Predicate validators reference a callable by dotted path:

    options:
      env:
        validator: predicate
        options: {callback: "my_app.checks.is_known_env"}
"""
from __future__ import annotations

import importlib
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cliparser.exceptions import ConfigError, SchemaError
from cliparser.logger import logger
from cliparser.schema import RawOptionRule
from cliparser.validators import ValidatorKind

if TYPE_CHECKING:
    from cliparser.parser import CLIParser

CONFIG_NAMES = ("cliparser.yaml", "cliparser.toml", ".cliparser.yaml", ".cliparser.toml")


def import_callable(dotted_path: str) -> Callable[..., Any]:
    """Import a callable from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise SchemaError(f"Invalid callable path: '{dotted_path}'")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise SchemaError(f"Could not import '{dotted_path}': {error}") from error
    try:
        target = getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise SchemaError(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error
    if not callable(target):
        raise SchemaError(f"'{dotted_path}' is not callable")
    return target


def resolve_callbacks(raw_rule: RawOptionRule) -> RawOptionRule:
    """Replace dotted-path predicate callbacks with the imported callables."""
    if raw_rule.validator != ValidatorKind.PREDICATE:
        return raw_rule
    options = dict(raw_rule.options)
    for key in ("callback", "predicate"):
        if isinstance(options.get(key), str):
            options[key] = import_callable(options[key])
    return raw_rule.model_copy(update={"options": options})


class ParserConfig(BaseModel):
    """Parser schema configuration model."""

    model_config = ConfigDict(extra="forbid")

    strict: bool = False
    usage: str = ""
    options: list[str] | dict[str, RawOptionRule | None] | None = None
    flags: dict[str, str] | None = None

    @field_validator("flags")
    @classmethod
    def validate_flags(cls, value: dict[str, str] | None) -> dict[str, str] | None:
        if value is None:
            return value
        for flag in value:
            if len(flag) != 1:
                raise ValueError(f"Flag '{flag}' must be a single character")
        return value

    def allowed_options(self) -> list[str] | dict[str, Any] | None:
        if self.options is None or isinstance(self.options, list):
            return self.options
        return {
            name: resolve_callbacks(rule).to_rule() if rule is not None else None
            for name, rule in self.options.items()
        }

    def apply(self, parser: CLIParser) -> None:
        """Declare this configuration on `parser`."""
        allowed_options = self.allowed_options()
        if allowed_options is not None:
            parser.set_allowed_options(allowed_options)
        if self.flags is not None:
            parser.set_allowed_flags(self.flags)
        parser.set_strict_mode(self.strict)
        if self.usage and not parser.usage:
            parser.usage = self.usage


def load_config(file_path: Path | str) -> ParserConfig:
    """
    Load a parser schema from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file.

    Returns:
        ParserConfig: The validated configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the format is unsupported or the file does not hold a mapping.
        SchemaError: If the declarations are invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigError(f"Could not parse {path}: {error}") from error

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a mapping.\n"
            "Example:\n"
            "strict: true\n"
            "options:\n"
            "  count: {validator: integer}\n"
            "flags:\n"
            "  c: count"
        )

    try:
        config = ParserConfig.model_validate(raw_config)
    except ValidationError as error:
        raise SchemaError(f"Invalid parser config in {path}: {error}") from error
    logger.debug("Loaded parser config from %s", path)
    return config


def find_config() -> Path | None:
    """Return the first existing schema config in the standard locations."""
    candidates = [Path.cwd() / name for name in CONFIG_NAMES]
    env_path = os.environ.get("CLIPARSER_CONFIG")
    if env_path:
        candidates.append(Path(env_path))
    candidates.extend(
        Path.home() / ".config" / "cliparser" / name for name in CONFIG_NAMES[:2]
    )
    return next((path for path in candidates if path.is_file()), None)
