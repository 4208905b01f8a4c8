from datetime import datetime

import pytest

from cliparser import (
    AcceptAny,
    CLIParser,
    OptionRule,
    ParseBoolean,
    ParseInteger,
    Present,
    SchemaBuilder,
    SchemaError,
    Value,
)
from cliparser.schema import SchemaForm


def test_defaults_are_seeded_as_strings():
    parser = CLIParser(["prog", "cmd"])
    parser.set_allowed_options(
        {
            "count": {"validator": "integer", "options": {"default": 1}},
            "name": OptionRule(default="world"),
            "plain": None,
        }
    )
    assert parser.parse() is True
    assert parser.get_options() == {"count": "1", "name": "world"}


def test_parsed_value_overrides_default():
    parser = CLIParser(["prog", "--count=7"])
    parser.set_allowed_options({"count": {"validator": "int", "options": {"default": 1}}})
    assert parser.parse() is True
    assert parser.get_options() == {"count": 7}


def test_names_form_ignores_nothing_but_unknowns():
    parser = CLIParser(["prog", "--a=1", "--bb", "--cc"])
    parser.set_allowed_options({"a", "bb"})
    assert parser.parse() is True
    assert parser.get_options() == {"a": "1", "bb": True}
    assert parser.get_errors() == ['Unknown option "cc"']


def test_empty_rule_accepts_anything():
    parser = CLIParser(["prog", "--any=value", "--bare"])
    parser.set_allowed_options({"any": {}, "bare": None})
    assert parser.parse() is True
    assert parser.get_options() == {"any": "value", "bare": True}


def test_tagged_option_values():
    parser = CLIParser(["prog", "--bare", "--num=2"])
    parser.set_allowed_options({"bare": AcceptAny(), "num": ParseInteger()})
    parser.parse()
    assert parser.get_option_values() == {"bare": Present(), "num": Value(2)}


def test_false_is_stored_as_value():
    parser = CLIParser(["prog", "--debug=off"])
    parser.set_allowed_options({"debug": ParseBoolean()})
    parser.parse()
    assert parser.get_options() == {"debug": False}
    assert parser.get_option_values() == {"debug": Value(False)}


def test_datetime_rule_from_dict():
    parser = CLIParser(["prog", "--since=2024-05-01"])
    parser.set_allowed_options({"since": {"validator": "datetime"}})
    parser.parse()
    assert parser.get_options() == {"since": datetime(2024, 5, 1)}


def test_rules_form_merges_across_calls():
    builder = SchemaBuilder()
    builder.allow_options({"a": None})
    builder.allow_options({"b": ParseInteger()})
    schema = builder.build()
    assert schema.form == SchemaForm.RULES
    assert list(schema.rules) == ["a", "b"]


def test_switching_form_replaces_schema():
    builder = SchemaBuilder()
    builder.allow_options({"a": None})
    builder.allow_options(["b"])
    schema = builder.build()
    assert schema.form == SchemaForm.NAMES
    assert schema.names == frozenset({"b"})
    assert dict(schema.rules) == {}

    builder.allow_options({"c": None})
    schema = builder.build()
    assert schema.form == SchemaForm.RULES
    assert list(schema.rules) == ["c"]
    assert schema.names == frozenset()


def test_snapshot_is_immutable():
    builder = SchemaBuilder().allow_options({"a": None}).allow_flags({"x": "a"})
    schema = builder.build()
    with pytest.raises(TypeError):
        schema.rules["b"] = OptionRule()  # type: ignore[index]
    with pytest.raises(TypeError):
        schema.flags["y"] = "a"  # type: ignore[index]
    builder.allow_options({"b": None})
    assert list(schema.rules) == ["a"]


def test_flags_for_and_defaults():
    schema = (
        SchemaBuilder()
        .allow_options({"count": OptionRule(default=2), "name": None})
        .allow_flags({"c": "count", "n": "count", "x": "name"})
        .build()
    )
    assert schema.flags_for("count") == ["c", "n"]
    assert schema.flags_for("missing") == []
    assert schema.defaults() == {"count": "2"}


@pytest.mark.parametrize(
    "options",
    [
        "opt1,opt2",
        42,
        ["ok", ""],
        [1, 2],
        {"": None},
        {"a": 5},
        {"a": {"validator": "nonsense"}},
        {"a": {"validator": "integer", "flags": ["ignore_case"]}},
        {"a": {"validator": "integer", "options": {"pattern": "x"}}},
        {"a": {"unexpected": True}},
        {"a": {"validator": "pattern", "options": {"pattern": "("}}},
        {"a": {"validator": "predicate"}},
    ],
)
def test_invalid_option_declarations(options):
    parser = CLIParser(["prog"])
    with pytest.raises(SchemaError):
        parser.set_allowed_options(options)


@pytest.mark.parametrize(
    "flags",
    [
        ["a"],
        {"ab": "alpha"},
        {"": "alpha"},
        {"-": "alpha"},
        {"=": "alpha"},
        {"a": ""},
        {"a": 1},
    ],
)
def test_invalid_flag_declarations(flags):
    parser = CLIParser(["prog"])
    with pytest.raises(SchemaError):
        parser.set_allowed_flags(flags)
