import pytest

from cliparser import CLIParser, ParseInteger


def test_bundled_flags_without_schema():
    parser = CLIParser(["prog", "-abc"])
    assert parser.parse() is True
    assert parser.get_options() == {"a": True, "b": True, "c": True}


def test_bundled_flags_with_inline_value():
    parser = CLIParser(["prog", "-abc=v"])
    assert parser.parse() is True
    assert parser.get_options() == {"a": True, "b": True, "c": "v"}


def test_last_bundled_flag_takes_following_value():
    parser = CLIParser(["prog", "-abc", "v1", "v2", "cmd"])
    assert parser.parse() is True
    assert parser.get_options() == {"a": True, "b": True, "c": "v1 v2 cmd"}
    assert parser.get_commands() == []


def test_lone_hyphen_is_skipped():
    parser = CLIParser(["prog", "-", "cmd"])
    assert parser.parse() is True
    assert parser.get_options() == {}
    assert parser.get_commands() == ["cmd"]


def test_hyphen_equals_without_flags_is_skipped():
    parser = CLIParser(["prog", "-=value"])
    assert parser.parse() is True
    assert parser.get_options() == {}
    assert parser.get_errors() == []


def test_flags_alias_options():
    parser = CLIParser(
        ["prog", "cmd1", "cmd2", "--opt4=val1", "cmd3", "--opt5", "val2", "-ab", "val3",
         "--opt3", "--", "arg1", "arg2"]
    )
    parser.set_allowed_options(["opt1", "opt2", "opt3", "opt4", "opt5"])
    parser.set_allowed_flags({"a": "opt1", "b": "opt2"})
    assert parser.parse() is True
    assert parser.get_options() == {
        "opt4": "val1",
        "opt5": "val2",
        "opt1": True,
        "opt2": "val3",
        "opt3": True,
    }
    assert parser.get_commands() == ["cmd1", "cmd2", "cmd3"]
    assert parser.get_arguments() == ["arg1", "arg2"]


def test_flag_aliasing_undeclared_option_is_unknown_option():
    parser = CLIParser(
        ["prog", "cmd1", "cmd2", "--opt4=val1", "cmd3", "--opt5", "val2", "-ab", "val3",
         "--opt3", "--", "arg1", "arg2"]
    )
    parser.set_allowed_options(["opt2", "opt3", "opt4"])
    parser.set_allowed_flags({"a": "opt1", "b": "opt2"})
    assert parser.parse() is True
    assert parser.get_options() == {"opt4": "val1", "opt2": "val3", "opt3": True}
    assert parser.get_errors() == ['Unknown option "opt5"', 'Unknown option "opt1"']


def test_unmapped_flag_is_unknown():
    parser = CLIParser(["prog", "-xa"])
    parser.set_allowed_options(["alpha"])
    parser.set_allowed_flags({"a": "alpha"})
    assert parser.parse() is True
    assert parser.get_options() == {"alpha": True}
    assert parser.get_errors() == ['Unknown flag "x"']


def test_flags_without_option_schema_are_unknown():
    parser = CLIParser(["prog", "-v", "-o", "out.txt"])
    parser.set_allowed_flags({"v": "verbose", "o": "output"})
    assert parser.parse() is True
    assert parser.get_options() == {}
    assert parser.get_errors() == [
        'Unknown flag "v"',
        'Unknown flag "v"',
        'Unknown flag "o"',
        'Unknown flag "o"',
    ]


def test_flags_without_option_schema_strict():
    parser = CLIParser(["prog", "-v"])
    parser.set_allowed_flags({"v": "verbose"})
    parser.set_strict_mode(True)
    assert parser.parse() is False
    assert parser.get_errors() == ['Unknown flag "v"']


def test_last_flag_is_first_validated_without_value():
    parser = CLIParser(["prog", "-vn", "5"])
    parser.set_allowed_options({"count": ParseInteger(), "verbose": None})
    parser.set_allowed_flags({"n": "count", "v": "verbose"})
    assert parser.parse() is True
    assert parser.get_options() == {"verbose": True, "count": 5}
    assert parser.get_errors() == ['Invalid value for option "count": "null"']

    parser.set_strict_mode(True)
    assert parser.parse() is False
    assert parser.get_options() == {}
    assert parser.get_errors() == ['Invalid value for option "count": "null"']


def test_value_option_in_strict_mode_is_set_through_long_name():
    parser = CLIParser(["prog", "-v", "--count=5"])
    parser.set_allowed_options({"count": ParseInteger(), "verbose": None})
    parser.set_allowed_flags({"n": "count", "v": "verbose"})
    parser.set_strict_mode(True)
    assert parser.parse() is True
    assert parser.get_options() == {"verbose": True, "count": 5}


def test_unknown_last_flag_reported_for_both_checks():
    parser = CLIParser(["prog", "-z"])
    parser.set_allowed_options(["alpha"])
    parser.set_allowed_flags({"a": "alpha"})
    parser.parse()
    assert parser.get_errors() == ['Unknown flag "z"', 'Unknown flag "z"']


def test_unknown_leading_flag_reported_once():
    parser = CLIParser(["prog", "-za"])
    parser.set_allowed_options(["alpha"])
    parser.set_allowed_flags({"a": "alpha"})
    parser.parse()
    assert parser.get_errors() == ['Unknown flag "z"']
    assert parser.get_options() == {"alpha": True}


@pytest.mark.parametrize(
    "token, expected",
    [
        ("-a", {"a": True}),
        ("-a=1", {"a": "1"}),
        ("-ab=", {"a": True, "b": ""}),
        ("-aa", {"a": True}),
    ],
)
def test_flag_shapes(token, expected):
    parser = CLIParser(["prog", token])
    assert parser.parse() is True
    assert parser.get_options() == expected
