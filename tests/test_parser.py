#!/usr/bin/env python3
"""
Tests for resolving invocation arguments against documented options.
"""

import pytest
from result import Err, Ok

from easy_options import (
    EasyOptionsParser,
    MissingValueError,
    OptionKind,
    ParsedResult,
    UnexpectedValueError,
    UnrecognizedOptionError,
    resolve,
)
from easy_options.errors import CombinedValueOptionError
from easy_options.parser import coerce_value

DOCUMENTATION = [
    "EasyOptions Example",
    "",
    "Options:",
    "    -h, --help              Show this help.",
    "    -o, --some-option       A boolean option.",
    "    --all, -a               Another boolean option.",
    "        --some-boolean      A boolean option without short version.",
    "        --some-value=VALUE  An option taking a value.",
]


@pytest.fixture
def parser():
    return EasyOptionsParser(DOCUMENTATION)


class TestParse:
    """Scenarios for EasyOptionsParser.parse."""

    def test_boolean_and_scalar_with_space(self, parser):
        options, arguments = parser.parse(["-o", "--some-value", "10", "abc"])
        assert options == {"some_option": True, "some_value": 10}
        assert arguments == ["abc"]

    def test_scalar_with_equals(self, parser):
        result = parser.parse(["--some-value=10", "abc"])
        assert isinstance(result, ParsedResult)
        assert result.options == {"some_value": 10}
        assert result.arguments == ["abc"]

    def test_no_arguments(self, parser):
        assert parser.parse([]) == ParsedResult({}, [])

    def test_long_boolean_options(self, parser):
        options, _ = parser.parse(["--some-option", "--some-boolean", "--all"])
        assert options == {"some_option": True, "some_boolean": True, "all": True}

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("10", 10),
            ("007", 7),
            ("0", 0),
            ("12a", "12a"),
            ("-5", "-5"),
            ("1.5", "1.5"),
            ("hello world", "hello world"),
            ("", ""),
        ],
    )
    def test_value_coercion(self, parser, value, expected):
        options, _ = parser.parse([f"--some-value={value}"])
        assert options["some_value"] == expected
        assert type(options["some_value"]) is type(expected)

    def test_value_split_on_first_equals(self, parser):
        options, _ = parser.parse(["--some-value=a=b"])
        assert options == {"some_value": "a=b"}

    def test_value_may_start_with_dash(self, parser):
        options, arguments = parser.parse(["--some-value", "-x", "abc"])
        assert options == {"some_value": "-x"}
        assert arguments == ["abc"]

    def test_cluster_equals_separate_flags(self, parser):
        assert parser.parse(["-oa", "abc"]) == parser.parse(["-o", "-a", "abc"])

    def test_positional_order_excludes_consumed_values(self, parser):
        _, arguments = parser.parse(
            ["first", "--some-value", "skipped", "second", "-o", "third"]
        )
        assert arguments == ["first", "second", "third"]

    def test_value_after_equals_form_is_positional(self, parser):
        _, arguments = parser.parse(["--some-value=1", "abc"])
        assert arguments == ["abc"]

    def test_last_value_wins(self, parser):
        options, _ = parser.parse(["--some-value=1", "--some-value", "two"])
        assert options == {"some_value": "two"}

    def test_help_short_and_long(self, parser):
        assert parser.parse(["-h"]).options == {"help": True}
        assert parser.parse(["--help"]).options == {"help": True}


class TestParseErrors:
    """Fatal parse errors."""

    def test_boolean_with_value(self, parser):
        with pytest.raises(UnexpectedValueError) as exc_info:
            parser.parse(["--some-option=10"])
        assert exc_info.value.value == "10"
        assert str(exc_info.value) == (
            "--some-option does not accept a value (you specified '10')"
        )

    def test_missing_value(self, parser):
        with pytest.raises(MissingValueError) as exc_info:
            parser.parse(["--some-value"])
        assert exc_info.value.option.long == "some_value"
        assert str(exc_info.value) == "you must specify a value for --some-value"

    def test_unrecognized_option(self, parser):
        with pytest.raises(UnrecognizedOptionError) as exc_info:
            parser.parse(["abc", "--unknown"])
        assert exc_info.value.token == "--unknown"
        assert str(exc_info.value) == "unrecognized option '--unknown'"

    def test_unrecognized_short_option_in_cluster(self, parser):
        with pytest.raises(UnrecognizedOptionError, match="'-x'"):
            parser.parse(["-ox"])

    def test_errors_are_value_errors(self, parser):
        with pytest.raises(ValueError):
            parser.parse(["--unknown"])


class TestAddOption:
    def test_programmatic_scalar_option(self, parser):
        parser.add_option("level", "l", OptionKind.SCALAR)
        options, arguments = parser.parse(["-l", "3", "abc"])
        assert options == {"level": 3}
        assert arguments == ["abc"]

    def test_scalar_alias_in_cluster_is_rejected(self, parser):
        parser.add_option("level", "l", OptionKind.SCALAR)
        with pytest.raises(CombinedValueOptionError):
            parser.parse(["-ol", "3"])

    def test_conflicts_are_rejected(self, parser):
        with pytest.raises(ValueError, match="Option name conflict"):
            parser.add_option("some-option")
        with pytest.raises(ValueError, match="Option name conflict"):
            parser.add_option("other", "o")


class TestSafeParse:
    def test_ok(self, parser):
        result = parser.safe_parse(["-o"])
        assert isinstance(result, Ok)
        assert result.unwrap().options == {"some_option": True}

    def test_err(self, parser):
        result = parser.safe_parse(["--unknown"])
        assert isinstance(result, Err)
        assert result.unwrap_err() == "unrecognized option '--unknown'"


class TestResolve:
    def test_ok_returns_registry_and_result(self):
        result = resolve(DOCUMENTATION, ["-oa", "--some-value", "x", "abc"])
        assert isinstance(result, Ok)
        registry, parsed = result.unwrap()
        assert "some_value" in registry
        assert parsed == ParsedResult(
            {"some_option": True, "all": True, "some_value": "x"}, ["abc"]
        )

    def test_err_carries_exception(self):
        result = resolve(DOCUMENTATION, ["--some-value"])
        assert isinstance(result, Err)
        assert isinstance(result.unwrap_err(), MissingValueError)


def test_from_text():
    source = "## Usage: @script.name\n##   -q, --quiet  Be quiet.\nprint(1)\n"
    parser = EasyOptionsParser.from_text(source, "prog")
    assert parser.documentation == ["Usage: prog", "  -q, --quiet  Be quiet."]
    assert parser.parse(["-q"]).options == {"quiet": True}


def test_coerce_value():
    assert coerce_value("42") == 42
    assert coerce_value("4 2") == "4 2"
    assert coerce_value("٣") == "٣"


def test_coerce_value_keeps_trailing_newline():
    assert coerce_value("10\n") == "10\n"


class TestDocumentedForms:
    """Options declared in less common documentation layouts."""

    def test_shared_short_alias_keeps_both_options(self):
        parser = EasyOptionsParser(
            ["-v, --verbose  Print more.", "-v, --version  Print the version."]
        )
        assert parser.parse(["-v"]).options == {"verbose": True}
        assert parser.safe_parse(["--version"]).unwrap().options == {"version": True}

    def test_value_placeholder_after_several_spaces(self):
        parser = EasyOptionsParser(["--output  FILE      Write to FILE."])
        options, arguments = parser.parse(["--output", "x.txt"])
        assert options == {"output": "x.txt"}
        assert arguments == []

    def test_short_alias_with_value(self):
        parser = EasyOptionsParser(["-o, --output=FILE  Write to FILE."])
        assert parser.parse(["--output=x"]).options == {"output": "x"}
        assert parser.parse(["-o", "x", "abc"]) == ParsedResult({"output": "x"}, ["abc"])
