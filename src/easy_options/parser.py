"""
EasyOptionsParser - command-line parsing driven by program documentation.

This module matches invocation arguments against the options documented in
a program's ``##`` comments. It provides a pure resolution function, a parser
class wrapping it, and ``parse_program`` which does the whole job for the
running script, including the shell statements used by host Bash scripts.
"""

import logging
import os
import re
import sys
from typing import Iterable, Mapping, Optional, TextIO

from result import Err, Ok, Result

from .documentation import extract_documentation, read_documentation
from .emitter import render_error, render_exports, render_help
from .errors import (
    EasyOptionsError,
    MissingValueError,
    UnexpectedValueError,
    UnrecognizedOptionError,
)
from .schema import (
    Option,
    OptionKind,
    OptionRegistry,
    OptionValue,
    ParsedResult,
    build_registry,
)
from .tokens import normalize_tokens

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
# Exit status after printing help, distinct from success, errors and the
# usage status 2 used by argparse.
HELP_EXIT_CODE = 3

# Environment variable naming the host script in shell-emission mode.
SOURCE_VARIABLE = "from"

_DIGITS = re.compile(r"[0-9]+")


def coerce_value(value: str) -> OptionValue:
    """Convert a digit-only value to ``int``, keep anything else as a string."""
    if _DIGITS.fullmatch(value):
        return int(value)
    return value


def _find_with_value(registry: OptionRegistry, token: str) -> Optional[Option]:
    for option in registry:
        if option.matches_with_value(token):
            return option
    return None


def resolve_arguments(tokens: list[str], registry: OptionRegistry) -> ParsedResult:
    """
    Match normalized tokens against the registry.

    The token following an exact scalar option is consumed as its value and
    is never a positional argument, even when it starts with a dash. When an
    option is given more than once, the last value wins.

    Args:
        tokens: Tokens as returned by ``normalize_tokens``.
        registry: The options accepted by the program.

    Returns:
        ParsedResult: The resolved options and positional arguments.

    Raises:
        MissingValueError: A scalar option is the last token.
        UnexpectedValueError: A boolean option is given as ``--name=value``.
        UnrecognizedOptionError: A dash-prefixed token matches no option.
    """
    options: dict[str, OptionValue] = {}
    arguments: list[str] = []

    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1

        option = registry.find(token)
        if option is not None:
            if option.boolean:
                options[option.long] = True
            else:
                if index >= len(tokens):
                    raise MissingValueError(option)
                options[option.long] = coerce_value(tokens[index])
                index += 1
            logger.debug("Resolved %s to %r", option, options[option.long])
            continue

        option = _find_with_value(registry, token)
        if option is not None:
            value = token.split("=", 1)[1]
            if option.boolean:
                raise UnexpectedValueError(option, value)
            options[option.long] = coerce_value(value)
            logger.debug("Resolved %s to %r", option, options[option.long])
            continue

        if token.startswith("-"):
            raise UnrecognizedOptionError(token)
        arguments.append(token)

    return ParsedResult(options, arguments)


def resolve(
    documentation: Iterable[str], tokens: Iterable[str]
) -> Result[tuple[OptionRegistry, ParsedResult], EasyOptionsError]:
    """
    Derive the registry from documentation and resolve the tokens against it.

    Args:
        documentation: Documentation lines of the program.
        tokens: Raw invocation arguments.

    Returns:
        Result[tuple[OptionRegistry, ParsedResult], EasyOptionsError]:
            - Ok with the registry and the parse result,
            - Err with the parse error.
    """
    registry = build_registry(documentation)
    try:
        parsed = resolve_arguments(normalize_tokens(tokens, registry), registry)
    except EasyOptionsError as e:
        return Err(e)
    return Ok((registry, parsed))


class EasyOptionsParser:
    """
    A command-line parser whose options come from program documentation.

    Example:
        ## Usage: @script.name [option] FILES...
        ##
        ##     -v, --verbose       Print more.
        ##         --level=LEVEL   Compression level.

        parser = EasyOptionsParser.from_file(__file__)
        options, arguments = parser.parse()
        if options.get("verbose"):
            ...
    """

    def __init__(self, documentation: Iterable[str]) -> None:
        """
        Initialize the parser from documentation lines.

        Args:
            documentation: Lines as returned by the documentation extractor.
        """
        self.documentation: list[str] = list(documentation)
        self.registry: OptionRegistry = build_registry(self.documentation)

    @classmethod
    def from_file(
        cls, path: str, program_name: Optional[str] = None
    ) -> "EasyOptionsParser":
        """Create a parser from the documentation of a source file."""
        return cls(read_documentation(path, program_name))

    @classmethod
    def from_text(cls, text: str, program_name: str) -> "EasyOptionsParser":
        """Create a parser from source text held in memory."""
        return cls(extract_documentation(text, program_name))

    def add_option(
        self, long: str, short: Optional[str] = None, kind: OptionKind = OptionKind.BOOLEAN
    ) -> None:
        """
        Add an option that is not described in the documentation.

        Example:
            parser.add_option("dry-run", "n")

        Raises:
            ValueError: If the name is invalid or already registered.
        """
        self.registry.add(Option(long, short, kind))

    def parse(self, args: Optional[list[str]] = None) -> ParsedResult:
        """
        Parse command-line arguments.

        Args:
            args (Optional[list[str]]): Arguments to parse. If None, uses sys.argv[1:].

        Returns:
            ParsedResult: Options keyed by long name, and positional arguments.

        Raises:
            EasyOptionsError: If the arguments do not match the documented options.
        """
        if args is None:
            args = sys.argv[1:]
        tokens = normalize_tokens(args, self.registry)
        return resolve_arguments(tokens, self.registry)

    def safe_parse(self, args: Optional[list[str]] = None) -> Result[ParsedResult, str]:
        """
        Parse command-line arguments without raising.

        Returns:
            Result[ParsedResult, str]:
                - Ok with the parse result,
                - Err with the error message if parsing fails.
        """
        try:
            return Ok(self.parse(args))
        except EasyOptionsError as e:
            return Err(str(e))

    def run(
        self,
        args: Optional[list[str]] = None,
        shell_output: bool = False,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> ParsedResult:
        """
        Parse arguments the way a program does at start up.

        Errors are reported on ``stderr`` and help is printed on ``stdout``;
        both end the process. With ``shell_output`` the result is also
        printed as export statements for a host Bash script.

        Raises:
            SystemExit: With status 1 on errors, ``HELP_EXIT_CODE`` after help.
        """
        if stdout is None:
            stdout = sys.stdout
        if stderr is None:
            stderr = sys.stderr

        try:
            parsed = self.parse(args)
        except EasyOptionsError as e:
            print(render_error(e), file=stderr)
            if shell_output:
                print("exit 1", file=stdout)
            raise SystemExit(EXIT_FAILURE) from e

        if parsed.options.get("help"):
            print(render_help(self.documentation, shell_output), file=stdout)
            raise SystemExit(HELP_EXIT_CODE)

        if shell_output:
            print(render_exports(parsed), file=stdout)
        return parsed


def parse_program(
    args: Optional[list[str]] = None, environ: Optional[Mapping[str, str]] = None
) -> ParsedResult:
    """
    Parse the arguments of the running program against its own documentation.

    When the ``from`` environment variable is set, the documentation is read
    from the script it names and the result is printed as shell statements::

        eval "$(from="$0" easyoptions "$@" || echo exit 1)"

    Raises:
        SourceUnreadableError: If the documented source cannot be read.
        SystemExit: On parse errors and after printing help.
    """
    if environ is None:
        environ = os.environ
    source = environ.get(SOURCE_VARIABLE) or sys.argv[0]
    shell_output = source == environ.get(SOURCE_VARIABLE)
    logger.debug("Reading documentation from %s (shell output: %s)", source, shell_output)

    parser = EasyOptionsParser.from_file(source)
    return parser.run(args, shell_output=shell_output)
