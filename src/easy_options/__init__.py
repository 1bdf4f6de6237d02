"""
EasyOptions - command-line options derived from program documentation.

A program documents its options in double-hash (``##``) comments; this
package reads that documentation, derives the accepted options from it and
parses the invocation arguments against them. Results are returned as a
mapping of options plus positional arguments, or printed as shell export
statements for host Bash scripts.
"""

from .errors import (
    CombinedValueOptionError,
    EasyOptionsError,
    MissingValueError,
    SourceUnreadableError,
    UnexpectedValueError,
    UnrecognizedOptionError,
)
from .parser import EasyOptionsParser, parse_program, resolve
from .schema import Option, OptionKind, OptionRegistry, ParsedResult

__version__ = "1.0.0"
__all__ = [
    "CombinedValueOptionError",
    "EasyOptionsError",
    "EasyOptionsParser",
    "MissingValueError",
    "Option",
    "OptionKind",
    "OptionRegistry",
    "ParsedResult",
    "SourceUnreadableError",
    "UnexpectedValueError",
    "UnrecognizedOptionError",
    "parse_program",
    "resolve",
]
