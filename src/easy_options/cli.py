## EasyOptions
##
## Parses command line options documented in double-hash comments. Document
## a script like this:
##
##     ## Usage: @#script.name [option] ARGUMENTS...
##     ##
##     ##     -o, --some-option       A boolean option, stored as true.
##     ##         --some-boolean      A boolean option without short version.
##     ##         --some-value=VALUE  An option taking a value. Digit-only
##     ##                             values become integers.
##
## Python programs call easy_options.parse_program(). Bash scripts evaluate
## the export statements printed when the $from variable names them:
##
##     eval "$(from="$0" @script.name "$@" || echo exit 1)"
##
## Without $from, @script.name is an example of itself: it prints the options
## and arguments it was given.
##
## Usage: @script.name [option] ARGUMENTS...
##
## Options:
##     -h, --help              Show this documentation.
##         --format=FORMAT     Output format, yaml (default) or json.
##
## Set EASYOPTIONS_DEBUG to log how options are derived and resolved.

"""Command-line entry point of the ``easyoptions`` tool."""

import logging
import os
import sys
from typing import Optional

from .emitter import OUTPUT_FORMATS, render_error, render_structured
from .errors import SourceUnreadableError
from .parser import EXIT_FAILURE, SOURCE_VARIABLE, EasyOptionsParser, parse_program
from .schema import ParsedResult

PROGRAM_NAME = "easyoptions"
DEBUG_VARIABLE = "EASYOPTIONS_DEBUG"


def main(args: Optional[list[str]] = None) -> None:
    """Run the tool for a host script, or as an example of itself."""
    if os.environ.get(DEBUG_VARIABLE):
        logging.basicConfig(level=logging.DEBUG)

    try:
        if os.environ.get(SOURCE_VARIABLE):
            parse_program(args)
            return
        parser = EasyOptionsParser.from_file(__file__, PROGRAM_NAME)
    except SourceUnreadableError as e:
        print(render_error(e), file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    options, arguments = parser.run(args)
    output_format = options.pop("format", "yaml")
    if output_format not in OUTPUT_FORMATS:
        print(
            render_error(ValueError(f"unsupported output format '{output_format}'")),
            file=sys.stderr,
        )
        sys.exit(EXIT_FAILURE)

    print(render_structured(ParsedResult(options, arguments), output_format))
