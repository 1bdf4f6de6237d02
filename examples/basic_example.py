#!/usr/bin/env python3
## EasyOptions Example
## Copyright (C) Someone
## Licensed under XYZ
##
## This program is an example of EasyOptions. It just prints the options and
## arguments provided in command line. Usage:
##
##     @script.name [option] ARGUMENTS...
##
## Options:
##     -h, --help              All client scripts have this, it can be omitted.
##     -o, --some-option       This is a boolean option. Long version is
##                             mandatory, and can be specified before or
##                             after short version.
##         --some-boolean      This is a boolean option without a short version.
##         --some-value=VALUE  This is a parameter option. When calling your script
##                             the equal sign is optional and blank space can be
##                             used instead. Short version is not available in this
##                             format.

"""
Example script demonstrating the usage of EasyOptions.

The options are declared only once, in the double-hash comments above, which
are also printed by --help.
"""

from easy_options import parse_program


def main() -> None:
    """Main function demonstrating the parser."""
    options, arguments = parse_program()

    # Boolean options
    if options.get("some_option"):
        print("Option specified: --some-option")
    if options.get("some_boolean"):
        print("Option specified: --some-boolean")

    # Parameter option
    value = options.get("some_value")
    if value is not None:
        kind = "number" if isinstance(value, int) else "string"
        print(f"Option specified: --some-value is {value} (a {kind})")

    for argument in arguments:
        print(f"Argument specified: {argument}")


if __name__ == "__main__":
    main()
