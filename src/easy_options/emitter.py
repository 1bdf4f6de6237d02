"""
Rendering of parse results, help text and errors.

Two output forms are supported: plain text for programs consuming the
structured result in-process, and shell statements meant to be evaluated by
a host Bash script::

    eval "$(from="$0" easyoptions "$@" || echo exit 1)"
"""

import json
from typing import Any, Iterable

import yaml

from .schema import ParsedResult

HELP_HINT = "See --help for usage and options."

OUTPUT_FORMATS = ("yaml", "json")


def _printf_quote(text: str) -> str:
    """Escape text for a single-quoted printf format string."""
    text = text.replace("\\", "\\\\").replace("%", "%%")
    return text.replace("'", "'\\''")


def _double_quote(text: str) -> str:
    """Escape text for use inside a double-quoted shell word."""
    for char in ("\\", '"', "$", "`"):
        text = text.replace(char, "\\" + char)
    return text


def _shell_value(value: Any) -> str:
    # booleans are exported as "yes"
    if value is True:
        return "yes"
    return str(value)


def render_help(lines: Iterable[str], shell_output: bool = False) -> str:
    """
    Render the documentation as help text.

    Args:
        lines: Documentation lines.
        shell_output: Wrap the text in a ``printf`` statement followed by
            ``exit`` so that a host script can evaluate it.

    Returns:
        str: The help output, without a trailing newline.
    """
    text = "\n".join(lines)
    if not shell_output:
        return text
    return f"printf '{_printf_quote(text)}\\n'\nexit"


def render_exports(parsed: ParsedResult) -> str:
    """
    Render a parse result as shell export statements.

    Options are exported under their long names, positional arguments are
    collected in the ``arguments`` array.
    """
    statements = [
        f'export {name}="{_double_quote(_shell_value(value))}"'
        for name, value in parsed.options.items()
    ]
    statements.append("unset arguments")
    statements.extend(
        f'arguments+=("{_double_quote(argument)}")' for argument in parsed.arguments
    )
    statements.append("export arguments")
    return "\n".join(statements)


def render_error(error: Exception) -> str:
    """Render a fatal parse error followed by the help hint."""
    return f"Error: {error}.\n{HELP_HINT}"


def render_structured(parsed: ParsedResult, output_format: str = "yaml") -> str:
    """
    Render a parse result as a YAML or JSON document.

    Raises:
        ValueError: If the format is not supported.
    """
    data = {"options": dict(parsed.options), "arguments": list(parsed.arguments)}
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False).rstrip()
    elif output_format == "json":
        return json.dumps(data, indent=2)
    else:
        raise ValueError(
            f"Unsupported output format: {output_format}. "
            f"Supported formats are: {', '.join(OUTPUT_FORMATS)}"
        )
