"""
Extraction of the structured ``##`` documentation block from program source.

Only lines starting at column 0 with exactly two ``#`` characters are kept.
The marker and at most one following space are removed, and the placeholder
``@script.name`` is replaced with the program's base file name.
"""

import logging
import os
import re
from typing import Optional

from .errors import SourceUnreadableError

logger = logging.getLogger(__name__)

_MARKER = re.compile(r"^##(?!#)")
_MARKER_PREFIX = re.compile(r"^## ?")

SCRIPT_NAME_PLACEHOLDER = "@script.name"
# "@#script.name" in the documentation prints the placeholder itself
_PLACEHOLDER_ESCAPE = "@#"


def extract_documentation(text: str, program_name: str) -> list[str]:
    """
    Return the documentation lines found in ``text``.

    Args:
        text: Full source text of the documented program.
        program_name: Name substituted for ``@script.name``.

    Returns:
        list[str]: The documentation lines, in source order.
    """
    lines = []
    for raw_line in text.splitlines():
        if not _MARKER.match(raw_line):
            continue
        line = _MARKER_PREFIX.sub("", raw_line.strip(), count=1)
        line = line.replace(SCRIPT_NAME_PLACEHOLDER, program_name)
        lines.append(line.replace(_PLACEHOLDER_ESCAPE, "@"))
    return lines


def read_documentation(path: str, program_name: Optional[str] = None) -> list[str]:
    """
    Read a program source file and extract its documentation lines.

    Args:
        path: Path of the documented program.
        program_name: Name substituted for ``@script.name``; defaults to the
            base name of ``path``.

    Raises:
        SourceUnreadableError: If the file cannot be read.
    """
    program_name = program_name or os.path.basename(path)
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
    except OSError as e:
        raise SourceUnreadableError(path, e) from e

    lines = extract_documentation(text, program_name)
    logger.debug("Extracted %d documentation lines from %s", len(lines), path)
    return lines
