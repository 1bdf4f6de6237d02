"""Expansion of combined short flags (``-xyz``) into separate tokens."""

import re
from typing import Iterable, Optional

from .errors import CombinedValueOptionError
from .schema import OptionRegistry

_SHORT_CLUSTER = re.compile(r"^-[^-]")


def normalize_tokens(
    tokens: Iterable[str], registry: Optional[OptionRegistry] = None
) -> list[str]:
    """
    Expand every single-dash token into one ``-c`` token per character.

    ``-xyz`` becomes ``-x``, ``-y``, ``-z``. Long options and non-dash
    tokens are passed through unchanged.

    Args:
        tokens: Raw invocation arguments.
        registry: When given, clusters are checked against it.

    Raises:
        CombinedValueOptionError: If a cluster of two or more characters
            contains the short alias of a scalar option.
    """
    normalized = []
    for token in tokens:
        if not _SHORT_CLUSTER.match(token):
            normalized.append(token)
            continue

        chars = token[1:]
        if registry is not None and len(chars) > 1:
            for char in chars:
                option = registry.find_short(char)
                if option is not None and not option.boolean:
                    raise CombinedValueOptionError(token, option)
        normalized.extend(f"-{char}" for char in chars)
    return normalized
