"""
Option schema derived from program documentation.

This module holds the typed representation of one option, the ordered
registry of all options accepted by a program, and the builder that scans
documentation lines for option definitions. The scan is best-effort: lines
that do not look like an option definition are treated as prose.
"""

import dataclasses
import enum
import logging
import re
from typing import Iterable, Iterator, NamedTuple, Optional, Union

logger = logging.getLogger(__name__)


class OptionKind(enum.Enum):
    """Whether an option is a plain flag or takes one value."""

    BOOLEAN = "boolean"
    SCALAR = "scalar"


@dataclasses.dataclass(frozen=True)
class Option:
    """
    One option accepted on the command line.

    Attributes:
        long: Long name with dashes replaced by underscores (``some_value``).
        short: Optional single character alias.
        kind: Boolean flag or scalar option taking a value.
    """

    long: str
    short: Optional[str] = None
    kind: OptionKind = OptionKind.BOOLEAN

    def __post_init__(self) -> None:
        long = (self.long or "").replace("-", "_")
        if len(long) < 2:
            raise ValueError(f"Long version is mandatory: {self.long!r}")
        if self.short is not None and len(self.short) != 1:
            raise ValueError(f"Short version must be a single character: {self.short!r}")
        object.__setattr__(self, "long", long)

    def __str__(self) -> str:
        return f"--{self.long_dashed}"

    @property
    def long_dashed(self) -> str:
        return self.long.replace("_", "-")

    @property
    def boolean(self) -> bool:
        return self.kind is OptionKind.BOOLEAN

    def matches(self, token: str) -> bool:
        """Check whether ``token`` is exactly the long or short form of this option."""
        if token == f"--{self.long_dashed}":
            return True
        return self.short is not None and token == f"-{self.short}"

    def matches_with_value(self, token: str) -> bool:
        """Check whether ``token`` is the ``--long-name=value`` form of this option."""
        return token.startswith(f"--{self.long_dashed}=")


# Value stored for one option: True for boolean options, int for digit-only
# scalar values, str otherwise.
OptionValue = Union[bool, int, str]


class ParsedResult(NamedTuple):
    """Options and positional arguments resolved from one invocation."""

    options: dict[str, OptionValue]
    arguments: list[str]


HELP_OPTION = Option("help", "h")


class OptionRegistry:
    """
    Ordered collection of the options accepted by a program.

    The ``help``/``h`` option is always registered first.
    """

    def __init__(self, options: Iterable[Option] = ()) -> None:
        self._options: dict[str, Option] = {HELP_OPTION.long: HELP_OPTION}
        for option in options:
            self.add(option)

    def add(self, option: Option) -> None:
        """
        Register an option.

        Raises:
            ValueError: If the long name or short alias is already registered.
        """
        if option.long in self._options:
            raise ValueError(f"Option name conflict: {option}")
        if option.short is not None and self.find_short(option.short):
            raise ValueError(f"Option name conflict: -{option.short}")
        self._options[option.long] = option

    def get(self, long: str) -> Optional[Option]:
        return self._options.get(long.replace("-", "_"))

    def find(self, token: str) -> Optional[Option]:
        """Return the option whose long or short form is exactly ``token``."""
        for option in self._options.values():
            if option.matches(token):
                return option
        return None

    def find_short(self, short: str) -> Optional[Option]:
        for option in self._options.values():
            if option.short == short:
                return option
        return None

    def __contains__(self, long: object) -> bool:
        return isinstance(long, str) and long.replace("-", "_") in self._options

    def __iter__(self) -> Iterator[Option]:
        return iter(self._options.values())

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        return f"OptionRegistry({list(self._options.values())!r})"


class LineKind(enum.Enum):
    """Classification of one documentation line."""

    HELP = "help"
    BOOLEAN_WITH_SHORT = "boolean_with_short"
    SCALAR_WITH_SHORT = "scalar_with_short"
    SCALAR_EQUALS = "scalar_equals"
    SCALAR_SPACE = "scalar_space"
    BOOLEAN_LONG_ONLY = "boolean_long_only"
    PROSE = "prose"


class LineMatch(NamedTuple):
    kind: LineKind
    long: Optional[str] = None
    short: Optional[str] = None


_LONG = r"--(?P<long>[A-Za-z][A-Za-z0-9_-]+)"
_SHORT = r"-(?P<short>[^\s,-])"
_END = r"(?=\s|$)"
_PLACEHOLDER = r"(?:[A-Z][A-Z0-9_-]*|<[^>\s]+>)"
# Further away from the name, a single capital letter is more likely prose.
_SPACED_PLACEHOLDER = r"(?:[A-Z][A-Z0-9_-]+|<[^>\s]+>)"

# Checked in order, the first pattern that matches wins.
_LINE_PATTERNS: list[tuple[LineKind, re.Pattern]] = [
    (LineKind.HELP, re.compile(r"^(?:-h,\s+--help|--help,\s+-h)" + _END)),
    (LineKind.SCALAR_WITH_SHORT, re.compile(rf"^{_SHORT},\s+{_LONG}=\S")),
    (LineKind.SCALAR_WITH_SHORT, re.compile(rf"^{_LONG}=[^\s,]+,\s+{_SHORT}{_END}")),
    (LineKind.BOOLEAN_WITH_SHORT, re.compile(rf"^{_SHORT},\s+{_LONG}{_END}")),
    (LineKind.BOOLEAN_WITH_SHORT, re.compile(rf"^{_LONG},\s+{_SHORT}{_END}")),
    (LineKind.SCALAR_EQUALS, re.compile(rf"^{_LONG}=\S")),
    (
        LineKind.SCALAR_SPACE,
        re.compile(rf"^{_LONG}(?: {_PLACEHOLDER}|\s+{_SPACED_PLACEHOLDER}){_END}"),
    ),
    (LineKind.BOOLEAN_LONG_ONLY, re.compile(rf"^{_LONG}{_END}")),
]


def classify_line(line: str) -> LineMatch:
    """
    Classify one documentation line.

    Args:
        line: A documentation line; surrounding whitespace is ignored.

    Returns:
        LineMatch: The line kind with the long name and short alias it defines.
    """
    line = line.strip()
    for kind, pattern in _LINE_PATTERNS:
        match = pattern.match(line)
        if match is None:
            continue
        groups = match.groupdict()
        return LineMatch(kind, groups.get("long"), groups.get("short"))
    return LineMatch(LineKind.PROSE)


def option_for_line(match: LineMatch) -> Optional[Option]:
    """Build the option defined by a classified line, if any."""
    if match.kind in (LineKind.HELP, LineKind.PROSE):
        return None
    if match.kind is LineKind.SCALAR_WITH_SHORT:
        return Option(match.long, match.short, OptionKind.SCALAR)
    if match.kind in (LineKind.SCALAR_EQUALS, LineKind.SCALAR_SPACE):
        return Option(match.long, None, OptionKind.SCALAR)
    return Option(match.long, match.short, OptionKind.BOOLEAN)


def build_registry(lines: Iterable[str]) -> OptionRegistry:
    """
    Build the option registry from documentation lines.

    A line redefining an already registered long name is ignored. An option
    whose short alias is already taken is registered without it. The first
    definition wins in both cases.

    Args:
        lines: Documentation lines as returned by the documentation extractor.

    Returns:
        OptionRegistry: The registry, seeded with the help option.
    """
    registry = OptionRegistry()
    for line in lines:
        option = option_for_line(classify_line(line))
        if option is None:
            continue
        if option.long in registry:
            logger.debug("Ignoring documented option %s: already registered", option)
            continue
        if option.short is not None and registry.find_short(option.short):
            logger.debug(
                "Dropping short alias -%s of %s: already taken", option.short, option
            )
            option = dataclasses.replace(option, short=None)
        registry.add(option)
        logger.debug("Registered %s option %s", option.kind.value, option)
    return registry
