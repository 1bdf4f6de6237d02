"""
Exceptions raised while deriving an option schema or parsing arguments.

Every error in this module is fatal for the current invocation: the process
entry points report it once on the error stream and exit with status 1.
"""

from typing import Any


class EasyOptionsError(Exception):
    """Base class for all parsing failures."""


class SourceUnreadableError(EasyOptionsError, OSError):
    """The documented program source could not be read."""

    def __init__(self, path: str, reason: Any = None) -> None:
        self.path = path
        message = f"cannot read documentation from {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MissingValueError(EasyOptionsError, ValueError):
    """A scalar option was given without a following value."""

    def __init__(self, option: Any) -> None:
        self.option = option
        super().__init__(f"you must specify a value for {option}")


class UnexpectedValueError(EasyOptionsError, ValueError):
    """A boolean option was given with ``=value`` syntax."""

    def __init__(self, option: Any, value: str) -> None:
        self.option = option
        self.value = value
        super().__init__(f"{option} does not accept a value (you specified '{value}')")


class UnrecognizedOptionError(EasyOptionsError, ValueError):
    """A dash-prefixed token matches no documented option."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"unrecognized option '{token}'")


class CombinedValueOptionError(EasyOptionsError, ValueError):
    """A short flag cluster contains the alias of an option that takes a value."""

    def __init__(self, token: str, option: Any) -> None:
        self.token = token
        self.option = option
        super().__init__(
            f"{option} requires a value and cannot be combined in '{token}'"
        )
