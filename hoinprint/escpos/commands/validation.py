"""
Parameter validation shared by all ESC/POS encoders.

Every check raises CommandValidationError before a single byte is built,
so a failed call never leaves a partial command on the wire.
"""

from enum import Enum
from typing import Iterable, TypeVar

from hoinprint.exceptions import CommandValidationError

__all__ = [
    "check_range",
    "check_enum",
    "check_charset",
    "bool_to_byte",
]

E = TypeVar("E", bound=Enum)


def check_range(value: int, minimum: int, maximum: int, name: str) -> int:
    """
    Check that an integer lies in the inclusive range [minimum, maximum].

    Args:
        value: Value to check.
        minimum: Lowest accepted value.
        maximum: Highest accepted value.
        name: Parameter name used in the error message.

    Returns:
        The value, unchanged.

    Raises:
        CommandValidationError: If value is not an int or is out of range.

    Example:
        >>> check_range(300, 0, 255, "n")
        Traceback (most recent call last):
        ...
        CommandValidationError: n must be between 0 and 255, got 300
    """
    # bool is an int subclass but never a unit count
    if not isinstance(value, int) or isinstance(value, bool):
        raise CommandValidationError(
            f"{name} must be an integer between {minimum} and {maximum}, "
            f"got {value!r}"
        )
    if value < minimum or maximum < value:
        raise CommandValidationError(
            f"{name} must be between {minimum} and {maximum}, got {value}"
        )
    return value


def check_enum(value: E, choices: Iterable[E]) -> E:
    """
    Check that value is one of the legal enum members.

    Raw integers are rejected even when they equal a member's value.

    Raises:
        CommandValidationError: Naming the value and the legal set.
    """
    legal = list(choices)
    if not isinstance(value, Enum) or value not in legal:
        names = ", ".join(str(choice) for choice in legal)
        raise CommandValidationError(f"{value!r} was not a valid choice from [{names}]")
    return value


def check_charset(data: str, accepted: str, name: str = "bar code data") -> str:
    """Check that every character of data appears in accepted."""
    for char in data:
        if char not in accepted:
            raise CommandValidationError(
                f"{char!r} was in the {name} and only {accepted!r} is accepted"
            )
    return data


def bool_to_byte(flag: bool, name: str = "toggle") -> bytes:
    """Encode a toggle as the single byte 0x00 or 0x01. Only real bools are accepted."""
    if not isinstance(flag, bool):
        raise CommandValidationError(f"{name} must be True or False, got {flag!r}")
    return b"\x01" if flag else b"\x00"
