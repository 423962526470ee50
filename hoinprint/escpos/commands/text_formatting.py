"""
Text emphasis and layout toggles.

Reference: Hoin HOP-E802 programming manual (ESC/POS)
"""

from enum import Enum

from .validation import bool_to_byte, check_enum

__all__ = [
    "Justification",
    "set_bold",
    "set_rotate_90",
    "set_reverse_printing",
    "justify",
]


class Justification(Enum):
    """Line alignment selected by ESC a."""

    LEFT = 0
    CENTER = 1
    RIGHT = 2


def set_bold(enabled: bool) -> bytes:
    """
    Turn emphasized mode on or off.

    Command: ESC E n
    Hex: 1B 45 00|01
    """
    return b"\x1bE" + bool_to_byte(enabled, "bold")


def set_rotate_90(enabled: bool) -> bytes:
    """
    Turn 90 degree clockwise rotation on or off.

    Command: ESC V n
    Hex: 1B 56 00|01

    Note:
        Double-width or double-height text is mirrored while rotated.
    """
    return b"\x1bV" + bool_to_byte(enabled, "rotate 90")


def set_reverse_printing(enabled: bool) -> bytes:
    """
    Turn white/black reverse printing on or off.

    Command: GS B n
    Hex: 1D 42 00|01
    """
    return b"\x1dB" + bool_to_byte(enabled, "reverse printing")


def justify(justification: Justification) -> bytes:
    """
    Align subsequent lines.

    Command: ESC a n
    Hex: 1B 61 n (0=left, 1=center, 2=right)

    Raises:
        CommandValidationError: If justification is not a Justification.
    """
    check_enum(justification, Justification)
    return b"\x1ba" + bytes([justification.value])
