"""
Character font selection.

Reference: Hoin HOP-E802 programming manual (ESC/POS)
"""

from enum import Enum

from .validation import check_enum

__all__ = [
    "Font",
    "set_font",
]


class Font(Enum):
    """
    Resident printer fonts.

    A: 12x24 dots (48 columns on 80 mm paper)
    B: 9x17 dots (64 columns on 80 mm paper)
    """

    A = 0
    B = 1


def set_font(font: Font) -> bytes:
    """
    Select the character font.

    Command: ESC M n
    Hex: 1B 4D n (0=Font A, 1=Font B)

    Raises:
        CommandValidationError: If font is not a Font member.
    """
    check_enum(font, Font)
    return b"\x1bM" + bytes([font.value])
