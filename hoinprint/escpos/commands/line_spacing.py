"""
Line spacing and paper feed commands.

Spacing and feed amounts are expressed in motion units; the HOP-E802
default vertical unit is 1/180 inch.

Reference: Hoin HOP-E802 programming manual (ESC/POS)
"""

from typing import Final

from .validation import check_range

__all__ = [
    "ESC_RESET_LINE_SPACING",
    "set_line_spacing",
    "feed",
    "feed_lines",
]

# =============================================================================
# LINE SPACING
# =============================================================================

ESC_RESET_LINE_SPACING: Final[bytes] = b"\x1b2"
"""
Select default line spacing (1/6 inch, approx. 4.23 mm).

Command: ESC 2
Hex: 1B 32
"""


def set_line_spacing(n: int) -> bytes:
    """
    Set line spacing to n motion units.

    Command: ESC 3 n
    Hex: 1B 33 n

    Args:
        n: Spacing in vertical motion units (0-255). Zero is used before
           every bit-image strip so consecutive strips touch.

    Raises:
        CommandValidationError: If n is out of range.
    """
    check_range(n, 0, 255, "line spacing")
    return b"\x1b3" + bytes([n])


# =============================================================================
# PAPER FEED
# =============================================================================


def feed(n: int) -> bytes:
    """
    Print the buffer and feed the paper n motion units.

    Command: ESC J n
    Hex: 1B 4A n
    """
    check_range(n, 0, 255, "feed units")
    return b"\x1bJ" + bytes([n])


def feed_lines(n: int) -> bytes:
    """
    Print the buffer and feed the paper n lines.

    Command: ESC d n
    Hex: 1B 64 n
    """
    check_range(n, 0, 255, "feed lines")
    return b"\x1bd" + bytes([n])
