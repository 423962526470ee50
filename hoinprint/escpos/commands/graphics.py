"""
Bit-image graphics commands for ESC/POS receipt printers.

Contains the density and dot-height selectors and the ESC * encoder for a
single image strip. Converting pixels into strips lives in
hoinprint.escpos.raster.

Reference: Hoin HOP-E802 programming manual, ESC *
Maximum Resolution: 180x180 DPI (24-dot, double density)
"""

from enum import Enum
from typing import Final

from hoinprint.exceptions import CommandValidationError

from .validation import check_enum, check_range

__all__ = [
    "MAX_IMAGE_WIDTH",
    "Density",
    "DotMode",
    "bit_image_mode",
    "print_bit_image",
]

MAX_IMAGE_WIDTH: Final[int] = 0xFFFF

# =============================================================================
# GRAPHICS MODE CONSTANTS
# =============================================================================


class Density(Enum):
    """
    Horizontal dot density.

    Format: (selector, dpi)
    """

    SINGLE = (0, 90)
    """Single density, 90 DPI horizontal."""

    DOUBLE = (1, 180)
    """Double density, 180 DPI horizontal."""

    def __init__(self, selector: int, dpi: int):
        self.selector = selector
        self.dpi = dpi


class DotMode(Enum):
    """
    Vertical dots per strip.

    Format: (unit_height, mode_offset, vertical_dpi)

    Technical details:
        - DOTS_8: 1 byte per column, 60 DPI vertical
        - DOTS_24: 3 bytes per column, 180 DPI vertical
    """

    DOTS_8 = (8, 0, 60)
    DOTS_24 = (24, 32, 180)

    def __init__(self, unit_height: int, mode_offset: int, vertical_dpi: int):
        self.unit_height = unit_height
        self.mode_offset = mode_offset
        self.vertical_dpi = vertical_dpi

    @property
    def bytes_per_column(self) -> int:
        return self.unit_height // 8


# =============================================================================
# BIT-IMAGE PRINTING
# =============================================================================


def bit_image_mode(dot_mode: DotMode, density: Density) -> int:
    """
    Format tag byte ``m`` for ESC *.

    m = density (8-dot) or 32 + density (24-dot):
        0 = 8-dot single, 1 = 8-dot double,
        32 = 24-dot single, 33 = 24-dot double.
    """
    check_enum(dot_mode, DotMode)
    check_enum(density, Density)
    return dot_mode.mode_offset + density.selector


def print_bit_image(dot_mode: DotMode, density: Density, width: int, data: bytes) -> bytes:
    """
    Generate ESC/POS command for one bit-image strip.

    Command: ESC * m nL nH d1...dk
    Hex: 1B 2A m nL nH data

    Args:
        dot_mode: 8 or 24 dots per strip.
        density: Horizontal density.
        width: Strip width in dots (0-65535), sent little-endian.
        data: Packed column data, column-major, MSB = top dot.
              Length must equal width * dot_mode.bytes_per_column.

    Returns:
        ESC/POS command bytes (without the terminating LF).

    Raises:
        CommandValidationError: If the mode, width or data length is invalid.

    Data Format (24-dot):
        For each column: byte 0 = dots 0-7, byte 1 = dots 8-15,
        byte 2 = dots 16-23, bit 7 of each byte being the topmost dot.
    """
    mode = bit_image_mode(dot_mode, density)
    check_range(width, 0, MAX_IMAGE_WIDTH, "image width")

    expected = width * dot_mode.bytes_per_column
    if len(data) != expected:
        raise CommandValidationError(
            f"Data length ({len(data)} bytes) must match width ({width} columns) "
            f"x {dot_mode.bytes_per_column} bytes per column = {expected}"
        )

    nL = width & 0xFF
    nH = (width >> 8) & 0xFF

    return b"\x1b*" + bytes([mode, nL, nH]) + bytes(data)
