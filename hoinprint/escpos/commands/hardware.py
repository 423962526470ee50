"""
Printer control commands: initialization and the buzzer.

Reference: Hoin HOP-E802 programming manual (ESC/POS)
Compatibility: HOP-E802, HOP-E58 and most ESC/POS receipt printers
"""

from typing import Final

from .validation import check_range

__all__ = [
    "ESC",
    "GS",
    "DLE",
    "ESC_INIT_PRINTER",
    "beep",
]

# =============================================================================
# LEAD-IN BYTES
# =============================================================================

ESC: Final[bytes] = b"\x1b"
GS: Final[bytes] = b"\x1d"
DLE: Final[bytes] = b"\x10"

# =============================================================================
# INITIALIZATION
# =============================================================================

ESC_INIT_PRINTER: Final[bytes] = ESC + b"@"
"""
Initialize printer.

Command: ESC @
Hex: 1B 40
Effect: Clears the print buffer and restores every mode (font,
        justification, bold, line spacing, tab stops) to power-on defaults.
Note: Data in the receive buffer is not cleared.

Example:
    >>> printer.write(ESC_INIT_PRINTER)
"""

# =============================================================================
# BUZZER
# =============================================================================


def beep(count: int, duration: int) -> bytes:
    """
    Sound the buzzer ``count`` times for ``duration`` units each.

    Command: ESC B n t
    Hex: 1B 42 n t

    Args:
        count: Number of beeps (1-9).
        duration: Length of each beep (1-9). Model dependent; about
                  100 ms per unit on the HOP-E802.

    Raises:
        CommandValidationError: If either value is out of range.

    Example:
        >>> beep(2, 3)
        b'\\x1bB\\x02\\x03'
    """
    check_range(count, 1, 9, "beep count")
    check_range(duration, 1, 9, "beep duration")

    return ESC + b"B" + bytes([count, duration])
