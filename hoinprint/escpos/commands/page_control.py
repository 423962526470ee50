"""
Paper cutting and horizontal tab stop commands.

Reference: Hoin HOP-E802 programming manual (ESC/POS)
"""

from typing import Final, Sequence

from hoinprint.exceptions import CommandValidationError

from .validation import check_range

__all__ = [
    "MAX_TAB_STOPS",
    "GS_CUT",
    "cut_feed",
    "set_horizontal_tabs",
    "cancel_horizontal_tabs",
    "tab_positions_for_width",
]

MAX_TAB_STOPS: Final[int] = 32

# =============================================================================
# CUTTING
# =============================================================================

GS_CUT: Final[bytes] = b"\x1dV\x00"
"""
Cut the paper at the current position.

Command: GS V 0
Hex: 1D 56 00
"""


def cut_feed(n: int) -> bytes:
    """
    Feed the paper n motion units past the cutting position, then cut.

    Command: GS V B n
    Hex: 1D 56 42 n

    Args:
        n: Extra feed in vertical motion units (0-255).

    Raises:
        CommandValidationError: If n is out of range.
    """
    check_range(n, 0, 255, "cut feed units")
    return b"\x1dVB" + bytes([n])


# =============================================================================
# HORIZONTAL TABS
# =============================================================================


def set_horizontal_tabs(positions: Sequence[int]) -> bytes:
    """
    Set horizontal tab stops, replacing any previous stops.

    Command: ESC D n1 ... nk NUL
    Hex: 1B 44 n1 ... nk 00

    Args:
        positions: Tab columns (each 1-255), at most 32 of them. An empty
                   sequence clears every tab stop.

    Returns:
        ESC/POS command bytes.

    Raises:
        CommandValidationError: If more than 32 positions are given or
                                any position is out of range.

    Example:
        >>> set_horizontal_tabs([8, 16, 24])
        b'\\x1bD\\x08\\x10\\x18\\x00'
        >>> set_horizontal_tabs([])
        b'\\x1bD\\x00'
    """
    if len(positions) > MAX_TAB_STOPS:
        raise CommandValidationError(
            f"at most {MAX_TAB_STOPS} tab positions can be set, got {len(positions)}"
        )

    for i, pos in enumerate(positions):
        check_range(pos, 1, 255, f"tab position {i}")

    return b"\x1bD" + bytes(positions) + b"\x00"


def cancel_horizontal_tabs() -> bytes:
    """Clear every tab stop (ESC D NUL)."""
    return set_horizontal_tabs([])


def tab_positions_for_width(width: int) -> list[int]:
    """
    Evenly spaced tab columns every ``width`` characters.

    Yields as many stops as fit under both the 32-stop limit and the
    255-column ceiling.

    Raises:
        CommandValidationError: If width is not in 1-255.
    """
    check_range(width, 1, 255, "tab width")
    return [pos for pos in range(width, 256, width)][:MAX_TAB_STOPS]
