"""
Print position control characters.

Reference: Hoin HOP-E802 programming manual (ESC/POS)
"""

from typing import Final

__all__ = [
    "HT",
    "LF",
    "CR",
]

HT: Final[bytes] = b"\x09"
"""
Horizontal tab.

Command: HT
Hex: 09
Effect: Moves the print position to the next tab stop. Ignored when no
        tab stop lies to the right (see set_horizontal_tabs()).
"""

LF: Final[bytes] = b"\x0a"
"""
Line feed.

Command: LF
Hex: 0A
Effect: Prints the buffer and feeds one line using the current line
        spacing. Also terminates every bit-image strip.
"""

CR: Final[bytes] = b"\x0d"
"""
Carriage return.

Command: CR
Hex: 0D
Effect: Prints the buffer. With auto line feed disabled this does not
        advance the paper.
"""
