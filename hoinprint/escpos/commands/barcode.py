"""
Barcode commands for ESC/POS receipt printers.

Contains the symbology table (codes, length bounds, accepted characters),
HRI placement, bar height, and the validating print_barcode() encoder.

Reference: Hoin HOP-E802 programming manual, GS k / GS H / GS h
Verified Types: UPC-A, UPC-E, JAN13, JAN8, CODE39, ITF, CODABAR,
                CODE93, CODE128

IMPORTANT: Validation happens entirely on the host. The printer silently
           drops malformed barcode data, so every payload is checked
           against its symbology's length bound and alphabet first.
"""

from enum import Enum
from typing import Final

from hoinprint.exceptions import CommandValidationError

from .validation import check_charset, check_enum, check_range

__all__ = [
    "DIGITS",
    "ALPHANUMERIC",
    "CODABAR_WRAPPERS",
    "CODABAR_ALPHABET",
    "DEFAULT_BARCODE_HEIGHT",
    "BarcodeType",
    "BarcodeHRI",
    "set_hri_position",
    "set_barcode_height",
    "validate_barcode_data",
    "print_barcode",
]

# =============================================================================
# CHARACTER SETS
# =============================================================================

DIGITS: Final[str] = "0123456789"
ALPHANUMERIC: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-.*$/+% "
CODABAR_WRAPPERS: Final[str] = "ABCD"
CODABAR_ALPHABET: Final[str] = "0123456789-$:/.+" + CODABAR_WRAPPERS

DEFAULT_BARCODE_HEIGHT: Final[int] = 162

# =============================================================================
# BARCODE TYPE CONSTANTS
# =============================================================================


class BarcodeType(Enum):
    """
    Barcode symbologies supported by GS k.

    Format: (code, min_length, max_length, charset, length_prefixed)

    Codes 0-6 use the NUL-terminated form ``GS k m d1...dk NUL``.
    Codes 72 and 73 use the length-prefixed form ``GS k m n d1...dn``.
    """

    UPCA = (0, 11, 12, DIGITS, False)
    """UPC-A. 11 digits (printer adds the check digit) or 12."""

    UPCE = (1, 6, 7, DIGITS, False)
    """UPC-E (zero-suppressed UPC). 6-7 digits."""

    JAN13 = (2, 12, 13, DIGITS, False)
    """JAN13 / EAN-13. 12-13 digits."""

    JAN8 = (3, 7, 8, DIGITS, False)
    """JAN8 / EAN-8. 7-8 digits."""

    CODE39 = (4, 0, 14, ALPHANUMERIC, False)
    """CODE39. Up to 14 characters from the alphanumeric set."""

    ITF = (5, 0, 22, DIGITS, False)
    """Interleaved 2 of 5. Up to 22 digits."""

    CODABAR = (6, 2, 19, CODABAR_ALPHABET, False)
    """
    CODABAR (NW-7).

    The first and last characters must be one of A, B, C, D and every
    character (wrappers included) must come from CODABAR_ALPHABET.
    Example: "A1234B"
    """

    CODE93 = (72, 1, 17, ALPHANUMERIC, True)
    """CODE93. 1-17 characters, length-prefixed."""

    CODE128 = (73, 0, 65, ALPHANUMERIC, True)
    """
    CODE128. 0-65 characters, length-prefixed.

    Known hardware limitation: the HOP-E802 starts printing the HRI
    oddly around 34 characters and stops printing entirely near 65-66
    repeated characters. The documented maximum is still used for
    validation; misbehaviour near the boundary is a device issue.
    """

    def __init__(
        self,
        code: int,
        min_length: int,
        max_length: int,
        charset: str,
        length_prefixed: bool,
    ):
        self.code = code
        self.min_length = min_length
        self.max_length = max_length
        self.charset = charset
        self.length_prefixed = length_prefixed


class BarcodeHRI(Enum):
    """Placement of the human-readable interpretation text."""

    NONE = 0
    ABOVE = 1
    BELOW = 2
    BOTH = 3


# =============================================================================
# BARCODE SETTINGS
# =============================================================================


def set_hri_position(position: BarcodeHRI) -> bytes:
    """
    Select where HRI characters print relative to the bars.

    Command: GS H n
    Hex: 1D 48 n
    """
    check_enum(position, BarcodeHRI)
    return b"\x1dH" + bytes([position.value])


def set_barcode_height(height: int) -> bytes:
    """
    Set the bar height in dots.

    Command: GS h n
    Hex: 1D 68 n

    Args:
        height: Bar height in dots (1-255). Printer default is 162.

    Raises:
        CommandValidationError: If height is out of range.
    """
    check_range(height, 1, 255, "bar code height")
    return b"\x1dh" + bytes([height])


# =============================================================================
# BARCODE PRINTING
# =============================================================================


def _check_codabar(data: str) -> None:
    if data[0] not in CODABAR_WRAPPERS or data[-1] not in CODABAR_WRAPPERS:
        raise CommandValidationError(
            f"the first and last character of CODABAR must be one of "
            f"{CODABAR_WRAPPERS}, got {data!r}"
        )
    check_charset(data, CODABAR_ALPHABET)


def validate_barcode_data(barcode_type: BarcodeType, data: str) -> str:
    """
    Validate a payload against its symbology.

    Checks run in order and the first failure is reported:
        1. barcode_type is a BarcodeType member
        2. len(data) lies within the symbology's length bound
        3. the characters belong to the symbology's alphabet
           (CODABAR: wrappers first, then alphabet)

    Returns:
        The data, unchanged.

    Raises:
        CommandValidationError: On the first failed check.
    """
    check_enum(barcode_type, BarcodeType)

    if not isinstance(data, str):
        raise CommandValidationError(f"bar code data must be a string, got {type(data).__name__}")

    check_range(len(data), barcode_type.min_length, barcode_type.max_length, "data length")

    if barcode_type is BarcodeType.CODABAR:
        _check_codabar(data)
    else:
        check_charset(data, barcode_type.charset)

    return data


def print_barcode(barcode_type: BarcodeType, data: str) -> bytes:
    """
    Generate the command that prints a barcode.

    Command: GS k m d1...dk NUL        (codes 0-6)
             GS k m n d1...dn          (CODE93, CODE128)
    Hex: 1D 6B m ...

    Args:
        barcode_type: Symbology (see BarcodeType).
        data: Payload; see the per-type length bounds and alphabets.

    Returns:
        ESC/POS command bytes.

    Raises:
        CommandValidationError: If the symbology, length or characters
                                are invalid.

    Example:
        >>> print_barcode(BarcodeType.CODABAR, "A1234B")
        b'\\x1dk\\x06A1234B\\x00'
        >>> print_barcode(BarcodeType.CODE93, "AB")
        b'\\x1dkH\\x02AB'
    """
    validate_barcode_data(barcode_type, data)

    payload = data.encode("ascii")
    cmd = b"\x1dk" + bytes([barcode_type.code])

    if barcode_type.length_prefixed:
        return cmd + bytes([len(payload)]) + payload

    return cmd + payload + b"\x00"
