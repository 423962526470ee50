"""
ESC/POS command encoders for Hoin thermal receipt printers.

Every function here is pure: it validates its parameters, raising
CommandValidationError on the first violation, and returns the exact
bytes for the command. Constants are ready-made commands that take no
parameters.

Module Structure:
    commands/
    ├── __init__.py             # This file (public API exports)
    ├── validation.py           # Range, enum and charset checks
    ├── hardware.py             # Initialize, beep
    ├── positioning.py          # HT, LF, CR
    ├── line_spacing.py         # Line spacing, paper feed
    ├── page_control.py         # Cutting, horizontal tabs
    ├── text_formatting.py      # Bold, rotation, reverse, justification
    ├── fonts.py                # Font A/B
    ├── graphics.py             # ESC * bit-image strips
    ├── barcode.py              # GS k barcodes, HRI, bar height
    └── status.py               # DLE EOT real-time status

Target Printer: Hoin HOP-E802 (80 mm thermal, ESC/POS)

Usage:
    >>> from hoinprint.escpos.commands import set_bold, LF
    >>> command = set_bold(True) + b"Bold text" + set_bold(False) + LF
    >>> printer.write(command)
"""

from hoinprint.escpos.commands.barcode import (
    DEFAULT_BARCODE_HEIGHT,
    BarcodeHRI,
    BarcodeType,
    print_barcode,
    set_barcode_height,
    set_hri_position,
    validate_barcode_data,
)
from hoinprint.escpos.commands.fonts import Font, set_font
from hoinprint.escpos.commands.graphics import (
    MAX_IMAGE_WIDTH,
    Density,
    DotMode,
    bit_image_mode,
    print_bit_image,
)
from hoinprint.escpos.commands.hardware import ESC_INIT_PRINTER, beep
from hoinprint.escpos.commands.line_spacing import (
    ESC_RESET_LINE_SPACING,
    feed,
    feed_lines,
    set_line_spacing,
)
from hoinprint.escpos.commands.page_control import (
    GS_CUT,
    MAX_TAB_STOPS,
    cancel_horizontal_tabs,
    cut_feed,
    set_horizontal_tabs,
    tab_positions_for_width,
)
from hoinprint.escpos.commands.positioning import CR, HT, LF
from hoinprint.escpos.commands.status import (
    ErrorStatus,
    OfflineStatus,
    PaperSensorStatus,
    PrinterStatus,
    StatusClass,
    decode_status,
    status_request,
)
from hoinprint.escpos.commands.text_formatting import (
    Justification,
    justify,
    set_bold,
    set_reverse_printing,
    set_rotate_90,
)

__all__ = [
    # Hardware
    "ESC_INIT_PRINTER",
    "beep",
    # Positioning
    "HT",
    "LF",
    "CR",
    # Line spacing
    "ESC_RESET_LINE_SPACING",
    "set_line_spacing",
    "feed",
    "feed_lines",
    # Page control
    "GS_CUT",
    "MAX_TAB_STOPS",
    "cut_feed",
    "set_horizontal_tabs",
    "cancel_horizontal_tabs",
    "tab_positions_for_width",
    # Text formatting
    "Justification",
    "set_bold",
    "set_rotate_90",
    "set_reverse_printing",
    "justify",
    # Fonts
    "Font",
    "set_font",
    # Graphics
    "MAX_IMAGE_WIDTH",
    "Density",
    "DotMode",
    "bit_image_mode",
    "print_bit_image",
    # Barcode
    "DEFAULT_BARCODE_HEIGHT",
    "BarcodeType",
    "BarcodeHRI",
    "set_hri_position",
    "set_barcode_height",
    "validate_barcode_data",
    "print_barcode",
    # Status
    "StatusClass",
    "PrinterStatus",
    "OfflineStatus",
    "ErrorStatus",
    "PaperSensorStatus",
    "status_request",
    "decode_status",
]
