"""
Printer session.

Composes the command encoders, the rasterizer, the status protocol and a
Transport into one object exposing every printer operation as a verb.

The device accepts one command at a time and its status replies carry no
correlation id, so every verb runs under a single re-entrant lock: a
status request and its reply byte, or all strips of an image, are never
interleaved with another thread's commands.

The session keeps no copy of device state (font, justification, bold...).
Repeating a call always re-sends the command.
"""

import threading
from pathlib import Path
from typing import Any, Dict, Final, Optional, Union

from PIL import Image

from hoinprint import get_logger, load_config

from .escpos import commands as cmd
from .escpos.commands import (
    BarcodeHRI,
    BarcodeType,
    Density,
    DotMode,
    ErrorStatus,
    Font,
    Justification,
    OfflineStatus,
    PaperSensorStatus,
    PrinterStatus,
    StatusClass,
)
from .escpos.raster import Bitmap, rasterize
from .exceptions import TransportError
from .transport import DEFAULT_PORT, Transport, dial_address, dial_device

__all__ = [
    "DEFAULT_PRINTER_ADDRESS",
    "Printer",
    "open_printer",
]

logger = get_logger(__name__)

DEFAULT_PRINTER_ADDRESS: Final[str] = "192.168.1.23:9100"


class Printer:
    """
    Thread-safe ESC/POS printer session.

    Auto-closeable:
        with Printer(dial_address("192.168.1.23")) as p:
            p.initialize()
            p.println("Hello")
            p.cut()

    Args:
        transport: Byte pipe to the device; owned and closed by the session.
        encoding: Codec for print_text(). Unencodable characters print as "?".
        image_pacing: Wait for the print buffer to drain (blocking error
                      status query) after every image strip. Without it a
                      printer lacking flow control silently drops data.
        tab_width: Default column spacing for set_tab_width().

    Raises (every verb):
        CommandValidationError: Parameters rejected; nothing was sent.
        TransportError: The stream failed and could not be healed.
    """

    def __init__(
        self,
        transport: Transport,
        encoding: str = "cp437",
        image_pacing: bool = True,
        tab_width: int = 4,
    ) -> None:
        self._transport = transport
        self.encoding = encoding
        self.image_pacing = image_pacing
        self.tab_width = tab_width
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"Printer({self._transport!r})"

    # ------------------------
    # Context manager
    # ------------------------
    def __enter__(self) -> "Printer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        with self._lock:
            try:
                self._transport.close()
            except OSError as e:
                raise TransportError(f"could not close printer: {e}") from e

    # ------------------------
    # Raw byte pipe
    # ------------------------
    def write(self, data: bytes) -> int:
        """Send raw bytes as one write."""
        with self._lock:
            try:
                return self._transport.write(data)
            except TransportError:
                raise
            except OSError as e:
                logger.error("Write of %d bytes failed: %r", len(data), e)
                raise TransportError(f"could not write to printer: {e}") from e

    def read(self, size: int = 1) -> bytes:
        """Read up to size raw bytes from the printer."""
        with self._lock:
            try:
                return self._transport.read(size)
            except TransportError:
                raise
            except OSError as e:
                logger.error("Read failed: %r", e)
                raise TransportError(f"could not read from printer: {e}") from e

    def _send(self, data: bytes, action: str) -> None:
        logger.debug("%s: %s", action, data[:32].hex(" "))
        self.write(data)

    # ------------------------
    # Control
    # ------------------------
    def initialize(self) -> None:
        self._send(cmd.ESC_INIT_PRINTER, "initialize")

    def beep(self, count: int, duration: int) -> None:
        """Beep ``count`` times (1-9) for ``duration`` units (1-9) each."""
        self._send(cmd.beep(count, duration), "beep")

    # ------------------------
    # Text
    # ------------------------
    def print_text(self, text: str) -> None:
        """Send text in the session encoding. No line feed is added."""
        self._send(text.encode(self.encoding, errors="replace"), "print text")

    def println(self, text: str = "") -> None:
        self.print_text(text + "\n")

    def printf(self, fmt: str, *args: Any) -> None:
        """printf-style text: ``p.printf("%-10s%5d", name, qty)``."""
        self.print_text(fmt % args if args else fmt)

    def ht(self) -> None:
        self._send(cmd.HT, "horizontal tab")

    def lf(self) -> None:
        self._send(cmd.LF, "line feed")

    def cr(self) -> None:
        self._send(cmd.CR, "carriage return")

    # ------------------------
    # Paper handling
    # ------------------------
    def cut(self) -> None:
        self._send(cmd.GS_CUT, "cut")

    def cut_feed(self, n: int) -> None:
        """Feed n motion units (0-255) and cut."""
        self._send(cmd.cut_feed(n), "feed and cut")

    def reset_line_spacing(self) -> None:
        self._send(cmd.ESC_RESET_LINE_SPACING, "reset line spacing")

    def set_line_spacing(self, n: int) -> None:
        self._send(cmd.set_line_spacing(n), "set line spacing")

    def feed(self, n: int) -> None:
        self._send(cmd.feed(n), "feed")

    def feed_lines(self, n: int) -> None:
        self._send(cmd.feed_lines(n), "feed lines")

    # ------------------------
    # Tabs
    # ------------------------
    def set_ht(self, *positions: int) -> None:
        """
        Set horizontal tab stops (at most 32, each 1-255).

        Calling with no positions clears every tab stop.
        """
        self._send(cmd.set_horizontal_tabs(positions), "set tab stops")

    def set_tab_width(self, width: Optional[int] = None) -> None:
        """Set tab stops every ``width`` columns (default: self.tab_width)."""
        width = self.tab_width if width is None else width
        self.set_ht(*cmd.tab_positions_for_width(width))

    # ------------------------
    # Text style
    # ------------------------
    def set_bold(self, enabled: bool) -> None:
        self._send(cmd.set_bold(enabled), "set bold")

    def set_rotate_90(self, enabled: bool) -> None:
        self._send(cmd.set_rotate_90(enabled), "set rotate 90")

    def set_reverse_printing(self, enabled: bool) -> None:
        self._send(cmd.set_reverse_printing(enabled), "set reverse printing")

    def set_font(self, font: Font) -> None:
        self._send(cmd.set_font(font), "set font")

    def justify(self, justification: Justification) -> None:
        self._send(cmd.justify(justification), "justify")

    # ------------------------
    # Images
    # ------------------------
    def print_image(
        self,
        image: Union[Bitmap, Image.Image],
        density: Density = Density.SINGLE,
        dot_mode: DotMode = DotMode.DOTS_24,
        wait: Optional[bool] = None,
    ) -> int:
        """
        Print a bitmap as a series of bit-image strips.

        The whole image is rasterized (and validated) before the first
        byte is sent. Each strip is then sent as:
            ESC 3 0  (zero line spacing, so strips touch)
            ESC * m nL nH data
            LF       (flush the strip)
        followed, when pacing is on, by a blocking error-status query that
        returns once the printer has drained its buffer.

        No black and white conversion beyond the mid-gray threshold is
        performed; dither the image first for photos.

        Args:
            image: Pillow image or Bitmap.
            density: SINGLE (90 DPI) or DOUBLE (180 DPI) horizontally.
            dot_mode: DOTS_8 (60 DPI vertical) or DOTS_24 (180 DPI vertical).
            wait: Override self.image_pacing for this call.

        Returns:
            Number of strips sent.
        """
        blocks = rasterize(image, density, dot_mode)
        pacing = self.image_pacing if wait is None else wait

        with self._lock:
            logger.debug("Printing %d %s strips (pacing=%s)", len(blocks), dot_mode.name, pacing)
            for block in blocks:
                self.set_line_spacing(0)
                self._send(block.to_bytes(), "image strip")
                self.lf()
                if pacing:
                    self.transmit_error_status()

        return len(blocks)

    def print_image_8(self, image: Union[Bitmap, Image.Image], density: Density = Density.SINGLE) -> int:
        """8-dot strips; vertical resolution is always 60 DPI."""
        return self.print_image(image, density, DotMode.DOTS_8)

    def print_image_24(self, image: Union[Bitmap, Image.Image], density: Density = Density.SINGLE) -> int:
        """24-dot strips; vertical resolution is always 180 DPI."""
        return self.print_image(image, density, DotMode.DOTS_24)

    # ------------------------
    # Barcodes
    # ------------------------
    def set_hri_position(self, position: BarcodeHRI) -> None:
        self._send(cmd.set_hri_position(position), "set HRI position")

    def set_barcode_height(self, height: int) -> None:
        self._send(cmd.set_barcode_height(height), "set bar code height")

    def reset_barcode_height(self) -> None:
        """Restore the 162-dot default bar height."""
        self.set_barcode_height(cmd.DEFAULT_BARCODE_HEIGHT)

    def print_barcode(self, barcode_type: BarcodeType, data: str) -> None:
        self._send(cmd.print_barcode(barcode_type, data), "print bar code")

    # ------------------------
    # Real-time status
    # ------------------------
    def _transmit_status(self, status_class: StatusClass):
        request = cmd.status_request(status_class)
        with self._lock:
            self._send(request, f"{status_class.name.lower()} status request")
            reply = self.read(1)
            if not reply:
                raise TransportError(
                    f"printer closed the stream before answering the "
                    f"{status_class.name.lower()} status request"
                )

        logger.debug("%s status reply: 0b%s", status_class.name, format(reply[0], "08b"))
        return cmd.decode_status(status_class, reply[0])

    def transmit_printer_status(self) -> PrinterStatus:
        return self._transmit_status(StatusClass.PRINTER)

    def transmit_offline_status(self) -> OfflineStatus:
        return self._transmit_status(StatusClass.OFFLINE)

    def transmit_error_status(self) -> ErrorStatus:
        return self._transmit_status(StatusClass.ERROR)

    def transmit_paper_sensor_status(self) -> PaperSensorStatus:
        return self._transmit_status(StatusClass.PAPER_SENSOR)


def open_printer(
    address: Optional[str] = None,
    device: Optional[str] = None,
    timeout: Optional[float] = None,
    config: Optional[Dict[str, Any]] = None,
    config_path: Optional[Path] = None,
) -> Printer:
    """
    Connect to a printer and return a session with self-healing transport.

    Target selection: ``device`` if given, else ``address``, else the
    configuration (its ``device`` key wins over ``address``).

    Args:
        address: "host[:port]"; the port defaults to 9100.
        device: Local device path, e.g. "/dev/usb/lp0".
        timeout: Stream deadline in seconds (TCP only). Expiry triggers
                 one redial.
        config: Configuration mapping; loaded with load_config() if omitted.
        config_path: Passed to load_config() when config is omitted.

    Raises:
        TransportError: If the initial connection cannot be established.
    """
    if config is None:
        config = load_config(config_path)

    if address is None and device is None:
        device = config.get("device")
        address = config.get("address") or DEFAULT_PRINTER_ADDRESS
    if timeout is None:
        timeout = config.get("timeout_seconds")

    target = device or address
    try:
        if device:
            transport: Transport = dial_device(device)
        else:
            transport = dial_address(
                str(address),
                timeout=timeout,
                default_port=int(config.get("port", DEFAULT_PORT)),
            )
    except OSError as e:
        logger.error("Unable to connect to %s: %r", target, e)
        raise TransportError(f"unable to dial {target}: {e}") from e

    logger.info("Connected to printer at %s", target)
    return Printer(
        transport,
        encoding=config.get("encoding", "cp437"),
        image_pacing=bool(config.get("image_pacing", True)),
        tab_width=int(config.get("tab_width", 4)),
    )
