"""
Bit-image rasterizer.

Converts a grayscale bitmap into ESC * strips ("row blocks"), 8 or 24 dots
tall. The rasterizer performs no I/O; the Printer session sends each
block framed by a zero line spacing command and a LF.

Algorithm (per horizontal strip of unit_height pixels):
    1. For each column x pack unit_height bits top-to-bottom into
       unit_height/8 bytes, MSB first. A pixel darker than THRESHOLD
       sets its bit.
    2. Rows below the image (final partial strip) are white.
    3. Emit ESC * m nL nH followed by the packed bytes, column-major.

No dithering is applied. Convert photos beforehand, for example with
``image.convert("1", dither=Image.FLOYDSTEINBERG)``.
"""

import logging
from dataclasses import dataclass
from typing import Final, Iterator, Protocol, Sequence, Union, runtime_checkable

from PIL import Image

from hoinprint.exceptions import CommandValidationError

from .commands.graphics import (
    MAX_IMAGE_WIDTH,
    Density,
    DotMode,
    print_bit_image,
)
from .commands.validation import check_enum

__all__ = [
    "THRESHOLD",
    "Bitmap",
    "GrayBitmap",
    "RowBlock",
    "as_bitmap",
    "iter_row_blocks",
    "rasterize",
]

logger = logging.getLogger(__name__)

THRESHOLD: Final[int] = 0x80
"""Mid-gray. Luminance strictly below this value prints a dot."""


@runtime_checkable
class Bitmap(Protocol):
    """Anything with a size and a 2-D grayscale accessor (0=black, 255=white)."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def gray(self, x: int, y: int) -> int: ...


class GrayBitmap:
    """
    Bitmap backed by a Pillow image in mode "L".

    Images with an alpha channel or a transparency key (palette and
    single-color transparency) are flattened onto white first, so
    transparent areas do not print.
    """

    def __init__(self, image: Image.Image) -> None:
        if "A" in image.getbands() or "transparency" in image.info:
            background = Image.new("RGBA", image.size, (255, 255, 255, 255))
            image = Image.alpha_composite(background, image.convert("RGBA"))
        self.image = image if image.mode == "L" else image.convert("L")
        self._pixels = self.image.load()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "GrayBitmap":
        """Build a bitmap from rows of 0-255 luminance values."""
        height = len(rows)
        width = len(rows[0]) if height else 0
        if any(len(row) != width for row in rows):
            raise ValueError("All bitmap rows must have the same length")

        image = Image.new("L", (width, height), 255)
        image.putdata([value for row in rows for value in row])
        return cls(image)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def gray(self, x: int, y: int) -> int:
        return self._pixels[x, y]


def as_bitmap(source: Union[Bitmap, Image.Image]) -> Bitmap:
    """Accept a Bitmap as-is or wrap a Pillow image."""
    if isinstance(source, Image.Image):
        return GrayBitmap(source)
    if isinstance(source, Bitmap):
        return source
    raise TypeError(f"Expected a Bitmap or PIL.Image.Image, got {type(source).__name__}")


@dataclass(frozen=True)
class RowBlock:
    """One strip of the image: header parameters plus packed column data."""

    dot_mode: DotMode
    density: Density
    width: int
    data: bytes

    def to_bytes(self) -> bytes:
        """ESC * command for this strip (without the trailing LF)."""
        return print_bit_image(self.dot_mode, self.density, self.width, self.data)


def _pack_strip(bitmap: Bitmap, top: int, dot_mode: DotMode) -> bytes:
    width, height = bitmap.width, bitmap.height
    data = bytearray()

    for x in range(width):
        for band in range(dot_mode.bytes_per_column):
            column = 0
            for bit in range(8):
                column <<= 1
                y = top + band * 8 + bit
                if y >= height:
                    # bottom padding of the last strip
                    continue
                if bitmap.gray(x, y) < THRESHOLD:
                    column |= 1
            data.append(column)

    return bytes(data)


def iter_row_blocks(
    source: Union[Bitmap, Image.Image],
    density: Density = Density.SINGLE,
    dot_mode: DotMode = DotMode.DOTS_24,
) -> Iterator[RowBlock]:
    """
    Yield row blocks top-to-bottom.

    Args:
        source: Bitmap or Pillow image.
        density: Horizontal density (SINGLE 90 DPI, DOUBLE 180 DPI).
        dot_mode: Strip height (DOTS_8 or DOTS_24).

    Raises:
        CommandValidationError: If density/dot_mode are invalid or the
                                image is wider than 65535 dots.
    """
    check_enum(density, Density)
    check_enum(dot_mode, DotMode)
    bitmap = as_bitmap(source)

    if bitmap.width > MAX_IMAGE_WIDTH:
        raise CommandValidationError(
            f"image width must be between 0 and {MAX_IMAGE_WIDTH}, got {bitmap.width}"
        )

    unit = dot_mode.unit_height
    logger.debug(
        "Rasterizing %dx%d bitmap into %s strips at %s density",
        bitmap.width,
        bitmap.height,
        dot_mode.name,
        density.name,
    )

    for top in range(0, bitmap.height, unit):
        yield RowBlock(
            dot_mode=dot_mode,
            density=density,
            width=bitmap.width,
            data=_pack_strip(bitmap, top, dot_mode),
        )


def rasterize(
    source: Union[Bitmap, Image.Image],
    density: Density = Density.SINGLE,
    dot_mode: DotMode = DotMode.DOTS_24,
) -> list[RowBlock]:
    """Rasterize a whole image; see iter_row_blocks()."""
    return list(iter_row_blocks(source, density, dot_mode))
