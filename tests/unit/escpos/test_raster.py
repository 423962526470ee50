import pytest
from PIL import Image

from hoinprint.escpos.commands import Density, DotMode
from hoinprint.escpos.raster import (
    THRESHOLD,
    GrayBitmap,
    RowBlock,
    as_bitmap,
    rasterize,
)
from hoinprint.exceptions import CommandValidationError


def solid(width: int, height: int, value: int) -> Image.Image:
    return Image.new("L", (width, height), value)


class TestPacking:
    def test_all_white_8x8(self) -> None:
        blocks = rasterize(solid(8, 8, 255), Density.SINGLE, DotMode.DOTS_8)
        assert len(blocks) == 1
        assert blocks[0].data == bytes(8)

    def test_all_black_8x8(self) -> None:
        blocks = rasterize(solid(8, 8, 0), Density.SINGLE, DotMode.DOTS_8)
        assert blocks[0].data == b"\xff" * 8

    def test_threshold_is_mid_gray(self) -> None:
        dark = rasterize(solid(1, 8, THRESHOLD - 1), Density.SINGLE, DotMode.DOTS_8)
        light = rasterize(solid(1, 8, THRESHOLD), Density.SINGLE, DotMode.DOTS_8)
        assert dark[0].data == b"\xff"
        assert light[0].data == b"\x00"

    def test_msb_is_top_pixel(self) -> None:
        rows = [[255, 255] for _ in range(8)]
        rows[0][0] = 0  # top of column 0
        rows[7][1] = 0  # bottom of column 1
        blocks = rasterize(GrayBitmap.from_rows(rows), Density.SINGLE, DotMode.DOTS_8)
        assert blocks[0].data == bytes([0b1000_0000, 0b0000_0001])

    def test_24_dot_column_major(self) -> None:
        # column 0: only row 8 inked (second byte MSB); column 1: only row 23
        rows = [[255, 255] for _ in range(24)]
        rows[8][0] = 0
        rows[23][1] = 0
        blocks = rasterize(GrayBitmap.from_rows(rows), Density.DOUBLE, DotMode.DOTS_24)
        assert blocks[0].data == bytes([0x00, 0x80, 0x00, 0x00, 0x00, 0x01])

    def test_partial_strip_is_zero_padded(self) -> None:
        blocks = rasterize(solid(4, 10, 0), Density.SINGLE, DotMode.DOTS_8)
        assert len(blocks) == 2
        assert blocks[0].data == b"\xff" * 4
        assert blocks[1].data == bytes([0b1100_0000]) * 4

    def test_24_dot_partial_strip(self) -> None:
        blocks = rasterize(solid(2, 30, 0), Density.SINGLE, DotMode.DOTS_24)
        assert len(blocks) == 2
        assert blocks[1].data == bytes([0b1111_1100, 0x00, 0x00]) * 2

    def test_strip_count(self) -> None:
        assert len(rasterize(solid(3, 48, 255), Density.SINGLE, DotMode.DOTS_24)) == 2
        assert len(rasterize(solid(3, 49, 255), Density.SINGLE, DotMode.DOTS_24)) == 3


class TestRowBlock:
    def test_to_bytes_header(self) -> None:
        blocks = rasterize(solid(8, 8, 0), Density.SINGLE, DotMode.DOTS_8)
        assert blocks[0].to_bytes() == bytes([0x1B, 0x2A, 0x00, 0x08, 0x00]) + b"\xff" * 8

    def test_24_dot_double_density_header(self) -> None:
        blocks = rasterize(solid(260, 24, 255), Density.DOUBLE, DotMode.DOTS_24)
        assert blocks[0].to_bytes()[:5] == bytes([0x1B, 0x2A, 33, 0x04, 0x01])
        assert len(blocks[0].data) == 260 * 3

    def test_block_fields(self) -> None:
        block = rasterize(solid(5, 8, 255), Density.DOUBLE, DotMode.DOTS_8)[0]
        assert block == RowBlock(DotMode.DOTS_8, Density.DOUBLE, 5, bytes(5))


class TestBitmapAdapters:
    def test_rgb_image_converted(self) -> None:
        img = Image.new("RGB", (2, 8), (0, 0, 0))
        assert rasterize(img, Density.SINGLE, DotMode.DOTS_8)[0].data == b"\xff\xff"

    def test_one_bit_image(self) -> None:
        img = Image.new("1", (2, 8), 0)
        assert rasterize(img, Density.SINGLE, DotMode.DOTS_8)[0].data == b"\xff\xff"

    def test_transparent_pixels_do_not_print(self) -> None:
        img = Image.new("RGBA", (2, 8), (0, 0, 0, 0))
        assert rasterize(img, Density.SINGLE, DotMode.DOTS_8)[0].data == b"\x00\x00"

    def test_palette_transparency_does_not_print(self) -> None:
        img = Image.new("P", (2, 8), 0)
        img.putpalette([0, 0, 0] + [255, 255, 255] * 255)
        img.info["transparency"] = 0
        assert rasterize(img, Density.SINGLE, DotMode.DOTS_8)[0].data == b"\x00\x00"

    def test_opaque_palette_image_prints(self) -> None:
        img = Image.new("P", (2, 8), 0)
        img.putpalette([0, 0, 0] + [255, 255, 255] * 255)
        assert rasterize(img, Density.SINGLE, DotMode.DOTS_8)[0].data == b"\xff\xff"

    def test_custom_bitmap(self) -> None:
        class Checker:
            width = 2
            height = 8

            def gray(self, x: int, y: int) -> int:
                return 0 if (x + y) % 2 == 0 else 255

        blocks = rasterize(Checker(), Density.SINGLE, DotMode.DOTS_8)
        assert blocks[0].data == bytes([0b1010_1010, 0b0101_0101])

    def test_as_bitmap_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            as_bitmap(b"not an image")  # type: ignore[arg-type]

    def test_from_rows_requires_rectangle(self) -> None:
        with pytest.raises(ValueError):
            GrayBitmap.from_rows([[0, 0], [0]])


class TestValidation:
    def test_rejects_raw_density(self) -> None:
        with pytest.raises(CommandValidationError):
            rasterize(solid(1, 1, 0), 1, DotMode.DOTS_8)  # type: ignore[arg-type]

    def test_rejects_too_wide(self) -> None:
        class Wide:
            width = 0x10000
            height = 1

            def gray(self, x: int, y: int) -> int:
                return 255

        with pytest.raises(CommandValidationError, match="image width"):
            rasterize(Wide(), Density.SINGLE, DotMode.DOTS_8)
