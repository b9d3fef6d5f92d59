"""Texture conversion for PS2 icons.

Icon textures are 128x128 packed 32-bit words with alpha in the high byte
and blue in the low byte, stored bottom row first. Normalization produces a
top-down RGBA8888 raster in two steps, always in this order:

1. reorder_channels: ARGB word -> R, G, B, A bytes
2. flip_rows: swap row r with row (height - 1 - r)
"""

from dataclasses import dataclass

from ..errors import InvalidTextureDimensions
from ..icon_format.icon_constants import (
    TEXTURE_HEIGHT, TEXTURE_WIDTH, TEXTURE_WORD_COUNT,
)


@dataclass(frozen=True)
class RasterImage:
    """Top-down RGBA8888 image, row-major."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self):
        if len(self.pixels) != self.width * self.height * 4:
            raise InvalidTextureDimensions(
                f"Raster holds {len(self.pixels)} bytes, expected "
                f"{self.width}x{self.height}x4"
            )

    def pixel(self, x, y):
        """Return (r, g, b, a) at column x, row y (row 0 = top)."""
        offset = (y * self.width + x) * 4
        return tuple(self.pixels[offset:offset + 4])

    def row(self, y):
        stride = self.width * 4
        return self.pixels[y * stride:(y + 1) * stride]


def unpack_argb(word):
    """Split a packed ARGB word into an (r, g, b, a) tuple."""
    return (
        (word >> 16) & 0xFF,
        (word >> 8) & 0xFF,
        word & 0xFF,
        (word >> 24) & 0xFF,
    )


def reorder_channels(words):
    """Convert packed ARGB words to RGBA bytes.

    Args:
        words: sequence of 32-bit ints (A high byte, B low byte)

    Returns:
        bytearray of len(words) * 4 RGBA bytes, same texel order
    """
    output = bytearray(len(words) * 4)
    for i, word in enumerate(words):
        offset = i * 4
        output[offset:offset + 4] = unpack_argb(word)
    return output


def flip_rows(data, width, height, bpp=4):
    """Flip an image vertically by swapping row pairs.

    Row r is exchanged with row (height - 1 - r) for r < height // 2; the
    middle row of an odd-height image stays in place.

    Returns:
        new bytearray; `data` is not modified
    """
    stride = width * bpp
    if len(data) != stride * height:
        raise InvalidTextureDimensions(
            f"Image data is {len(data)} bytes, expected {width}x{height}x{bpp}"
        )
    output = bytearray(data)
    for top in range(height // 2):
        bottom = height - 1 - top
        top_row = output[top * stride:(top + 1) * stride]
        bottom_row = output[bottom * stride:(bottom + 1) * stride]
        output[top * stride:(top + 1) * stride] = bottom_row
        output[bottom * stride:(bottom + 1) * stride] = top_row
    return output


def normalize_texture(words):
    """Convert an icon's raw texture block into a RasterImage.

    Args:
        words: the 16384 packed ARGB words from RawIcon.texture

    Returns:
        RasterImage of 128x128 RGBA pixels, top row first

    Raises:
        InvalidTextureDimensions: if words does not hold exactly 128x128 texels
    """
    if len(words) != TEXTURE_WORD_COUNT:
        raise InvalidTextureDimensions(
            f"Texture has {len(words)} texels, expected "
            f"{TEXTURE_WIDTH}x{TEXTURE_HEIGHT}"
        )
    rgba = reorder_channels(words)
    rgba = flip_rows(rgba, TEXTURE_WIDTH, TEXTURE_HEIGHT)
    return RasterImage(TEXTURE_WIDTH, TEXTURE_HEIGHT, bytes(rgba))
