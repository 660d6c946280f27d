# =============================================================================
# Image-to-Glyph Conversion
# =============================================================================
# Converts raster images to bordered blocks of characters.
#
# The process:
#   1. Decode image bytes (PNG, JPEG, WEBP, ...)
#   2. Resize to fit the text column, halving the height because terminal
#      cells are roughly twice as tall as they are wide
#   3. Convert to single-channel luminance
#   4. Map each pixel's brightness onto the glyph ramp
#   5. Wrap the grid in a box-drawing border
#
# Everything after the decode is deterministic.
# =============================================================================

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)


# Ten glyphs ordered from darkest to lightest pixel
GLYPH_RAMP = " .:-=+*#%@"

# Bounds for the character grid (border excluded)
MIN_WIDTH = 10
MIN_HEIGHT = 5
MAX_HEIGHT = 50


@dataclass
class AsciiImage:
    """
    An image rendered as characters.

    Attributes:
        width: Grid width in characters (border excluded).
        height: Grid height in rows (border excluded).
        rows: The glyph rows, each exactly `width` characters long.
    """
    width: int
    height: int
    rows: list[str]

    def lines(self) -> list[str]:
        """The grid with its one-cell border, one string per line."""
        top = "┌" + "─" * self.width + "┐"
        bottom = "└" + "─" * self.width + "┘"
        return [top, *(f"│{row}│" for row in self.rows), bottom]

    def __str__(self) -> str:
        return "\n".join(self.lines())


def brightness_to_glyph(brightness: int) -> str:
    """Map a brightness value (0-255) to a glyph of the ramp."""
    index = brightness * (len(GLYPH_RAMP) - 1) // 255
    return GLYPH_RAMP[index]


def scaled_size(width: int, height: int, max_width: int) -> tuple[int, int]:
    """
    Compute the character grid size for a source image.

    Args:
        width: Source width in pixels.
        height: Source height in pixels.
        max_width: Widest grid allowed.

    Returns:
        Tuple of (columns, rows).
    """
    new_width = min(max_width, width)
    # Halves round up: 4.5 rows becomes 5
    new_height = int(new_width * height / width / 2 + 0.5)
    return new_width, new_height


class AsciiImageConverter:
    """
    Renders images as character art for the text view.

    Usage:
        >>> converter = AsciiImageConverter(max_width=60)
        >>> block = converter.convert(image_bytes)
        >>> if block is not None:
        ...     print(block)
    """

    def __init__(self, max_width: int = 60) -> None:
        """
        Initialize the converter.

        Args:
            max_width: Maximum grid width in characters.
        """
        self.max_width = max_width

    def load_image(self, data: bytes) -> "Image.Image | None":
        """
        Decode an image from bytes.

        Returns:
            PIL Image object, or None if the data isn't a decodable raster.
        """
        from PIL import Image

        try:
            image = Image.open(BytesIO(data))
            image.load()
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.debug(f"Image decode failed: {e}")
            return None
        return image

    def convert(self, data: bytes, max_width: int | None = None) -> AsciiImage | None:
        """
        Convert raw image bytes to an AsciiImage.

        Args:
            data: Encoded image data.
            max_width: Override the converter's maximum width.

        Returns:
            The rendered block, or None if the image can't be decoded or
            its scaled size falls outside the allowed bounds.
        """
        image = self.load_image(data)
        if image is None:
            return None
        return self.convert_image(image, max_width)

    def convert_image(
        self,
        image: "Image.Image",
        max_width: int | None = None,
    ) -> AsciiImage | None:
        """Convert an already decoded image. See convert()."""
        from PIL import Image

        width, height = image.size
        if width <= 0 or height <= 0:
            return None

        new_width, new_height = scaled_size(width, height, max_width or self.max_width)
        if new_width < MIN_WIDTH or new_height < MIN_HEIGHT or new_height > MAX_HEIGHT:
            logger.debug(
                f"Image size rejected: {width}x{height} -> {new_width}x{new_height}"
            )
            return None

        resized = image.resize((new_width, new_height), Image.Resampling.LANCZOS)
        gray = resized.convert("L")
        pixels = gray.tobytes()

        rows = [
            "".join(brightness_to_glyph(b) for b in pixels[y * new_width:(y + 1) * new_width])
            for y in range(new_height)
        ]
        return AsciiImage(width=new_width, height=new_height, rows=rows)
