import numpy as np

from .types import Color
from .utils import clamp_channel, PPM_MAGIC, PPM_MAX_COLOR_VALUE


class Canvas:
    """Row-major framebuffer of float RGB values, black on creation.

    The pixel buffer is owned by the canvas; reads hand back copies.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas requires positive dimensions, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._pixels = np.zeros((self.height, self.width, 3), dtype=np.float64)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} canvas")

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Overwrite pixel (x, y); x is the column, y the row."""
        self._check_bounds(x, y)
        self._pixels[y, x] = np.asarray(color.data)

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        return Color(self._pixels[y, x].copy())

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the (height, width, 3) float buffer."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def to_array(self) -> np.ndarray:
        """(height, width, 3) uint8 image using the PPM channel clamp."""
        return clamp_channel(self._pixels).astype(np.uint8)

    def to_ppm(self) -> str:
        """Pixel rows of the P3 body, without the header.

        Each channel is followed by a single space and each row ends with a
        newline. Lines are not wrapped at 70 columns.
        """
        channels = self.to_array().reshape(self.height, self.width * 3)
        return "".join(
            "".join(f"{value} " for value in row) + "\n"
            for row in channels.tolist()
        )

    def save(self) -> str:
        """Full P3 document: header followed by the pixel rows."""
        header = f"{PPM_MAGIC}\n{self.width} {self.height}\n{PPM_MAX_COLOR_VALUE}\n"
        return header + self.to_ppm()
