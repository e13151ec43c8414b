from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import numpy as np

from .pixel import Pixel

CHANNELS = 3
PIXEL_DTYPE = np.uint16


@dataclass(eq=False)
class Image:
    """
    Simple data object: 16-bit RGB pixels (+ optional source path for bookkeeping).
    Height and width are read off the buffer, so the pixel count always
    matches height * width.
    """
    pixels: np.ndarray  # Shape (H, W, 3), dtype uint16, row-major RGB.
    path: Path | None = field(default=None)  # Source of the image.

    def __post_init__(self):
        pixels = np.asarray(self.pixels)
        if pixels.ndim != 3 or pixels.shape[2] != CHANNELS:
            raise ValueError(f"Pixel buffer must have shape (H, W, 3), got {pixels.shape}")
        if pixels.dtype != PIXEL_DTYPE:
            pixels = pixels.astype(PIXEL_DTYPE)
        self.pixels = pixels
        if self.path is not None:
            self.path = Path(self.path)

    @classmethod
    def blank(cls, height: int, width: int, path: Path | None = None) -> "Image":
        if height < 0 or width < 0:
            raise ValueError(f"Image dimensions must be non-negative, got {height}x{width}")
        return cls(np.zeros((height, width, CHANNELS), dtype=PIXEL_DTYPE), path)

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    def index_of(self, y: int, x: int) -> int:
        """Flat row-major index of (y, x)."""
        self._check_bounds(y, x)
        return y * self.width + x

    def pixel_at(self, y: int, x: int) -> Pixel:
        self._check_bounds(y, x)
        red, green, blue = (int(v) for v in self.pixels[y, x])
        return Pixel(red, green, blue)

    def set_pixel(self, y: int, x: int, pixel: Pixel) -> None:
        self._check_bounds(y, x)
        self.pixels[y, x] = pixel.as_tuple()

    def copy(self) -> "Image":
        return Image(pixels=self.pixels.copy(), path=self.path)

    def _check_bounds(self, y: int, x: int) -> None:
        if not (0 <= y < self.height and 0 <= x < self.width):
            raise IndexError(f"Pixel ({y}, {x}) outside {self.height}x{self.width} image")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)

