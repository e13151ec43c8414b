from __future__ import annotations

import logging

import numpy as np

from ..exceptions import AllocationError
from ..models.image import PIXEL_DTYPE, Image
from ..models.pixel import CHANNEL_MAX

logger = logging.getLogger(__name__)

# 3x3 neighbourhood offsets, centre included
_OFFSETS = [(dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1)]


class FilterService:
    """
    Pixel transforms over Image objects.
    *   No I/O here—works only with Image objects (uint16 numpy arrays).
    *   blur() returns a new Image, normalize() rewrites its argument in place.
    """

    # ─── Blur ──────────────────────────────────────────────────────
    def blur(self, source: Image) -> Image:
        """
        3x3 mean filter with a shrinking window at the borders.

        Each output channel is the truncated mean of the in-bounds cells
        around (y, x): 9 inside, 6 on an edge, 4 in a corner. Only `source`
        is read, so neighbouring results never see already-blurred values.

        Args:
            source (Image): Image to blur. Left untouched.

        Returns:
            Image: A new Image with the same dimensions.
        """
        if source is None:
            raise ValueError("No source image to blur")

        height, width = source.height, source.width
        try:
            # Zero border so every offset window has the same (H, W) shape.
            padded = np.pad(source.pixels.astype(np.int64), ((1, 1), (1, 1), (0, 0)))
            inside = np.pad(np.ones((height, width, 1), dtype=np.int64), ((1, 1), (1, 1), (0, 0)))

            sums = np.zeros((height, width, 3), dtype=np.int64)
            counts = np.zeros((height, width, 1), dtype=np.int64)
            for dy, dx in _OFFSETS:
                rows = slice(1 + dy, 1 + dy + height)
                cols = slice(1 + dx, 1 + dx + width)
                sums += padded[rows, cols]
                counts += inside[rows, cols]

            blurred = (sums // counts).astype(PIXEL_DTYPE)
        except MemoryError as err:
            raise AllocationError(f"Could not allocate blurred {height}x{width} image") from err

        return Image(pixels=blurred, path=source.path)

    # ─── Normalize ─────────────────────────────────────────────────
    def normalize(self, img: Image) -> bool:
        """
        Stretch the image to the full 16-bit range, in place.

        One global minimum and maximum is taken over all channels of all
        pixels, so the three channels share one offset and one scale.

        Returns:
            True on success (a flat image is already normalised),
            False if there is no image.
        """
        if img is None:
            logger.error("No image to normalise")
            return False

        if img.pixels.size == 0:
            logger.warning("Image is already normalised.")
            return True

        min_val = int(img.pixels.min())
        max_val = int(img.pixels.max())
        if min_val == max_val:
            logger.warning("Image is already normalised.")
            return True

        logger.info(f"Minimum value: {min_val}, maximum value: {max_val}")

        span = max_val - min_val
        # (v - min) * 65535 / span, numerator first so exact multiples stay exact
        shifted = img.pixels.astype(np.float64) - min_val
        scaled = np.trunc(shifted * float(CHANNEL_MAX) / span)
        img.pixels[...] = scaled.astype(PIXEL_DTYPE)
        return True


_filters = FilterService()


def blur(source: Image) -> Image:
    return _filters.blur(source)


def normalize(img: Image) -> bool:
    return _filters.normalize(img)
