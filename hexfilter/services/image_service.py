from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np

from ..models.image import Image
from ..repositories.image_repository import ImageRepository


class ImageService:
    """I/O helpers.  No filter logic here."""
    def __init__(self, image_repository: ImageRepository = None):
        self.image_repository = image_repository or ImageRepository()

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        return self.image_repository.create_image(pixels, path)

    def copy(self, image: Image) -> Image:
        """Deep copy; the copy owns its own pixel buffer."""
        return self.image_repository.copy_image(image)

    def load(self, path: str | Path) -> Image:
        """Load a single HPHEX image from disk into an Image object."""
        return self.image_repository.load(path)

    def save(self, image: Image, path: str | Path = None) -> Path:
        """
        Business-level method to save the image to a specific path
        (or back to its own path when none is given).
        """
        return self.image_repository.save(image, path)

    def get_image_dimensions(self, img: Image):
        return self.image_repository.retrieve_image_dimensions(img)
