from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import numpy as np

from ..exceptions import HphexError, IoError
from ..models.image import Image
from ..services.codec_service import CodecService

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file I/O for Image entities.
    """
    def __init__(self, codec: CodecService = None):
        self.codec = codec or CodecService()

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        if path is None:
            return Image(pixels)
        return Image(pixels=pixels, path=Path(path))

    @staticmethod
    def copy_image(image: Image) -> Image:
        return image.copy()

    def retrieve_image_dimensions(self, img: Image):
        return img.height, img.width

    def load(self, path: Union[str, Path]) -> Image:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as err:
            raise IoError(f"File could not be opened: {err.strerror or err}", path, err.errno) from err

        try:
            img = self.codec.decode(data)
        except HphexError as err:
            raise err.with_path(path)

        img.path = path
        logger.debug(f"Loaded {img.height}x{img.width} image from {path}")
        return img

    def save(self, image: Image, path: Union[str, Path] = None) -> Path:
        path = Path(path) if path is not None else image.path
        if path is None:
            raise ValueError("Image has no destination path")

        data = self.codec.encode(image)
        try:
            path.write_bytes(data)
        except OSError as err:
            raise IoError(f"Saving image failed: {err.strerror or err}", path, err.errno) from err

        logger.debug(f"Saved {image.height}x{image.width} image to {path}")
        return path
