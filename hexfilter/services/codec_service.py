from __future__ import annotations

import os
import re
import logging
from typing import Union

import numpy as np
from dotenv import load_dotenv

from ..exceptions import AllocationError, FormatError
from ..models.image import CHANNELS, PIXEL_DTYPE, Image

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

MAGIC = b"HPHEX"
_DIMENSION = re.compile(rb"[0-9]+")
_HEX_TOKEN = re.compile(rb"[0-9a-fA-F]{1,4}")
_CHANNEL_NAMES = ("red", "green", "blue")


class CodecService:
    """
    Reads and writes the HPHEX text format:

        HPHEX <height> <width> <r0> <g0> <b0> <r1> <g1> <b1> ...

    Tokens are separated by any run of whitespace. Channel tokens are
    hexadecimal, one (r, g, b) triple per pixel in row-major order.
    No file I/O here; bytes in, bytes out.
    """

    def __init__(self, max_pixels: int = None):
        if max_pixels is None:
            max_pixels = int(os.getenv("HPHEX_MAX_PIXELS", "100000000"))
        self.MAX_PIXELS = max_pixels

    # ─── Decoding ──────────────────────────────────────────────────
    def decode(self, data: Union[bytes, str]) -> Image:
        """
        Parse HPHEX data into a new Image.

        Args:
            data: Raw file contents. ``str`` input must be ASCII.

        Returns:
            Image: fully populated image; never a partial one.

        Raises:
            FormatError: missing magic, bad dimensions, malformed or missing
                channel tokens, or data after the last pixel.
            AllocationError: the header asks for more pixels than allowed.
        """
        if isinstance(data, str):
            try:
                data = data.encode("ascii")
            except UnicodeEncodeError as err:
                raise FormatError(f"Non-ASCII character in image data at offset {err.start}") from err

        tokens = data.split()
        if not tokens or tokens[0] != MAGIC:
            raise FormatError("Missing HPHEX magic token")
        if len(tokens) < 3:
            raise FormatError("Error reading image dimensions: header truncated")

        height = self._parse_dimension(tokens[1], "height")
        width = self._parse_dimension(tokens[2], "width")
        n_pixels = height * width
        # each side on its own too: a zero side would hide a huge one
        if n_pixels > self.MAX_PIXELS or max(height, width) > self.MAX_PIXELS:
            raise AllocationError(
                f"Image of {height}x{width} exceeds the {self.MAX_PIXELS} pixel limit"
            )

        body = tokens[3:]
        expected = n_pixels * CHANNELS
        if len(body) < expected:
            self._check_tokens(body)
            raise FormatError(
                f"Error reading pixel data: expected {expected} channel values, found {len(body)}"
            )
        if len(body) > expected:
            raise FormatError(
                f"Unexpected data after {n_pixels} pixels: {len(body) - expected} extra tokens"
            )
        self._check_tokens(body)

        try:
            flat = np.fromiter((int(tok, 16) for tok in body), dtype=PIXEL_DTYPE, count=expected)
            img = Image(pixels=flat.reshape(height, width, CHANNELS))
        except MemoryError as err:
            raise AllocationError(f"Could not allocate {height}x{width} image") from err
        except (ValueError, OverflowError) as err:
            raise FormatError(f"Unsupported image dimensions {height}x{width}: {err}") from err

        logger.debug(f"Decoded {height}x{width} image")
        return img

    @staticmethod
    def _parse_dimension(token: bytes, name: str) -> int:
        if not _DIMENSION.fullmatch(token):
            raise FormatError(
                f"Error reading image dimensions: {name} {token.decode('ascii', 'replace')!r} "
                f"is not a non-negative integer"
            )
        return int(token)

    @staticmethod
    def _check_tokens(tokens) -> None:
        for i, tok in enumerate(tokens):
            if not _HEX_TOKEN.fullmatch(tok):
                pixel, channel = divmod(i, CHANNELS)
                raise FormatError(
                    f"Error reading pixel data: {_CHANNEL_NAMES[channel]} value of pixel {pixel} "
                    f"is not a 16-bit hex value: {tok.decode('ascii', 'replace')!r}"
                )

    # ─── Encoding ──────────────────────────────────────────────────
    @staticmethod
    def encode(image: Image) -> bytes:
        """
        Serialize an Image to HPHEX bytes.
        Every token is followed by a single space, channels as 4-digit lower-case hex.
        """
        header = f"HPHEX {image.height} {image.width} "
        body = "".join(
            f"{r:04x} {g:04x} {b:04x} " for r, g, b in image.pixels.reshape(-1, CHANNELS).tolist()
        )
        return (header + body).encode("ascii")


def decode(data: Union[bytes, str]) -> Image:
    """Decode with the environment-configured pixel limit."""
    return CodecService().decode(data)


def encode(image: Image) -> bytes:
    return CodecService.encode(image)
