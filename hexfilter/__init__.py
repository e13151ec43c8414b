"""Blur and normalise 16-bit RGB images stored in the HPHEX text format."""

from .exceptions import AllocationError, FormatError, HphexError, IoError, ProcessingError
from .models.image import Image
from .models.pixel import Pixel
from .services.codec_service import decode, encode
from .services.filter_service import blur, normalize

__version__ = "1.0.0"
