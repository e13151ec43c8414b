"""
Blur → Normalize Pipeline
Decodes each input file, blurs it, stretches its dynamic range and writes
the result to the paired output file. The first failure aborts the batch.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

from ..exceptions import HphexError, ProcessingError
from ..models.image import Image
from ..services.filter_service import FilterService
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def pair_arguments(paths: Sequence[PathLike]) -> List[Tuple[Path, Path]]:
    """
    Split a flat [in1, out1, in2, out2, ...] list into (input, output) pairs.
    """
    if not paths or len(paths) % 2:
        raise ValueError(f"Expected input/output path pairs, got {len(paths)} paths")
    return [(Path(paths[i]), Path(paths[i + 1])) for i in range(0, len(paths), 2)]


def process_image(
    image: Image,
    *,
    filter_service: FilterService = FilterService(),
) -> Image:
    """
    Blur `image` into a new Image, then normalise that one in place.

    Returns:
        Image: the blurred and normalised image. `image` itself is unchanged.
    """
    try:
        blurred = filter_service.blur(image)
    except HphexError:
        raise
    except ValueError as err:
        raise ProcessingError(f"First process failed: {err}", image.path if image else None) from err

    if not filter_service.normalize(blurred):
        raise ProcessingError("Second process failed", blurred.path)
    return blurred


def process_pair(
    input_path: PathLike,
    output_path: PathLike,
    *,
    image_service: ImageService = None,
    filter_service: FilterService = FilterService(),
) -> Path:
    """
    Load one HPHEX file, run blur and normalize, save the result.

    Returns:
        Path: where the output was written.
    """
    image_service = image_service or ImageService()

    original = image_service.load(input_path)
    result = process_image(original, filter_service=filter_service)
    del original

    return image_service.save(result, output_path)


def process_batch(
    pairs: Iterable[Tuple[PathLike, PathLike]],
    *,
    image_service: ImageService = None,
    filter_service: FilterService = FilterService(),
) -> List[Path]:
    """
    Run every (input, output) pair in order.

    Fail-fast: the first error is tagged with the offending file and
    re-raised; later pairs are not touched, earlier outputs stay on disk.

    Returns:
        List[Path]: output paths written.
    """
    image_service = image_service or ImageService()
    pairs = list(pairs)
    written = []

    for i, (input_path, output_path) in enumerate(pairs, 1):
        logger.info(f"Processing image {i}/{len(pairs)}: {input_path} -> {output_path}")
        try:
            written.append(process_pair(input_path, output_path,
                                        image_service=image_service,
                                        filter_service=filter_service))
        except HphexError as err:
            if err.path is None:
                err.with_path(input_path)
            raise

    logger.info(f"Processed {len(written)} image(s)")
    return written
