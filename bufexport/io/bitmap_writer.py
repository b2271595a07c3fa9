"""PNG writer for normalized RGBA planes."""

import io
import logging

import numpy as np
from PIL import Image

from ..constants import RGBA_CHANNELS
from ..errors import EncodingFailure
from .destination import atomic_destination

logger = logging.getLogger(__name__)


def encode_rgba_png(plane: np.ndarray) -> bytes:
    """
    Encode an RGBA8 plane as PNG.

    Args:
        plane: (height, width, 4) uint8 array

    Returns:
        PNG file contents

    Raises:
        EncodingFailure: If the plane is malformed or Pillow rejects it
    """
    if plane.ndim != 3 or plane.shape[2] != RGBA_CHANNELS or plane.dtype != np.uint8:
        raise EncodingFailure(
            f"Expected (height, width, {RGBA_CHANNELS}) uint8 plane, "
            f"got {plane.shape} {plane.dtype}")

    height, width = plane.shape[:2]
    buffer = io.BytesIO()
    try:
        image = Image.frombytes('RGBA', (width, height), np.ascontiguousarray(plane).tobytes())
        image.save(buffer, format='PNG')
    except (OSError, ValueError) as e:
        raise EncodingFailure(f"PNG encoding failed: {e}") from e

    return buffer.getvalue()


def write_rgba_png(plane: np.ndarray, path) -> None:
    """
    Write an RGBA8 plane to ``path`` as a PNG file.

    Raises:
        EncodingFailure: If encoding fails (nothing is written)
        DestinationUnwritable: If the file cannot be written
    """
    data = encode_rgba_png(plane)
    logger.debug("Encoded %dx%d RGBA plane into %d PNG bytes",
                 plane.shape[1], plane.shape[0], len(data))

    with atomic_destination(path) as f:
        f.write(data)
