"""Raw typed matrix writer (lossless)."""

import logging
import struct

import numpy as np

from ..constants import MATRIX_HEADER_FORMAT, MATRIX_TOKEN_TERMINATOR
from ..buffer.element_kind import NumericKind
from .destination import atomic_destination

logger = logging.getLogger(__name__)


def pack_matrix_header(kind: NumericKind, height: int, width: int, channels: int) -> bytes:
    """
    Pack the raw matrix header.

    Layout: ASCII element token, newline, then height, width and channel
    count as native-order 32-bit signed integers.
    """
    return (kind.token.encode('ascii') + MATRIX_TOKEN_TERMINATOR +
            struct.pack(MATRIX_HEADER_FORMAT, height, width, channels))


def write_raw_matrix(rows: np.ndarray, kind: NumericKind, path) -> None:
    """
    Write visible samples to ``path`` without any transform.

    Each row's width * channels samples are written in order. Stride padding
    is not part of ``rows`` and never reaches the file.

    Args:
        rows: (height, width, channels) view from PixelBuffer.rows()
        kind: Numeric kind the samples are stored as
        path: Output file path

    Raises:
        DestinationUnwritable: If the file cannot be written
    """
    height, width, channels = rows.shape
    header = pack_matrix_header(kind, height, width, channels)

    with atomic_destination(path) as f:
        f.write(header)
        for row in rows:
            f.write(np.ascontiguousarray(row, dtype=kind.dtype).tobytes())

    logger.debug("Raw matrix %s %dx%dx%d written to %s",
                 kind.token, height, width, channels, path)
