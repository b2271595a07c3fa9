"""Raw typed matrix reader."""

import struct
from typing import NamedTuple

import numpy as np

from ..constants import MATRIX_HEADER_FORMAT, MATRIX_HEADER_SIZE, MATRIX_TOKEN_TERMINATOR
from ..buffer.element_kind import NumericKind, numeric_kind_for_token


class RawMatrix(NamedTuple):
    kind: NumericKind
    data: np.ndarray  # (height, width, channels)


def unpack_matrix_header(content: bytes) -> dict:
    """
    Parse the token line and dimension header of a raw matrix file.

    Returns:
        Dictionary with 'kind', 'height', 'width', 'channels' and
        'data_offset' (byte offset of the first sample)

    Raises:
        ValueError: If the header is truncated or malformed
    """
    end = content.find(MATRIX_TOKEN_TERMINATOR)
    if end < 0:
        raise ValueError("Missing element kind token")

    kind = numeric_kind_for_token(content[:end].decode('ascii'))

    start = end + len(MATRIX_TOKEN_TERMINATOR)
    header = content[start:start + MATRIX_HEADER_SIZE]
    if len(header) != MATRIX_HEADER_SIZE:
        raise ValueError(f"Header size mismatch. Expected {MATRIX_HEADER_SIZE}, got {len(header)}")

    height, width, channels = struct.unpack(MATRIX_HEADER_FORMAT, header)
    if height <= 0 or width <= 0 or channels <= 0:
        raise ValueError(f"Invalid matrix dimensions: {height}x{width}x{channels}")

    return {
        'kind': kind,
        'height': height,
        'width': width,
        'channels': channels,
        'data_offset': start + MATRIX_HEADER_SIZE,
    }


def read_raw_matrix(path) -> RawMatrix:
    """
    Read a raw matrix file written by write_raw_matrix.

    Args:
        path: Path to the .oct file

    Returns:
        RawMatrix with samples shaped (height, width, channels)

    Raises:
        ValueError: If the file is malformed
    """
    with open(path, 'rb') as f:
        content = f.read()

    info = unpack_matrix_header(content)
    kind = info['kind']
    shape = (info['height'], info['width'], info['channels'])

    payload = content[info['data_offset']:]
    expected = shape[0] * shape[1] * shape[2] * kind.itemsize
    if len(payload) != expected:
        raise ValueError(f"Data size mismatch. Expected {expected} bytes, got {len(payload)}")

    data = np.frombuffer(payload, dtype=kind.dtype).reshape(shape)
    return RawMatrix(kind, data)
