"""I/O modules for the buffer exporter."""

from .bitmap_writer import encode_rgba_png, write_rgba_png
from .matrix_writer import pack_matrix_header, write_raw_matrix
from .matrix_reader import RawMatrix, read_raw_matrix, unpack_matrix_header
from .source_reader import read_source_buffer, rescale_pixels
from .destination import atomic_destination

__all__ = [
    'encode_rgba_png',
    'write_rgba_png',
    'pack_matrix_header',
    'write_raw_matrix',
    'RawMatrix',
    'read_raw_matrix',
    'unpack_matrix_header',
    'read_source_buffer',
    'rescale_pixels',
    'atomic_destination',
]
