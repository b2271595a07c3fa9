"""Buffer Exporter - routes a pixel buffer to the bitmap or raw matrix path."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import numpy as np

from .constants import BITMAP_EXTENSION, MATRIX_EXTENSION
from .buffer import (
    PixelBuffer, PixelLayout, ContrastParameters, AffineCoefficients, resolve_numeric_kind
)
from .transform import build_rgba_plane
from .io import write_rgba_png, write_raw_matrix

logger = logging.getLogger(__name__)


class OutputKind(Enum):
    BITMAP = 'bitmap'
    RAW_MATRIX = 'raw_matrix'

    @classmethod
    def from_path(cls, path) -> 'OutputKind':
        """Infer the output kind from a file extension (.png or .oct)."""
        suffix = Path(path).suffix.lower()
        if suffix == BITMAP_EXTENSION:
            return cls.BITMAP
        elif suffix == MATRIX_EXTENSION:
            return cls.RAW_MATRIX
        raise ValueError(
            f"Cannot infer output kind from '{suffix}'. "
            f"Use {BITMAP_EXTENSION} or {MATRIX_EXTENSION}")


@dataclass(frozen=True)
class OutputRequest:
    path: Path
    kind: OutputKind

    @classmethod
    def for_path(cls, path, kind=None) -> 'OutputRequest':
        """Build a request, inferring the kind from the extension when not given."""
        if kind is None:
            kind = OutputKind.from_path(path)
        return cls(Path(path), OutputKind(kind))


class BufferExporter:
    """
    Exporter for debuggee pixel buffers.

    Bitmap pipeline:
    1. Validate layout and contrast parameters
    2. Select the numeric kind (once per buffer)
    3. Read the stride-aware sample view
    4. Affine contrast, clamp and truncate to bytes
    5. Grayscale broadcast and default channel fill
    6. Layout remap
    7. PNG encoding

    Raw matrix pipeline:
    1. Select the numeric kind
    2. Write header and untouched row samples
    """

    def export(self, buffer: PixelBuffer, request: OutputRequest,
               contrast=None, layout=None) -> None:
        """
        Export a buffer to the file described by ``request``.

        Args:
            buffer: Source pixel buffer
            request: Destination path and output kind
            contrast: ContrastParameters or AffineCoefficients (bitmap only).
                      Defaults to the buffer's own per-channel range.
            layout: PixelLayout or 4-letter string (bitmap only, default 'rgba')

        Raises:
            BufferExportError: On any validation, encoding or write failure.
                               Nothing is left at the destination on failure.
        """
        if not isinstance(buffer, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(buffer).__name__}")

        if request.kind == OutputKind.BITMAP:
            self._export_bitmap(buffer, request.path, contrast, layout)
        elif request.kind == OutputKind.RAW_MATRIX:
            self._export_raw(buffer, request.path)
        else:
            raise ValueError(f"Unsupported output kind: {request.kind}")

    def _export_bitmap(self, buffer: PixelBuffer, path: Path, contrast, layout) -> None:
        layout = PixelLayout.default() if layout is None else PixelLayout.parse(layout)
        kind = resolve_numeric_kind(buffer.element_kind)

        if contrast is None:
            contrast = ContrastParameters.from_buffer(buffer)
        if isinstance(contrast, ContrastParameters):
            coefficients = contrast.coefficients(kind)
        elif isinstance(contrast, AffineCoefficients):
            coefficients = contrast
        else:
            coefficients = AffineCoefficients.from_packed(contrast)

        logger.debug("Exporting %s %dx%d buffer as %s bitmap to %s",
                     buffer.describe(), buffer.width, buffer.height, layout, path)

        plane = build_rgba_plane(buffer.rows(), kind, coefficients, layout)
        write_rgba_png(plane, path)

    def _export_raw(self, buffer: PixelBuffer, path: Path) -> None:
        kind = resolve_numeric_kind(buffer.element_kind)

        logger.debug("Exporting %s %dx%d buffer as %s raw matrix to %s",
                     buffer.describe(), buffer.width, buffer.height, kind.token, path)

        # float64 is stored as float32; out-of-range doubles become inf
        with np.errstate(over='ignore'):
            rows = buffer.rows().astype(kind.dtype, copy=False)
        write_raw_matrix(rows, kind, path)


def export_buffer(buffer: PixelBuffer, path, kind=None,
                  contrast=None, layout=None) -> OutputRequest:
    """
    Export a buffer in one call.

    Args:
        buffer: Source pixel buffer
        path: Destination file path
        kind: OutputKind (inferred from the extension if None)
        contrast: Bitmap contrast (see BufferExporter.export)
        layout: Bitmap pixel layout (see BufferExporter.export)

    Returns:
        The OutputRequest that was fulfilled
    """
    request = OutputRequest.for_path(path, kind)
    BufferExporter().export(buffer, request, contrast=contrast, layout=layout)
    return request
