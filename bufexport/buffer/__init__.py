"""Buffer descriptions for the buffer exporter."""

from .element_kind import (
    ElementKind, NumericKind, NUMERIC_KINDS, resolve_numeric_kind, numeric_kind_for_token
)
from .pixel_buffer import PixelBuffer
from .pixel_layout import PixelLayout
from .contrast import ContrastParameters, AffineCoefficients

__all__ = [
    'ElementKind',
    'NumericKind',
    'NUMERIC_KINDS',
    'resolve_numeric_kind',
    'numeric_kind_for_token',
    'PixelBuffer',
    'PixelLayout',
    'ContrastParameters',
    'AffineCoefficients',
]
