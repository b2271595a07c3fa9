"""Element kinds and the numeric representations the pipeline runs on."""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..constants import (
    BYTE_MAX, TOKEN_UINT8, TOKEN_UINT16, TOKEN_INT16, TOKEN_INT32, TOKEN_FLOAT
)
from ..errors import UnsupportedElementKind


class ElementKind(Enum):
    """Sample types a debuggee buffer may hold."""

    UINT8 = 'uint8'
    UINT16 = 'uint16'
    INT16 = 'int16'
    INT32 = 'int32'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'

    @property
    def dtype(self) -> np.dtype:
        """Numpy dtype of one stored sample."""
        return np.dtype(self.value)

    @property
    def itemsize(self) -> int:
        return self.dtype.itemsize

    @classmethod
    def parse(cls, value) -> 'ElementKind':
        """
        Coerce a kind name, numpy dtype or ElementKind into an ElementKind.

        Raises:
            UnsupportedElementKind: If the value names no supported kind
        """
        if isinstance(value, cls):
            return value

        if value is None:
            raise UnsupportedElementKind("Element kind is required")

        if isinstance(value, str):
            name = value.strip().lower()
            if name == 'float':
                name = 'float32'
            elif name == 'double':
                name = 'float64'
        else:
            try:
                name = np.dtype(value).name
            except TypeError:
                raise UnsupportedElementKind(f"Unsupported element kind: {value!r}")

        try:
            return cls(name)
        except ValueError:
            raise UnsupportedElementKind(f"Unsupported element kind: {value!r}") from None


@dataclass(frozen=True)
class NumericKind:
    """
    One of the five numeric representations the export math is bound to.

    Attributes:
        token: Name written into raw matrix files
        dtype: Numpy dtype samples are read or narrowed to
        max_intensity: Value that maps to full display intensity
                       (dtype maximum for integers, 1.0 for floats)
    """

    token: str
    dtype: np.dtype
    max_intensity: float

    @property
    def itemsize(self) -> int:
        return self.dtype.itemsize

    @property
    def is_float(self) -> bool:
        return self.dtype.kind == 'f'

    @property
    def color_scale(self) -> np.float32:
        """Multiplier from normalized intensity to the 0-255 byte range."""
        return np.float32(BYTE_MAX) / np.float32(self.max_intensity)


def _integer_kind(token: str) -> NumericKind:
    dtype = np.dtype(token)
    return NumericKind(token, dtype, float(np.iinfo(dtype).max))


NUMERIC_KINDS = {
    TOKEN_UINT8: _integer_kind(TOKEN_UINT8),
    TOKEN_UINT16: _integer_kind(TOKEN_UINT16),
    TOKEN_INT16: _integer_kind(TOKEN_INT16),
    TOKEN_INT32: _integer_kind(TOKEN_INT32),
    TOKEN_FLOAT: NumericKind(TOKEN_FLOAT, np.dtype(np.float32), 1.0),
}

# float64 buffers are displayed and exported through the float32 path.
# Samples are narrowed with astype(np.float32), so doubles lose precision
# and values beyond the float32 range become +/-inf.
_DISPATCH = {
    ElementKind.UINT8: NUMERIC_KINDS[TOKEN_UINT8],
    ElementKind.UINT16: NUMERIC_KINDS[TOKEN_UINT16],
    ElementKind.INT16: NUMERIC_KINDS[TOKEN_INT16],
    ElementKind.INT32: NUMERIC_KINDS[TOKEN_INT32],
    ElementKind.FLOAT32: NUMERIC_KINDS[TOKEN_FLOAT],
    ElementKind.FLOAT64: NUMERIC_KINDS[TOKEN_FLOAT],
}


def resolve_numeric_kind(element_kind) -> NumericKind:
    """
    Select the numeric representation for a whole buffer.

    Called once per export; every sample of the buffer is then handled by
    vectorized operations on the returned kind's dtype.

    Args:
        element_kind: ElementKind, kind name or numpy dtype

    Returns:
        NumericKind descriptor

    Raises:
        UnsupportedElementKind: If the kind is not supported
    """
    return _DISPATCH[ElementKind.parse(element_kind)]


def numeric_kind_for_token(token: str) -> NumericKind:
    """Look up a numeric kind by its raw matrix token."""
    try:
        return NUMERIC_KINDS[token]
    except KeyError:
        raise UnsupportedElementKind(f"Unknown matrix element token: {token!r}") from None
