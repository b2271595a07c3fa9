"""Borrowed, bounds-checked view over a debuggee pixel buffer."""

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from ..constants import MIN_CHANNELS, MAX_CHANNELS
from ..errors import InvalidDimensions
from .element_kind import ElementKind


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Interleaved multi-channel buffer living in someone else's memory.

    The buffer is never copied or retained; the caller keeps ``raw_data``
    valid and unmodified while an export runs.

    Attributes:
        width: Pixels per row
        height: Number of rows
        channels: Interleaved samples per pixel (1-4)
        element_kind: Sample type (ElementKind or anything ElementKind.parse accepts)
        raw_data: Object exposing the buffer protocol
        row_stride: Pixels between the starts of consecutive rows
                    (defaults to width). Row y starts at element
                    y * row_stride * channels.
    """

    width: int
    height: int
    channels: int
    element_kind: ElementKind
    raw_data: Any
    row_stride: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, 'element_kind', ElementKind.parse(self.element_kind))
        if self.row_stride is None:
            object.__setattr__(self, 'row_stride', self.width)
        self._validate()

    def _validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidDimensions(
                f"Width and height must be positive, got {self.width}x{self.height}")

        if not MIN_CHANNELS <= self.channels <= MAX_CHANNELS:
            raise InvalidDimensions(
                f"Channel count must be {MIN_CHANNELS}-{MAX_CHANNELS}, got {self.channels}")

        if self.row_stride < self.width:
            raise InvalidDimensions(
                f"Row stride {self.row_stride} is shorter than width {self.width}")

        try:
            with memoryview(self.raw_data) as view:
                contiguous = view.c_contiguous
                nbytes = view.nbytes
        except TypeError:
            raise InvalidDimensions(
                f"Raw data of type {type(self.raw_data).__name__} does not expose a buffer") from None

        if not contiguous:
            raise InvalidDimensions("Raw data must be C-contiguous")

        if nbytes < self.required_bytes:
            raise InvalidDimensions(
                f"Raw data too short. Expected at least {self.required_bytes} bytes, "
                f"got {nbytes}")

    @property
    def row_elements(self) -> int:
        """Samples per row including stride padding."""
        return self.row_stride * self.channels

    @property
    def required_bytes(self) -> int:
        return self.height * self.row_elements * self.element_kind.itemsize

    def rows(self) -> np.ndarray:
        """
        Typed read-only view of the visible samples.

        Returns:
            Array of shape (height, width, channels) in the buffer's dtype.
            Stride padding is sliced away, not copied.
        """
        count = self.height * self.row_elements
        flat = np.frombuffer(self.raw_data, dtype=self.element_kind.dtype, count=count)
        flat.flags.writeable = False
        padded = flat.reshape(self.height, self.row_stride, self.channels)
        return padded[:, :self.width, :]

    def describe(self) -> str:
        """Short type label such as 'float32x3'."""
        return f"{self.element_kind.value}x{self.channels}"

    @classmethod
    def from_array(cls, array: np.ndarray, width: int = None) -> 'PixelBuffer':
        """
        Wrap a numpy array as a pixel buffer.

        Args:
            array: (height, row_stride) or (height, row_stride, channels) array
            width: Visible width when rows carry padding (default: all columns)

        Returns:
            PixelBuffer borrowing the array's memory
        """
        if array.ndim == 2:
            height, row_stride = array.shape
            channels = 1
        elif array.ndim == 3:
            height, row_stride, channels = array.shape
        else:
            raise InvalidDimensions(f"Expected 2D or 3D array, got {array.ndim}D")

        # Samples are read in native byte order
        array = np.ascontiguousarray(array.astype(array.dtype.newbyteorder('='), copy=False))

        return cls(
            width=row_stride if width is None else width,
            height=height,
            channels=channels,
            element_kind=ElementKind.parse(array.dtype),
            raw_data=array,
            row_stride=row_stride,
        )
