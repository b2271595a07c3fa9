"""Per-channel contrast/brightness parameters."""

from dataclasses import dataclass
from typing import NamedTuple, Sequence, Tuple

import numpy as np

from ..constants import RGBA_CHANNELS
from ..errors import InvalidContrast
from .element_kind import NumericKind, resolve_numeric_kind


class AffineCoefficients(NamedTuple):
    """
    Per-channel affine transform applied before scaling to bytes.

    A sample v of channel c becomes ``v * scale[c] + bias[c] * max_intensity``.
    Both arrays are float32 with four entries (R, G, B, A).
    """

    scale: np.ndarray
    bias: np.ndarray

    @classmethod
    def from_packed(cls, values: Sequence[float]) -> 'AffineCoefficients':
        """
        Build coefficients from the viewer's packed array.

        Args:
            values: [scale_r, scale_g, scale_b, scale_a, bias_r, bias_g, bias_b, bias_a]
        """
        packed = np.asarray(values, dtype=np.float32).ravel()
        if packed.size != 2 * RGBA_CHANNELS:
            raise InvalidContrast(f"Expected {2 * RGBA_CHANNELS} coefficients, got {packed.size}")
        return cls(packed[:RGBA_CHANNELS].copy(), packed[RGBA_CHANNELS:].copy())

    @classmethod
    def identity(cls) -> 'AffineCoefficients':
        return cls(np.ones(RGBA_CHANNELS, dtype=np.float32),
                   np.zeros(RGBA_CHANNELS, dtype=np.float32))

    def packed(self) -> list:
        return [float(v) for v in self.scale] + [float(v) for v in self.bias]


def _four_channels(values, name: str) -> Tuple[float, ...]:
    values = [float(v) for v in np.atleast_1d(np.asarray(values, dtype=np.float64))]
    if not 1 <= len(values) <= RGBA_CHANNELS:
        raise InvalidContrast(f"{name} needs 1-{RGBA_CHANNELS} values, got {len(values)}")
    # Missing channels repeat the last given value
    values += [values[-1]] * (RGBA_CHANNELS - len(values))
    return tuple(values)


@dataclass(frozen=True)
class ContrastParameters:
    """
    Display range per channel, in raw sample units.

    A sample equal to ``minimum[c]`` maps to 0 and one equal to
    ``maximum[c]`` maps to full intensity. Sequences shorter than four
    entries are extended with their last value.
    """

    minimum: Tuple[float, float, float, float]
    maximum: Tuple[float, float, float, float]

    def __post_init__(self):
        object.__setattr__(self, 'minimum', _four_channels(self.minimum, 'minimum'))
        object.__setattr__(self, 'maximum', _four_channels(self.maximum, 'maximum'))

    def coefficients(self, kind: NumericKind) -> AffineCoefficients:
        """
        Derive scale and bias for a numeric kind.

        A channel whose minimum equals its maximum gets scale = bias = 0,
        so it renders as a constant 0 instead of dividing by zero.
        """
        minimum = np.asarray(self.minimum, dtype=np.float64)
        maximum = np.asarray(self.maximum, dtype=np.float64)

        span = maximum - minimum
        degenerate = span == 0
        span = np.where(degenerate, 1.0, span)

        scale = np.where(degenerate, 0.0, kind.max_intensity / span)
        bias = np.where(degenerate, 0.0, -minimum / span)

        return AffineCoefficients(scale.astype(np.float32), bias.astype(np.float32))

    @classmethod
    def full_range(cls, kind: NumericKind) -> 'ContrastParameters':
        """Map [0, max_intensity] of the kind onto [0, 255]."""
        return cls((0.0,), (kind.max_intensity,))

    @classmethod
    def from_buffer(cls, buffer) -> 'ContrastParameters':
        """
        Auto-contrast: use the observed range of each channel.

        Non-finite float samples are ignored. Channels without any finite
        sample, and channels the buffer does not have, fall back to the
        kind's full range.
        """
        kind = resolve_numeric_kind(buffer.element_kind)
        samples = buffer.rows().astype(kind.dtype, copy=False)

        minimum = [0.0] * RGBA_CHANNELS
        maximum = [kind.max_intensity] * RGBA_CHANNELS

        for c in range(buffer.channels):
            values = samples[..., c]
            if kind.is_float:
                values = values[np.isfinite(values)]
            if values.size:
                minimum[c] = float(values.min())
                maximum[c] = float(values.max())

        return cls(tuple(minimum), tuple(maximum))
