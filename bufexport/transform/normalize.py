"""Contrast normalization and channel remapping to an RGBA8 plane."""

import numpy as np

from ..constants import BYTE_MAX, DEFAULT_CHANNEL_VALUES, RGBA_CHANNELS
from ..buffer.element_kind import NumericKind
from ..buffer.contrast import AffineCoefficients
from ..buffer.pixel_layout import PixelLayout


def compute_channel_bytes(samples: np.ndarray, kind: NumericKind,
                          coefficients: AffineCoefficients) -> np.ndarray:
    """
    Apply the per-channel affine transform and quantize to bytes.

    For each channel c:
        normalized = v * scale[c] + bias[c] * max_intensity
        byte = trunc(clip(normalized * color_scale, 0, 255))

    Arithmetic is float32 throughout. NaN results become 0.

    Args:
        samples: (height, width, channels) array of raw samples
        kind: Numeric kind the buffer was dispatched to
        coefficients: Affine coefficients for four channels

    Returns:
        (height, width, channels) uint8 array
    """
    channels = samples.shape[-1]
    scale = np.asarray(coefficients.scale, dtype=np.float32)[:channels]
    bias = np.asarray(coefficients.bias, dtype=np.float32)[:channels]

    with np.errstate(over='ignore', invalid='ignore'):
        offset = bias * np.float32(kind.max_intensity)
        values = samples.astype(np.float32)
        normalized = values * scale + offset
        scaled = normalized * kind.color_scale
        scaled = np.nan_to_num(scaled, nan=0.0, posinf=BYTE_MAX, neginf=0.0)

    return np.clip(scaled, 0, BYTE_MAX).astype(np.uint8)


def expand_to_rgba(channel_bytes: np.ndarray) -> np.ndarray:
    """
    Fill a (height, width, channels) byte array out to four channels.

    A single channel is broadcast to R, G and B. Any channel still missing
    takes its default: 0 for R/G/B, 255 for A.

    Returns:
        (height, width, 4) uint8 array in semantic R, G, B, A order
    """
    height, width, channels = channel_bytes.shape

    rgba = np.empty((height, width, RGBA_CHANNELS), dtype=np.uint8)
    rgba[...] = np.asarray(DEFAULT_CHANNEL_VALUES, dtype=np.uint8)
    rgba[..., :channels] = channel_bytes

    # Grayscale
    if channels == 1:
        rgba[..., 1] = channel_bytes[..., 0]
        rgba[..., 2] = channel_bytes[..., 0]

    return rgba


def apply_layout(rgba: np.ndarray, layout: PixelLayout) -> np.ndarray:
    """Reorder semantic RGBA bytes so output byte i holds channel layout.sources[i]."""
    return np.ascontiguousarray(rgba[..., list(layout.sources)])


def build_rgba_plane(samples: np.ndarray, kind: NumericKind,
                     coefficients: AffineCoefficients,
                     layout: PixelLayout) -> np.ndarray:
    """
    Run the full bitmap transform on a buffer's visible samples.

    Args:
        samples: (height, width, channels) view from PixelBuffer.rows()
        kind: Numeric kind selected by resolve_numeric_kind
        coefficients: Affine coefficients
        layout: Output byte order

    Returns:
        C-contiguous (height, width, 4) uint8 plane with no row padding
    """
    channel_bytes = compute_channel_bytes(samples, kind, coefficients)
    rgba = expand_to_rgba(channel_bytes)
    return apply_layout(rgba, layout)
