"""Load pixel buffers from NumPy, DICOM, raw and raw matrix files."""

from pathlib import Path

import numpy as np

from ..buffer.pixel_buffer import PixelBuffer
from .matrix_reader import read_raw_matrix


def read_source_buffer(path: str, width: int = None, height: int = None,
                       channels: int = 1, element_kind=None,
                       row_stride: int = None) -> PixelBuffer:
    """
    Read a pixel buffer from a file.

    Args:
        path: Path to the source (.npy, .dcm, .raw or .oct; no suffix is read as DICOM)
        width: Visible width (required for .raw, optional for .npy with padded rows)
        height: Image height (required for .raw files)
        channels: Channels per pixel for .raw files (default: 1)
        element_kind: Sample type for .raw files
        row_stride: Pixels between row starts for .raw files (default: width)

    Returns:
        PixelBuffer over the loaded samples

    Raises:
        ValueError: If format is unsupported or parameters are missing
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in ('.dcm', ''):
        return PixelBuffer.from_array(_read_dicom(path))
    elif suffix == '.npy':
        return PixelBuffer.from_array(np.load(str(path)), width=width)
    elif suffix == '.oct':
        return PixelBuffer.from_array(read_raw_matrix(path).data)
    elif suffix == '.raw':
        if width is None or height is None or element_kind is None:
            raise ValueError("Width, height and element kind are required for .raw files")
        with open(path, 'rb') as f:
            data = f.read()
        return PixelBuffer(width=width, height=height, channels=channels,
                           element_kind=element_kind, raw_data=data,
                           row_stride=row_stride)
    else:
        raise ValueError(f"Unsupported file format: {suffix}")


def _read_dicom(path: Path) -> np.ndarray:
    """Read a DICOM file and return its pixel data."""
    try:
        import pydicom
    except ImportError:
        raise ImportError("pydicom is required to read DICOM files. Install with: pip install pydicom")

    ds = pydicom.dcmread(str(path))
    slope = float(getattr(ds, 'RescaleSlope', 1))
    intercept = float(getattr(ds, 'RescaleIntercept', 0))
    return rescale_pixels(ds.pixel_array, slope, intercept)


def rescale_pixels(pixel_array: np.ndarray, slope: float, intercept: float) -> np.ndarray:
    """
    Apply a DICOM modality rescale and pick the narrowest type that holds it.

    Stored values pass through untouched for the identity rescale. Integral
    results become int16 or int32 when they fit (CT Hounsfield units land in
    int16); anything else becomes float32.
    """
    if slope == 1 and intercept == 0:
        return pixel_array

    values = pixel_array * slope + intercept
    if values.size and np.all(np.isfinite(values)) and np.all(values == np.round(values)):
        for dtype in (np.int16, np.int32):
            info = np.iinfo(dtype)
            if info.min <= values.min() and values.max() <= info.max:
                return values.astype(dtype)
    return values.astype(np.float32)
