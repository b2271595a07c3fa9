"""Error types raised by the buffer exporter."""


class BufferExportError(Exception):
    """Base class for all export failures."""


class InvalidDimensions(BufferExportError, ValueError):
    """Buffer geometry is unusable (size, channel count, stride or data length)."""


class UnsupportedElementKind(BufferExportError, ValueError):
    """The element kind is not one of the supported numeric representations."""


class MalformedPixelLayout(BufferExportError, ValueError):
    """The pixel layout is not a permutation of 'rgba'."""


class DestinationUnwritable(BufferExportError, OSError):
    """The output path could not be created, written or moved into place."""


class EncodingFailure(BufferExportError):
    """The image encoder rejected the assembled pixel plane."""


class InvalidContrast(BufferExportError, ValueError):
    """Contrast parameters or packed coefficients have the wrong shape."""
