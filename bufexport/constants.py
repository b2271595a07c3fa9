"""Constants for the buffer exporter."""

import struct

# Raw matrix header (native byte order, 12 bytes total)
# i: Height (4B), i: Width (4B), i: Channels (4B)
# Preceded by the ASCII element kind token and a newline.
MATRIX_HEADER_FORMAT = '=iii'
MATRIX_HEADER_SIZE = struct.calcsize(MATRIX_HEADER_FORMAT)  # 12 bytes
MATRIX_TOKEN_TERMINATOR = b'\n'

# Element kind tokens written at the top of a raw matrix file
TOKEN_UINT8 = 'uint8'
TOKEN_UINT16 = 'uint16'
TOKEN_INT16 = 'int16'
TOKEN_INT32 = 'int32'
TOKEN_FLOAT = 'float'

# Channel bounds
MIN_CHANNELS = 1
MAX_CHANNELS = 4
RGBA_CHANNELS = 4

# Computed bytes for channels the source buffer does not provide (R, G, B, A)
DEFAULT_CHANNEL_VALUES = (0, 0, 0, 255)

# Pixel layout letters, indexed by semantic channel
LAYOUT_LETTERS = 'rgba'
DEFAULT_PIXEL_LAYOUT = 'rgba'

# 8-bit output range
BYTE_MAX = 255

# File extensions understood by the exporter
BITMAP_EXTENSION = '.png'
MATRIX_EXTENSION = '.oct'
