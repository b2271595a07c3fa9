#!/usr/bin/env python3
"""
Buffer Export CLI

Usage:
    python export.py --input <path> --output <path> [--layout bgra] [--min 0 --max 255]

Example:
    python export.py --input frame.npy --output frame.png --layout bgra
"""

import argparse
import logging
import sys
import os
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from bufexport.buffer import ContrastParameters, ElementKind
from bufexport.errors import BufferExportError
from bufexport.exporter import BufferExporter, OutputKind, OutputRequest
from bufexport.io import read_source_buffer

FORMATS = {
    'png': OutputKind.BITMAP,
    'oct': OutputKind.RAW_MATRIX,
}


def parse_channel_values(text: str) -> list:
    """Parse '0' or '0,0,0,0' into a list of floats."""
    return [float(v) for v in text.split(',')]


def main():
    parser = argparse.ArgumentParser(
        description='Buffer Exporter - Save pixel buffers as PNG or raw matrices',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export a NumPy array as PNG with automatic contrast
  python export.py --input data/frame.npy --output frame.png

  # Export with a fixed display range and BGR byte order
  python export.py --input data/frame.npy --output frame.png \\
      --min 0 --max 4095 --layout bgra

  # Export a raw float buffer with padded rows as a raw matrix
  python export.py --input dump.raw --output dump.oct --dtype float32 \\
      --width 640 --height 480 --channels 3 --stride 648
        """
    )

    # Required arguments
    parser.add_argument('--input', '-i', required=True,
                        help='Input buffer path (.npy, .dcm, .raw or .oct)')
    parser.add_argument('--output', '-o', required=True,
                        help='Output path (.png or .oct)')

    # Optional arguments
    parser.add_argument('--format', '-f', choices=sorted(FORMATS),
                        help='Output format (default: from output extension)')
    parser.add_argument('--layout', '-l', default='rgba',
                        help='Output byte order for PNG export (default: rgba)')
    parser.add_argument('--min', dest='minimum', type=parse_channel_values,
                        help='Display minimum, one value or one per channel')
    parser.add_argument('--max', dest='maximum', type=parse_channel_values,
                        help='Display maximum, one value or one per channel')
    parser.add_argument('--dtype', '-t', choices=[k.value for k in ElementKind],
                        help='Element kind (required for raw files)')
    parser.add_argument('--width', '-W', type=int,
                        help='Image width (required for raw files)')
    parser.add_argument('--height', '-H', type=int,
                        help='Image height (required for raw files)')
    parser.add_argument('--channels', '-c', type=int, default=1,
                        help='Channels per pixel for raw files (default: 1)')
    parser.add_argument('--stride', '-s', type=int,
                        help='Pixels between row starts for raw files (default: width)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    # Check input file exists
    if not os.path.exists(args.input):
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    if (args.minimum is None) != (args.maximum is None):
        print("Error: --min and --max must be given together", file=sys.stderr)
        sys.exit(1)

    try:
        start_time = time.time()

        buffer = read_source_buffer(args.input, width=args.width, height=args.height,
                                    channels=args.channels, element_kind=args.dtype,
                                    row_stride=args.stride)

        if args.verbose:
            print(f"Read input: {args.input}")
            print(f"  Type: {buffer.describe()}")
            print(f"  Size: {buffer.width}x{buffer.height} (stride {buffer.row_stride})")

        kind = FORMATS[args.format] if args.format else None
        request = OutputRequest.for_path(args.output, kind)

        contrast = None
        if args.minimum is not None:
            contrast = ContrastParameters(args.minimum, args.maximum)

        BufferExporter().export(buffer, request, contrast=contrast, layout=args.layout)

        elapsed = time.time() - start_time

        if args.verbose:
            print(f"\nOutput kind: {request.kind.value}")
            print(f"Output size: {os.path.getsize(request.path):,} bytes")
            print(f"Export time: {elapsed:.2f}s")
            print(f"\nOutput written to: {request.path}")
        else:
            print(f"Exported: {args.input} -> {request.path} "
                  f"({buffer.describe()}, {buffer.width}x{buffer.height})")

    except (BufferExportError, ValueError) as e:
        print(f"Error: Export failed - {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
