#!/usr/bin/env python3
"""
Raw Matrix Loader CLI

Usage:
    python load_matrix.py --input <path> [--output <path>]

Example:
    python load_matrix.py --input dump.oct --output dump.npy
"""

import argparse
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import numpy as np
from bufexport.io import read_raw_matrix


def main():
    parser = argparse.ArgumentParser(
        description='Raw Matrix Loader - Inspect raw matrices and convert them to NumPy',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the header of a raw matrix
  python load_matrix.py --input dump.oct

  # Convert to NumPy format
  python load_matrix.py --input dump.oct --output dump.npy
        """
    )

    parser.add_argument('--input', '-i', required=True,
                        help='Input raw matrix path (.oct)')
    parser.add_argument('--output', '-o',
                        help='Output NumPy path (.npy)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')

    args = parser.parse_args()

    # Check input file exists
    if not os.path.exists(args.input):
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    try:
        matrix = read_raw_matrix(args.input)
        height, width, channels = matrix.data.shape

        print(f"{args.input}: {matrix.kind.token} {height}x{width}x{channels}")

        if args.verbose:
            print(f"  Range: [{matrix.data.min()}, {matrix.data.max()}]")

        if args.output:
            data = matrix.data[..., 0] if channels == 1 else matrix.data
            np.save(args.output, data)
            print(f"Output written to: {args.output}")

    except ValueError as e:
        print(f"Error: Invalid raw matrix - {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
