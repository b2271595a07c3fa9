"""Pixel buffer views, pixel layouts and contrast parameters."""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest
from bufexport.buffer import (
    PixelBuffer, PixelLayout, ContrastParameters, AffineCoefficients,
    ElementKind, NUMERIC_KINDS
)
from bufexport.errors import (
    BufferExportError, InvalidContrast, InvalidDimensions, MalformedPixelLayout,
    UnsupportedElementKind
)


def test_strided_view():
    """rows() skips stride padding without copying."""
    print("=" * 60)
    print("Test 1: Strided View")
    print("=" * 60)

    # 3 wide, 2 channels, stride 4 pixels -> 2 padding samples per row
    padded = np.arange(2 * 4 * 2, dtype=np.int16).reshape(2, 4, 2)
    buffer = PixelBuffer(width=3, height=2, channels=2, element_kind='int16',
                         raw_data=padded.tobytes(), row_stride=4)

    rows = buffer.rows()
    assert rows.shape == (2, 3, 2)
    assert np.array_equal(rows, padded[:, :3, :])
    assert not rows.flags.writeable
    print(f"   ✓ View shape {rows.shape}, padding excluded")

    assert buffer.row_elements == 8
    assert buffer.required_bytes == 2 * 8 * 2
    assert buffer.describe() == 'int16x2'
    print(f"   ✓ Label: {buffer.describe()}")


def test_from_array():
    """numpy arrays are wrapped with their dtype and shape."""
    print("\n" + "=" * 60)
    print("Test 2: From Array")
    print("=" * 60)

    gray = np.zeros((4, 5), dtype=np.uint16)
    buffer = PixelBuffer.from_array(gray)
    assert (buffer.width, buffer.height, buffer.channels) == (5, 4, 1)
    assert buffer.element_kind is ElementKind.UINT16

    rgb = np.zeros((2, 6, 3), dtype=np.float64)
    buffer = PixelBuffer.from_array(rgb, width=4)
    assert (buffer.width, buffer.row_stride, buffer.channels) == (4, 6, 3)
    assert buffer.element_kind is ElementKind.FLOAT64

    big_endian = np.array([[1, 256]], dtype='>u2')
    buffer = PixelBuffer.from_array(big_endian)
    assert buffer.rows()[0, :, 0].tolist() == [1, 256]
    print("   ✓ Shapes, padding width and byte order handled")

    with pytest.raises(UnsupportedElementKind):
        PixelBuffer.from_array(np.zeros((2, 2), dtype=np.int8))


def test_invalid_geometry():
    """Bad geometry is rejected before any pixel work."""
    print("\n" + "=" * 60)
    print("Test 3: Invalid Geometry")
    print("=" * 60)

    data = bytes(64)
    cases = [
        dict(width=0, height=2, channels=1),
        dict(width=2, height=-1, channels=1),
        dict(width=2, height=2, channels=0),
        dict(width=2, height=2, channels=5),
        dict(width=4, height=2, channels=1, row_stride=3),
        dict(width=8, height=8, channels=4),
    ]
    for geometry in cases:
        with pytest.raises(InvalidDimensions):
            PixelBuffer(element_kind='uint8', raw_data=data, **geometry)
        print(f"   ✓ Rejected {geometry}")

    with pytest.raises(InvalidDimensions):
        PixelBuffer(width=1, height=1, channels=1, element_kind='uint8', raw_data=[1, 2])

    with pytest.raises(InvalidDimensions):
        PixelBuffer.from_array(np.zeros((2, 2, 2, 2), dtype=np.uint8))

    with pytest.raises(UnsupportedElementKind):
        PixelBuffer(width=1, height=1, channels=1, element_kind='int64', raw_data=data)


def test_pixel_layout():
    """Layouts must be a permutation of rgba."""
    print("\n" + "=" * 60)
    print("Test 4: Pixel Layout")
    print("=" * 60)

    assert PixelLayout.parse('rgba').sources == (0, 1, 2, 3)
    assert PixelLayout.parse('bgra').sources == (2, 1, 0, 3)
    assert PixelLayout.parse('ARGB').sources == (3, 0, 1, 2)
    assert PixelLayout.parse(b'abgr').sources == (3, 2, 1, 0)
    assert str(PixelLayout.parse('BGRA')) == 'bgra'
    assert PixelLayout.default() == PixelLayout.parse('rgba')
    print("   ✓ Valid layouts parsed")

    for bad in ['rgb', 'rgbaa', 'rgbb', 'rgbx', '', 'rrrr', 42]:
        with pytest.raises(MalformedPixelLayout):
            PixelLayout.parse(bad)
        print(f"   ✓ {bad!r} rejected")

    with pytest.raises(MalformedPixelLayout):
        PixelLayout((0, 0, 1, 2))


def test_contrast_coefficients():
    """min maps to 0 and max maps to full intensity."""
    print("\n" + "=" * 60)
    print("Test 5: Contrast Coefficients")
    print("=" * 60)

    uint8 = NUMERIC_KINDS['uint8']
    identity = ContrastParameters((0,), (255,)).coefficients(uint8)
    assert np.allclose(identity.scale, 1.0)
    assert np.allclose(identity.bias, 0.0)
    print("   ✓ Full uint8 range gives scale=1, bias=0")

    uint16 = NUMERIC_KINDS['uint16']
    params = ContrastParameters((1000, 0, 0, 0), (2000, 65535, 65535, 65535))
    coeffs = params.coefficients(uint16)
    for value, expected in [(1000, 0.0), (2000, 65535.0)]:
        mapped = value * coeffs.scale[0] + coeffs.bias[0] * uint16.max_intensity
        assert abs(mapped - expected) < 0.05, f"{value} mapped to {mapped}"
    print("   ✓ [1000, 2000] maps onto [0, 65535]")

    degenerate = ContrastParameters((5, 0, 0, 0), (5, 1, 1, 1)).coefficients(NUMERIC_KINDS['float'])
    assert degenerate.scale[0] == 0 and degenerate.bias[0] == 0
    assert np.all(np.isfinite(degenerate.scale)) and np.all(np.isfinite(degenerate.bias))
    print("   ✓ Degenerate range yields zero coefficients")

    padded = ContrastParameters((0, 10), (1, 20))
    assert padded.minimum == (0.0, 10.0, 10.0, 10.0)
    assert padded.maximum == (1.0, 20.0, 20.0, 20.0)

    with pytest.raises(InvalidContrast) as excinfo:
        ContrastParameters((0,) * 5, (1,) * 5)
    assert isinstance(excinfo.value, BufferExportError)
    with pytest.raises(InvalidContrast):
        ContrastParameters((), ())


def test_packed_coefficients():
    """The viewer's packed 8-float array round-trips."""
    print("\n" + "=" * 60)
    print("Test 6: Packed Coefficients")
    print("=" * 60)

    packed = [1.0, 2.0, 0.5, 1.0, 0.0, -0.25, 0.5, 0.0]
    coeffs = AffineCoefficients.from_packed(packed)
    assert coeffs.scale.dtype == np.float32
    assert coeffs.packed() == packed
    assert AffineCoefficients.identity().packed() == [1.0] * 4 + [0.0] * 4
    print("   ✓ Packed coefficients round-trip")

    with pytest.raises(InvalidContrast):
        AffineCoefficients.from_packed([1.0] * 7)
    with pytest.raises(InvalidContrast):
        AffineCoefficients.from_packed([1.0] * 9)
    print("   ✓ Wrong-length arrays raise InvalidContrast")


def test_auto_contrast():
    """from_buffer uses each channel's observed range."""
    print("\n" + "=" * 60)
    print("Test 7: Auto Contrast")
    print("=" * 60)

    data = np.array([[[10, 100], [20, 300]]], dtype=np.uint16)
    params = ContrastParameters.from_buffer(PixelBuffer.from_array(data))
    assert params.minimum[:2] == (10.0, 100.0)
    assert params.maximum[:2] == (20.0, 300.0)
    assert params.minimum[2:] == (0.0, 0.0)
    assert params.maximum[2:] == (65535.0, 65535.0)
    print(f"   ✓ Range: min={params.minimum}, max={params.maximum}")

    floats = np.array([[np.nan, 0.5, np.inf, -1.5]], dtype=np.float32)
    params = ContrastParameters.from_buffer(PixelBuffer.from_array(floats))
    assert params.minimum[0] == -1.5 and params.maximum[0] == 0.5
    print("   ✓ Non-finite samples ignored")

    all_nan = np.full((2, 2), np.nan, dtype=np.float64)
    params = ContrastParameters.from_buffer(PixelBuffer.from_array(all_nan))
    assert params.minimum[0] == 0.0 and params.maximum[0] == 1.0


def main():
    """Run all buffer tests."""
    tests = [
        ("Strided View", test_strided_view),
        ("From Array", test_from_array),
        ("Invalid Geometry", test_invalid_geometry),
        ("Pixel Layout", test_pixel_layout),
        ("Contrast Coefficients", test_contrast_coefficients),
        ("Packed Coefficients", test_packed_coefficients),
        ("Auto Contrast", test_auto_contrast),
    ]

    for _, test in tests:
        test()

    print("\n" + "=" * 60)
    print("BUFFER SUMMARY")
    print("=" * 60)
    for name, _ in tests:
        print(f"   {name}: ✅ PASS")
    print("=" * 60 + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
