import struct
from io import BytesIO

import pytest
from PIL import Image


def row_stride(width, bit_count):
    return ((width * bit_count + 31) // 32) * 4


def build_bmp(width=2, height=2, bit_count=24, size=None, header_size=40,
              pixel_bytes=None, pad=0):
    """Build a bitmap by hand: file header, 40-byte info header, pixel rows."""
    if pixel_bytes is None:
        pixel_bytes = row_stride(width, bit_count) * abs(height)
    pixels = bytes((i * 37) & 0xFF for i in range(pixel_bytes))
    if size is None:
        size = 54 + pixel_bytes + pad

    file_header = struct.pack('<2sIHHI', b'BM', size, 0, 0, 54)
    info_header = struct.pack(
        '<IiiHHIIiiII',
        header_size, width, height, 1, bit_count, 0, pixel_bytes, 2835, 2835, 0, 0,
    )
    return file_header + info_header + pixels + b'\x00' * pad


@pytest.fixture
def bmp_2x2():
    """A well-formed 2x2 24-bit bitmap (70 bytes)."""
    return build_bmp()


@pytest.fixture
def pillow_bmp():
    """A bitmap written by Pillow, for checking against a real encoder."""
    buffer = BytesIO()
    Image.new("RGB", (5, 3), color=(20, 100, 180)).save(buffer, format="BMP")
    return buffer.getvalue()


@pytest.fixture
def lib_file(tmp_path, bmp_2x2):
    """An archive holding two bitmaps separated by filler."""
    data = b'\x00' * 32 + bmp_2x2 + b'\xff' * 17 + build_bmp(3, 3)
    path = tmp_path / "textures.lib"
    path.write_bytes(data)
    return path
