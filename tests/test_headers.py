import struct

import pytest

from bitmap_extraction.core import ByteSource, Candidate, FileHeader, InfoHeader, Rejected
from bitmap_extraction.core.headers import validate_candidate

from conftest import build_bmp


def _validate(data, offset=0):
    return validate_candidate(ByteSource(data=data), offset)


def test_file_header_fields_little_endian():
    header = FileHeader.unpack(struct.pack('<2sIHHI', b'BM', 0x01020304, 7, 9, 54))
    assert header.signature == b'BM'
    assert header.size == 0x01020304
    assert header.reserved1 == 7
    assert header.reserved2 == 9
    assert header.pixel_offset == 54


def test_info_header_signed_height():
    data = struct.pack('<IiiHHIIiiII', 40, 16, -8, 1, 32, 0, 512, -1, 2835, 4, 2)
    header = InfoHeader.unpack(data)
    assert header.width == 16
    assert header.height == -8
    assert header.abs_height == 8
    assert header.top_down
    assert header.bit_count == 32
    assert header.x_pels_per_meter == -1
    assert header.colors_used == 4
    assert header.colors_important == 2


def test_well_formed_bitmap_is_candidate(bmp_2x2):
    result = _validate(bmp_2x2)
    assert isinstance(result, Candidate)
    assert result.offset == 0
    assert result.end == len(bmp_2x2)
    assert result.info_header.width == 2
    assert result.info_header.height == 2


def test_candidate_at_inner_offset(bmp_2x2):
    data = b'\x00' * 9 + bmp_2x2
    result = _validate(data, 9)
    assert isinstance(result, Candidate)
    assert result.end == len(data)


@pytest.mark.parametrize("length", [0, 2, 10, 17])
def test_fewer_than_18_bytes_rejected(bmp_2x2, length):
    assert isinstance(_validate(bmp_2x2[:length]), Rejected)


def test_truncated_info_header_rejected(bmp_2x2):
    result = _validate(bmp_2x2[:30])
    assert isinstance(result, Rejected)


@pytest.mark.parametrize("header_size", [12, 52, 56, 108, 124])
def test_other_info_header_variants_rejected(header_size):
    result = _validate(build_bmp(header_size=header_size))
    assert isinstance(result, Rejected)
    assert "info header size" in result.reason


@pytest.mark.parametrize("width", [0, -1, 4001])
def test_implausible_width_rejected(width):
    data = build_bmp(width=width, height=1, pixel_bytes=16)
    assert isinstance(_validate(data), Rejected)


@pytest.mark.parametrize("height", [0, 4001, -4001])
def test_implausible_height_rejected(height):
    data = build_bmp(width=1, height=height, pixel_bytes=16)
    assert isinstance(_validate(data), Rejected)


def test_width_4000_accepted():
    assert isinstance(_validate(build_bmp(width=4000, height=1)), Candidate)


@pytest.mark.parametrize("height", [4000, -4000])
def test_height_4000_accepted(height):
    assert isinstance(_validate(build_bmp(width=1, height=height)), Candidate)


def test_segment_ending_at_source_end_accepted(bmp_2x2):
    result = _validate(bmp_2x2)
    assert isinstance(result, Candidate)
    assert result.end == len(bmp_2x2)


def test_segment_one_byte_past_source_end_rejected():
    data = build_bmp(size=71)
    assert len(data) == 70
    result = _validate(data)
    assert isinstance(result, Rejected)
    assert "exceeds remaining" in result.reason


def test_zero_size_segment_rejected():
    result = _validate(build_bmp(size=0))
    assert isinstance(result, Rejected)
    assert "zero" in result.reason


@pytest.mark.parametrize("size", [1, 40, 53, 54])
def test_small_declared_sizes_accepted(size):
    result = _validate(build_bmp(size=size))
    assert isinstance(result, Candidate)
    assert result.end == size


def test_read_fault_is_rejection(bmp_2x2):
    class BrokenSource(ByteSource):
        def read_at(self, offset, size):
            raise OSError("device went away")

    result = validate_candidate(BrokenSource(data=bmp_2x2), 0)
    assert isinstance(result, Rejected)
    assert "read fault" in result.reason
