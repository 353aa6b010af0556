"""
Bitmap header decoding and candidate validation.

Each header field is decoded at its fixed byte offset with ``struct``
(little-endian, no padding). Validation returns an explicit ``Candidate``
or ``Rejected`` value; nothing in here raises for malformed input.
"""

import logging
import struct
from dataclasses import dataclass

from .constants import (
    BITMAP_MARKER, FILE_HEADER_SIZE, FILE_HEADER_FORMAT,
    INFO_HEADER_SIZE, INFO_HEADER_FORMAT, MIN_CANDIDATE_BYTES,
    MAX_DIMENSION
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileHeader:
    """BITMAPFILEHEADER (14 bytes)."""

    signature: bytes
    size: int
    reserved1: int
    reserved2: int
    pixel_offset: int

    @classmethod
    def unpack(cls, data):
        return cls(*struct.unpack(FILE_HEADER_FORMAT, data[:FILE_HEADER_SIZE]))


@dataclass(frozen=True)
class InfoHeader:
    """BITMAPINFOHEADER (40 bytes)."""

    header_size: int
    width: int
    height: int
    planes: int
    bit_count: int
    compression: int
    image_size: int
    x_pels_per_meter: int
    y_pels_per_meter: int
    colors_used: int
    colors_important: int

    @classmethod
    def unpack(cls, data):
        return cls(*struct.unpack(INFO_HEADER_FORMAT, data[:INFO_HEADER_SIZE]))

    @property
    def abs_height(self):
        return abs(self.height)

    @property
    def top_down(self):
        """Negative height means rows are stored top to bottom."""
        return self.height < 0


@dataclass(frozen=True)
class Candidate:
    """A marker occurrence whose headers passed validation."""

    offset: int
    file_header: FileHeader
    info_header: InfoHeader

    @property
    def end(self):
        return self.offset + self.file_header.size


@dataclass(frozen=True)
class Rejected:
    """A marker occurrence that is not a plausible bitmap."""

    offset: int
    reason: str


def check_plausibility(file_header, info_header, remaining):
    """
    Apply the dimension and size heuristics to decoded headers.

    Parameters
    ----------
    file_header : FileHeader
        Decoded file header.
    info_header : InfoHeader
        Decoded 40-byte info header.
    remaining : int
        Bytes available from the marker offset to the end of the source.

    Returns
    -------
    str or None
        Reason for rejection, or None when the headers look like a bitmap.
    """
    if info_header.width <= 0 or info_header.width > MAX_DIMENSION:
        return f"implausible width {info_header.width}"

    if info_header.abs_height == 0 or info_header.abs_height > MAX_DIMENSION:
        return f"implausible height {info_header.height}"

    if file_header.size > remaining:
        return f"declared size {file_header.size} exceeds remaining {remaining} bytes"

    # A zero-length segment would never advance the scan cursor
    if file_header.size == 0:
        return "declared size is zero"

    return None


def validate_candidate(source, offset):
    """
    Try to parse a bitmap file header and info header at ``offset``.

    Parameters
    ----------
    source : ByteSource
        Source being scanned.
    offset : int
        Offset of a ``BM`` marker.

    Returns
    -------
    Candidate or Rejected
        ``Candidate`` with both decoded headers, or ``Rejected`` with a
        diagnostic reason. Read faults are reported as rejections.
    """
    remaining = source.length - offset
    if remaining < MIN_CANDIDATE_BYTES:
        return Rejected(offset, f"only {remaining} bytes remain")

    try:
        head = source.read_at(offset, FILE_HEADER_SIZE + INFO_HEADER_SIZE)
        if len(head) < MIN_CANDIDATE_BYTES:
            return Rejected(offset, "short read of file header")

        file_header = FileHeader.unpack(head)
        if file_header.signature != BITMAP_MARKER:
            return Rejected(offset, "signature mismatch")

        header_size = struct.unpack_from('<I', head, FILE_HEADER_SIZE)[0]
        if header_size != INFO_HEADER_SIZE:
            return Rejected(offset, f"unsupported info header size {header_size}")

        if len(head) < FILE_HEADER_SIZE + INFO_HEADER_SIZE:
            return Rejected(offset, "short read of info header")

        info_header = InfoHeader.unpack(head[FILE_HEADER_SIZE:])
    except (struct.error, OSError) as e:
        LOGGER.debug("Read fault while validating offset %d: %s", offset, e)
        return Rejected(offset, f"read fault: {e}")

    reason = check_plausibility(file_header, info_header, remaining)
    if reason:
        return Rejected(offset, reason)

    return Candidate(offset, file_header, info_header)
