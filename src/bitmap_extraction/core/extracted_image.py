"""
ExtractedImage record for bitmaps carved out of a byte source.
"""

import os

from .constants import OUTPUT_FILENAME


class ExtractedImage:
    """
    A validated bitmap segment copied out of its source.

    The record owns its bytes; the scanner keeps no reference to it once
    it has been yielded.
    """

    __slots__ = ('index', 'offset', 'width', 'height', 'bit_depth',
                 'declared_size', 'verified', 'top_down', 'data')

    def __init__(self, index, offset, width, height, bit_depth, declared_size,
                 data, verified=False, top_down=False):
        """
        Initialize ExtractedImage object.

        Parameters
        ----------
        index : int
            Zero-based sequence number within the scan.
        offset : int
            Offset of the ``BM`` marker in the source.
        width : int
            Image width in pixels.
        height : int
            Absolute image height in pixels.
        bit_depth : int
            Bits per pixel from the info header.
        declared_size : int
            Segment size declared by the file header.
        data : bytes
            The segment bytes ``[offset, offset + declared_size)``.
        verified : bool, optional
            Whether the decode verifier accepted the bytes.
        top_down : bool, optional
            Whether the stored height was negative.
        """
        self.index = index
        self.offset = offset
        self.width = width
        self.height = height
        self.bit_depth = bit_depth
        self.declared_size = declared_size
        self.data = data
        self.verified = verified
        self.top_down = top_down

    @property
    def end(self):
        return self.offset + self.declared_size

    @property
    def filename(self):
        return OUTPUT_FILENAME.format(index=self.index)

    def save(self, directory):
        """
        Write the segment to ``directory`` under its canonical name.

        Returns
        -------
        str
            Path of the written file.
        """
        path = os.path.join(directory, self.filename)
        with open(path, 'wb') as fh:
            fh.write(self.data)
        return path

    def as_tuple(self):
        """(index, offset, width, height, bit_depth, declared_size, verified, data)"""
        return (self.index, self.offset, self.width, self.height, self.bit_depth,
                self.declared_size, self.verified, self.data)

    def __eq__(self, other):
        if not isinstance(other, ExtractedImage):
            return NotImplemented
        return self.as_tuple() == other.as_tuple() and self.top_down == other.top_down

    def __hash__(self):
        return hash((self.index, self.offset, self.declared_size))

    def __repr__(self):
        return (f"ExtractedImage(index={self.index}, offset={self.offset}, "
                f"size=({self.width}x{self.height}), bit_depth={self.bit_depth}, "
                f"declared_size={self.declared_size}, verified={self.verified})")
