"""
Random-access, read-only byte sources for the scanner.

A source is either an in-memory buffer or a seekable binary file. The
scanner only ever calls ``length`` and ``read_at``.
"""

import os

from .errors import SourceUnavailable


class ByteSource:
    """
    Immutable, finite, randomly-seekable sequence of bytes.

    Parameters
    ----------
    data : bytes, bytearray or memoryview, optional
        In-memory buffer to scan.
    fileobj : file object, optional
        Seekable binary file opened for reading. Used when ``data`` is None.
    name : str, optional
        Label used in log messages.
    """

    def __init__(self, data=None, fileobj=None, name=None):
        if data is None and fileobj is None:
            raise ValueError("ByteSource needs either data or a file object")

        self.name = name or '<memory>'
        self._fileobj = None
        self._buffer = None

        if data is not None:
            self._buffer = bytes(data)
            self.length = len(self._buffer)
        else:
            self._fileobj = fileobj
            self.length = os.fstat(fileobj.fileno()).st_size

    @classmethod
    def open(cls, path):
        """
        Open a file read-only as a byte source.

        Raises
        ------
        SourceUnavailable
            If the file does not exist or cannot be opened or sized.
        """
        if not os.path.isfile(path):
            raise SourceUnavailable(path, "file not found")

        try:
            fileobj = open(path, 'rb')
        except OSError as e:
            raise SourceUnavailable(path, e.strerror or str(e)) from e

        try:
            return cls(fileobj=fileobj, name=str(path))
        except OSError as e:
            fileobj.close()
            raise SourceUnavailable(path, e.strerror or str(e)) from e

    def read_at(self, offset, size):
        """
        Read up to ``size`` bytes starting at ``offset``.

        Returns fewer bytes than requested near the end of the source or
        when the underlying file comes up short.
        """
        if offset < 0 or size <= 0 or offset >= self.length:
            return b''

        if self._buffer is not None:
            return self._buffer[offset:offset + size]

        self._fileobj.seek(offset)
        return self._fileobj.read(size)

    @property
    def closed(self):
        return self._buffer is None and self._fileobj is None

    def close(self):
        """Close the underlying file, if any."""
        if self._fileobj is not None:
            self._fileobj.close()
            self._fileobj = None

    def __len__(self):
        return self.length

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self):
        return f"ByteSource(name={self.name!r}, length={self.length})"
