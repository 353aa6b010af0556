"""
Main embedded bitmap extraction module.

This module provides the BitmapExtractor class, which walks a byte source
looking for ``BM`` markers, validates the headers that follow each marker
and copies every plausible bitmap segment out as an ExtractedImage.

The scan is a single cursor over ``[0, length - 2)``:

- no marker at the cursor: advance one byte;
- marker rejected by the header validator: advance one byte;
- segment read comes up short: advance one byte;
- segment extracted: emit it and jump to the end of the segment.
"""

import logging
from dataclasses import dataclass

from .byte_source import ByteSource
from .constants import BITMAP_MARKER
from .extracted_image import ExtractedImage
from .headers import Rejected, validate_candidate
from .verification import DEFAULT_VERIFIER

LOGGER = logging.getLogger(__name__)

# Read size used by the signature scanner
SCAN_CHUNK_SIZE = 64 * 1024


def iter_markers(source, start=0):
    """
    Yield offsets of ``BM`` markers from ``start`` onwards.

    Every position in ``[start, length - 2)`` is checked, left to right.
    Each call starts a fresh pass, so the scan loop can restart it from
    any cursor position.

    Parameters
    ----------
    source : ByteSource
        Source being scanned.
    start : int, optional
        First offset to examine.

    Yields
    ------
    int
        Offset of each marker occurrence.
    """
    limit = source.length - 2
    pos = max(start, 0)
    marker_len = len(BITMAP_MARKER)

    while pos < limit:
        # Overlap by one byte so markers split across chunks are seen
        chunk = source.read_at(pos, SCAN_CHUNK_SIZE + marker_len - 1)
        if len(chunk) < marker_len:
            return

        index = chunk.find(BITMAP_MARKER)
        while index != -1:
            offset = pos + index
            if offset >= limit:
                return
            yield offset
            index = chunk.find(BITMAP_MARKER, index + 1)

        pos += len(chunk) - marker_len + 1


@dataclass
class ScanStats:
    """Counters for one scan pass."""

    markers: int = 0
    rejected: int = 0
    short_reads: int = 0
    extracted: int = 0
    verified: int = 0


class FileScan:
    """
    Iterator over the bitmaps of one file, owning the open source.

    Closing it closes the file whether or not iteration ever started.
    """

    def __init__(self, source, images, stats):
        self.source = source
        self.stats = stats
        self._images = images

    def __iter__(self):
        return self

    def __next__(self):
        try:
            return next(self._images)
        except StopIteration:
            self.close()
            raise

    def close(self):
        self._images.close()
        self.source.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class BitmapExtractor:
    """
    Extracts embedded BMP images from opaque archive-like blobs.

    Only bitmaps with the 40-byte BITMAPINFOHEADER are recognised. Marker
    bytes that occur inside unrelated data are filtered out with
    conservative dimension and size checks, and every extracted segment is
    optionally confirmed with a decode verifier.
    """

    def __init__(self, verifier=DEFAULT_VERIFIER):
        """
        Initialize BitmapExtractor.

        Parameters
        ----------
        verifier : callable, optional
            ``verifier(bytes) -> bool`` used to confirm each extracted
            segment decodes. Pass None to skip verification.
        """
        self.verifier = verifier
        self.stats = ScanStats()

    def scan(self, source):
        """
        Lazily scan a source and yield extracted bitmaps in offset order.

        ``self.stats`` is replaced as soon as this is called; the returned
        iterator keeps updating that ScanStats object, so interleaved scans
        on one extractor never share counters.

        Parameters
        ----------
        source : ByteSource or bytes-like
            Data to scan. Plain buffers are wrapped in a ByteSource.

        Returns
        -------
        iterator of ExtractedImage
            One record per extracted segment, indexed from zero.
        """
        if not isinstance(source, ByteSource):
            source = ByteSource(data=source)

        self.stats = ScanStats()
        return self._scan(source, self.stats)

    def _scan(self, source, stats):
        LOGGER.debug("Scanning %s (%d bytes)", source.name, source.length)

        # Rejections and short reads keep pulling from the same pass, whose
        # next hit is already past the cursor.
        markers = iter_markers(source)
        resume = 0
        while True:
            offset = next(markers, None)
            if offset is None:
                break
            if offset < resume:
                continue

            stats.markers += 1
            result = validate_candidate(source, offset)
            if isinstance(result, Rejected):
                stats.rejected += 1
                LOGGER.debug("Rejected marker at offset %d: %s", offset, result.reason)
                continue

            image = self._extract(source, result, stats)
            if image is None:
                continue

            yield image
            resume = result.end

            # Jump over long segments instead of walking their chunks
            if resume - offset > SCAN_CHUNK_SIZE:
                markers.close()
                markers = iter_markers(source, resume)

        LOGGER.info("Extraction complete. Found %d bitmaps in %s.",
                    stats.extracted, source.name)

    def _extract(self, source, candidate, stats):
        """
        Copy a validated candidate out of the source.

        Returns
        -------
        ExtractedImage or None
            None when fewer bytes than declared could be read.
        """
        size = candidate.file_header.size
        try:
            data = source.read_at(candidate.offset, size)
        except OSError as e:
            LOGGER.debug("Read fault extracting offset %d: %s", candidate.offset, e)
            data = b''

        if len(data) != size:
            stats.short_reads += 1
            LOGGER.debug("Short read at offset %d: got %d of %d bytes",
                         candidate.offset, len(data), size)
            return None

        info = candidate.info_header
        image = ExtractedImage(
            index=stats.extracted,
            offset=candidate.offset,
            width=info.width,
            height=info.abs_height,
            bit_depth=info.bit_count,
            declared_size=size,
            data=data,
            top_down=info.top_down,
        )
        stats.extracted += 1

        LOGGER.info("Found bitmap at offset %d: %d bytes, %dx%d, %d bpp",
                    image.offset, size, image.width, image.height, image.bit_depth)

        image.verified = self._verify(image)
        if image.verified:
            stats.verified += 1
        elif self.verifier is not None:
            LOGGER.info("Extracted bitmap %s at offset %d may not be a valid bitmap",
                        image.filename, image.offset)

        return image

    def _verify(self, image):
        if self.verifier is None:
            return False
        try:
            return bool(self.verifier(image.data))
        except Exception as e:
            LOGGER.warning("Verifier failed on offset %d: %s", image.offset, e)
            return False

    def scan_file(self, path):
        """
        Open ``path`` and return a lazy scan over its contents.

        The file is opened before iteration starts, so an unreadable path
        raises immediately. The file is closed when the scan is exhausted
        or closed, e.g. by using it as a context manager.

        Returns
        -------
        FileScan

        Raises
        ------
        SourceUnavailable
            If the file cannot be opened.
        """
        source = ByteSource.open(path)
        images = self.scan(source)
        return FileScan(source, images, self.stats)


def extract_bitmaps(data, verifier=DEFAULT_VERIFIER):
    """
    Scan a buffer and return every extracted bitmap.

    Parameters
    ----------
    data : bytes-like or ByteSource
        Data to scan.
    verifier : callable, optional
        Decode verifier, or None to skip verification.

    Returns
    -------
    list of ExtractedImage
    """
    return list(BitmapExtractor(verifier=verifier).scan(data))
