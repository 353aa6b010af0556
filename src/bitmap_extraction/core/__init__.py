"""Core bitmap scanning and extraction utilities."""

from .byte_source import ByteSource
from .errors import SourceUnavailable
from .extracted_image import ExtractedImage
from .extractor import BitmapExtractor, FileScan, ScanStats, extract_bitmaps, iter_markers
from .headers import Candidate, FileHeader, InfoHeader, Rejected, validate_candidate
from .verification import no_verify, pillow_verify

__all__ = [
    "BitmapExtractor",
    "ByteSource",
    "Candidate",
    "ExtractedImage",
    "FileScan",
    "FileHeader",
    "InfoHeader",
    "Rejected",
    "ScanStats",
    "SourceUnavailable",
    "extract_bitmaps",
    "iter_markers",
    "no_verify",
    "pillow_verify",
    "validate_candidate",
]
