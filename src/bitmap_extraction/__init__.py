"""
Embedded Bitmap Extraction Package

Locates BMP images embedded in opaque archive files (such as game .lib
resource bundles) by scanning for the BM signature, validating the headers
that follow and writing each plausible bitmap out as its own file.
"""

__version__ = "1.0.0"

from .core.extractor import BitmapExtractor, extract_bitmaps
from .core.extracted_image import ExtractedImage
from .core.byte_source import ByteSource
from .core.errors import SourceUnavailable

__all__ = [
    "BitmapExtractor",
    "ByteSource",
    "ExtractedImage",
    "SourceUnavailable",
    "extract_bitmaps",
]
