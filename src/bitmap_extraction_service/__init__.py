"""Service wrapper around the bitmap extraction core."""

from .bitmap_extractor_service import BitmapExtractorService

__all__ = ["BitmapExtractorService"]
