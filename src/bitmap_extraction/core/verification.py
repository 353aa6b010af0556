"""
Best-effort decode verification of extracted bitmaps.

A verifier is any callable taking the segment bytes and returning a bool.
A failed or raising verifier never stops extraction; it only clears the
``verified`` flag on the emitted record.
"""

import io
import logging

from PIL import Image, UnidentifiedImageError

LOGGER = logging.getLogger(__name__)


def pillow_verify(data):
    """
    Check that Pillow can fully decode the bitmap.

    Parameters
    ----------
    data : bytes
        Complete bitmap segment, starting with ``BM``.

    Returns
    -------
    bool
        True if the image opened and its pixel data loaded.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            LOGGER.debug("Verified as valid bitmap: %dx%d", img.width, img.height)
        return True
    except (UnidentifiedImageError, OSError, ValueError, SyntaxError) as e:
        LOGGER.debug("Pillow could not decode bitmap: %s", e)
        return False


def no_verify(data):
    """Skip verification; every record is reported as unverified."""
    return False


DEFAULT_VERIFIER = pillow_verify
