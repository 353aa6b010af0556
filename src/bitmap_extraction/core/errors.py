"""Errors raised by the bitmap extraction core."""


class SourceUnavailable(IOError):
    """
    The byte source cannot be opened or read at all.

    This is the only fatal condition of a scan; it is raised before any
    offset is examined.
    """

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        message = f"Source unavailable: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
