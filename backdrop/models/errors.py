class CompositingError(Exception):
    """Base class for every failure surfaced by the compositing pipeline."""
    pass


class SourceUnavailable(CompositingError):
    """Raised when an image could not be fetched or decoded."""
    pass


class EmptyCatalog(CompositingError):
    """Raised when the background catalog holds no usable image."""
    pass


class InvalidDimensions(CompositingError):
    """Raised for zero-area rasters or mismatched canvas sizes."""
    pass


class NoVisibleContent(CompositingError):
    """Raised when no pixel of the foreground is above the visibility threshold."""
    pass
