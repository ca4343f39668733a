class ExtractionError(Exception):
    """Raised when text cannot be extracted from a file."""


class UnsupportedMimeTypeError(ExtractionError):
    """Raised when no extractor handles the file's MIME type."""
