class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class NotFoundError(ProcessorError):
    """Raised when a referenced record does not exist."""


class DocumentNotFoundError(NotFoundError):
    """Raised when a document cannot be found or is no longer active."""


class ScanNotFoundError(NotFoundError):
    """Raised when a scan request cannot be found."""


class UnsupportedStorageDiskError(ProcessorError):
    """Raised when a document uses an unsupported storage disk type."""


class ScanLoadError(Exception):
    """Raised when a scan request exists but could not be read.

    The upload has not been touched yet, so the job can run again.
    """
