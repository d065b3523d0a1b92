"""Custom exceptions for the API type detector."""


class TypeDetectorError(Exception):
    """Base exception for API type detector errors."""

    pass


class MalformedSampleError(TypeDetectorError):
    """Raised when a sample holds a value outside the JSON value space."""

    pass


class ResourceExceededError(TypeDetectorError):
    """Raised when a sample nests deeper than the configured guard allows."""

    pass


class StoreError(TypeDetectorError):
    """Raised when a stored declaration cannot be read."""

    pass
