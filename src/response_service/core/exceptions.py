class ResponseServiceError(Exception):
    """Base class for errors raised by the response service."""


class SubmissionValidationError(ResponseServiceError, ValueError):
    """A submission is malformed and was not recorded."""


class StorageError(ResponseServiceError):
    """Reading or writing the persistence medium failed."""
