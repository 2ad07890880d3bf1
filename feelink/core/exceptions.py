"""
Custom exceptions
A single hierarchy so every layer raises and logs errors the same way
"""

from typing import Any


class FeelinkException(Exception):
    """Base exception for the Feelink application"""

    def __init__(self, message: str, error_code: str | None = None,
                 details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class StorageError(FeelinkException):
    """Quota, activity or session store errors"""


class ValidationError(FeelinkException):
    """Client input errors"""

    def __init__(self, message: str, field: str | None = None,
                 value: Any | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if field:
            self.details['field'] = field
        if value is not None:
            self.details['value'] = value


class ExternalServiceError(FeelinkException):
    """Errors from external services (Hugging Face Inference API etc.)"""

    def __init__(self, message: str, service_name: str = "unknown",
                 status_code: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.details['service_name'] = service_name
        if status_code:
            self.details['status_code'] = status_code


class ModelLoadingError(ExternalServiceError):
    """The hosted model is still cold-starting"""

    def __init__(self, message: str, estimated_time: float | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.estimated_time = estimated_time
        if estimated_time is not None:
            self.details['estimated_time'] = estimated_time
