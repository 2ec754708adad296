"""
Service layer exceptions.

Each exception carries the HTTP status the API layer responds with.
"""


class ServiceError(Exception):
    """Base exception for service errors"""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Raised when a required field is missing or a value is not accepted"""

    status_code = 400


class NotFoundError(ServiceError):
    """Raised when a referenced record does not exist or is not owned by the caller"""

    status_code = 404


class InternalError(ServiceError):
    """Raised when the datastore fails; carries the underlying message"""

    status_code = 500
