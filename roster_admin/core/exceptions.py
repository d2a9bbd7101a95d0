"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationException(AppException):
    """Malformed or missing input."""

    def __init__(self, message: str = "Validation error"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class UnauthorizedException(AppException):
    """Absent, invalid or expired session, or bad credentials."""

    def __init__(self, message: str = "Unauthorized"):
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class MethodNotAllowedException(AppException):
    """Wrong HTTP verb for the endpoint."""

    def __init__(self, message: str = "Method not allowed"):
        """Initialize with 405 status code."""
        super().__init__(message, status_code=405)


class StorageException(AppException):
    """Underlying data store failure. The message is always generic."""

    def __init__(self, message: str = "Internal server error"):
        """Initialize with 500 status code."""
        super().__init__(message, status_code=500)
