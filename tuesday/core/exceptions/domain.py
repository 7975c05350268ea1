from tuesday.core.exceptions.base import AppException


class AuthorizationError(AppException):
    """Raised when a user lacks permission for an action."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message)


class ResourceNotFoundError(AppException):
    """Raised when a requested resource does not exist."""

    def __init__(
        self, resource: str = "Resource", identifier: str = "", *, message: str | None = None
    ):
        if message is None:
            message = f"{resource} not found"
            if identifier:
                message = f"{resource} '{identifier}' not found"
        super().__init__(message)


class DuplicateResourceError(AppException):
    """Raised when attempting to create a resource that already exists."""

    def __init__(self, resource: str = "Resource", identifier: str = ""):
        message = f"{resource} already exists"
        if identifier:
            message = f"{resource} '{identifier}' already exists"
        super().__init__(message)


class ValidationError(AppException):
    """Raised when input validation fails."""

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message)


class ApiConnectionError(AppException):
    """Raised when the Tuesday API cannot be reached or answers unexpectedly."""

    def __init__(self, message: str = "Failed to reach the Tuesday API", status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
