"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class NotAuthenticatedError(AppError):
    """Raised when an operation needs an owner and none is present."""

    status_code = 401

    def __init__(self, message: str = "No authenticated owner"):
        super().__init__(message, code="NOT_AUTHENTICATED")


class PermissionDeniedError(AppError):
    """Raised by the storage layer when the owner may not read or write a resource."""

    status_code = 403

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"Permission denied on {resource}: {identifier}",
            code="PERMISSION_DENIED",
        )


# Storage failures that read paths may degrade to "no data".
ACCESS_ERRORS = (NotAuthenticatedError, PermissionDeniedError)
