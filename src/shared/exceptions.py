"""Custom exceptions for the expense tracker application."""


class ExpenseTrackerException(Exception):
    """Base exception for all expense tracker errors."""

    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(ExpenseTrackerException):
    """Raised when input validation fails."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class OwnershipViolationError(ExpenseTrackerException):
    """Raised when a payload tries to set the owner of a record."""

    error_code = "USER_ID_NOT_ALLOWED"

    def __init__(self, message: str = "User ID cannot be provided in request body"):
        super().__init__(message, status_code=400)


class AuthenticationError(ExpenseTrackerException):
    """Raised when authentication fails."""

    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, status_code=401)


class NotFoundError(ExpenseTrackerException):
    """Raised when a resource is not found."""

    error_code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class DatabaseError(ExpenseTrackerException):
    """Raised when database operations fail."""

    error_code = "DATABASE_ERROR"

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message, status_code=500)
