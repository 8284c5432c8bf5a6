"""Custom exceptions for store access and identifier parsing."""


class StoreError(Exception):
    """Base class for failures that are turned into an HTTP error response."""

    status_code: int = 500
    error: str = "store_error"

    def __init__(self, message: str = "Store operation failed"):
        self.message = message
        super().__init__(message)

    def to_response(self) -> dict:
        return {"error": self.error, "detail": self.message}


class InvalidIdentifierError(StoreError, ValueError):
    """Raised when a path identifier is not a valid ObjectId string."""

    status_code = 400
    error = "invalid_identifier"

    def __init__(self, value: str = None, message: str = None):
        self.value = value

        if message is None:
            if value is not None:
                message = f"'{value}' is not a valid identifier (expected a 24 character hex string)"
            else:
                message = "Invalid identifier"

        super().__init__(message)


class DatabaseUnavailableError(StoreError):
    """Raised when the database cannot be reached or the gateway is not connected."""

    status_code = 503
    error = "database_unavailable"

    def __init__(self, operation: str = None, message: str = None):
        self.operation = operation

        if message is None:
            if operation:
                message = f"Database is unavailable, '{operation}' could not be performed"
            else:
                message = "Database is unavailable"

        super().__init__(message)


class DatabaseOperationError(StoreError):
    """Raised when the database rejects or fails an operation."""

    status_code = 500
    error = "database_error"

    def __init__(self, operation: str, message: str = None):
        self.operation = operation

        if message is None:
            message = f"Database operation '{operation}' failed"

        super().__init__(message)
