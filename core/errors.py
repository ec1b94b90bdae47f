"""Service error taxonomy.

Each error carries the HTTP status it maps to. The API layer turns any
``ServiceError`` into the standard JSON error envelope, so the store and
the validator never touch HTTP types.
"""


class ServiceError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed or incomplete input. Always client-caused."""

    status_code = 400


class NotFoundError(ServiceError):
    """The referenced record does not exist."""

    status_code = 404


class StoreError(ServiceError):
    """The underlying database operation failed."""

    status_code = 500
