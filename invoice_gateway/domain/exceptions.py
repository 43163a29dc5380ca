"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class CredentialsValidationError(DomainException):
    """Submitted credentials are missing fields or malformed"""

    pass


class NotFoundError(DomainException):
    """Requested record does not exist"""

    pass


class DataAccessError(DomainException):
    """A query against the store failed or returned rows of the wrong shape"""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation
