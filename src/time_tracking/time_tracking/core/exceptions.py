class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ClockServiceError(DomainError):
    """Raised when a fetch or clock mutation against the API fails.

    Recoverable: nothing was recorded locally, the caller may retry.
    """

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
