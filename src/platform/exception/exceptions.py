class CustomBaseError(Exception):
    """
    Expected failure with an HTTP status attached.

    `@Logger.io` logs these without a traceback and the exception handlers turn them
    into `{"detail": message}` responses. Subclasses set `status_code`.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(CustomBaseError):
    """Malformed input to a use case"""

    status_code = 400


class DomainError(CustomBaseError):
    """Entity invariant violated by a state transition"""

    status_code = 400


class AuthenticationError(CustomBaseError):
    status_code = 401


class ForbiddenError(CustomBaseError):
    status_code = 403


class NotFoundError(CustomBaseError):
    status_code = 404


class ConflictError(CustomBaseError):
    """Business rule violated under the current state"""

    status_code = 409
