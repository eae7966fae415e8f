# pairchat/domain/errors.py
UNKNOWN_ERROR = "Unknown error occurred."
INVALID_ARGUMENT = "Invalid argument for request."
INTERNAL_DATABASE_ERROR = "Internal database error"
ENTRY_ALREADY_EXISTS = "Entry already exists"


class ApplicationError(Exception):
    """Base class of every failure that is reported back to a client.

    ``message`` is the text the client sees; subclasses only classify it.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApplicationError):
    pass


class AuthorizationError(ApplicationError):
    pass


class NotFoundError(ApplicationError):
    pass


class ConstraintViolation(ApplicationError):
    def __init__(self, message: str = ENTRY_ALREADY_EXISTS, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class UnknownStorageError(ApplicationError):
    def __init__(self, cause: BaseException | None = None):
        super().__init__(INTERNAL_DATABASE_ERROR)
        self.cause = cause


class TransportError(Exception):
    """The duplex connection is no longer usable."""
