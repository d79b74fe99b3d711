# storefront/domain/errors.py


class StorefrontError(Exception):
    """Bazowy blad domenowy, routery mapuja go na status HTTP."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StorefrontError):
    status_code = 404


class InvalidInputError(StorefrontError):
    status_code = 400


class InvalidStateError(StorefrontError):
    status_code = 400


class NotPaidError(InvalidStateError):
    pass


class AlreadyFinalizedError(InvalidStateError):
    pass


class ConflictError(StorefrontError):
    status_code = 409


class UploadError(StorefrontError):
    status_code = 500
