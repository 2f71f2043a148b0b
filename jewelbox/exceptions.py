"""
Domain errors raised by services and translated to HTTP responses in main.py.

ValidationError  - bad input; raised before any write.
NotFoundError    - referenced record does not exist.
InvalidState     - record state forbids the operation (e.g. editing a sold unit).
ConflictError    - a concurrent operation or a reference invalidated a precondition.
BackendError     - database or storage failure; the original error is chained.
"""


class JewelBoxError(Exception):
    """Base class for all domain errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(JewelBoxError):
    status_code = 422

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class NotFoundError(JewelBoxError):
    status_code = 404


class InvalidState(JewelBoxError):
    status_code = 409


class ConflictError(JewelBoxError):
    status_code = 409


class BackendError(JewelBoxError):
    status_code = 502
