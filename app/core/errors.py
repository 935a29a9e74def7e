# app/core/errors.py


class PromoError(Exception):
    """Base error; ``status_code`` is what the HTTP layer answers with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(PromoError):
    status_code = 400


class Unauthorized(PromoError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
