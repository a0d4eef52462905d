"""
Typed failures raised by the service modules.

Route handlers never build error responses themselves; main.py maps each of
these to a JSON body of the form {"message": ...} with the matching status.
"""


class ShopError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(ShopError):
    status_code = 400


class InvalidState(ShopError):
    status_code = 400


class NotFound(ShopError):
    status_code = 404


class Conflict(ShopError):
    status_code = 409
