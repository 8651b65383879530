"""
Domain errors

Raised by services and repositories when a request cannot be honoured.
The API layer translates them into the error envelope (see main.py).
None of these mean the system is broken: callers are expected to handle them.
"""
from typing import List, Union


class LittleShopError(Exception):
    """Base class for every expected, caller-recoverable failure"""

    status_code = 400

    def __init__(self, messages: Union[str, List[str]]):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__(", ".join(self.messages))

    def envelope_errors(self) -> List[str]:
        """Entries for the "errors" list of the response body"""
        return self.messages


class NotFoundError(LittleShopError):
    """A referenced item, merchant or coupon does not exist"""

    status_code = 404


class ValidationFailedError(LittleShopError):
    """A required field is missing or has the wrong shape"""

    status_code = 422

    def __str__(self) -> str:
        return "Validation failed: " + ", ".join(self.messages)

    def envelope_errors(self) -> List[str]:
        return [str(self)]


class InvalidQueryError(ValidationFailedError):
    """A query-string parameter is missing, malformed or contradictory"""

    status_code = 400

    def __str__(self) -> str:
        return ", ".join(self.messages)

    def envelope_errors(self) -> List[str]:
        return self.messages


class CapacityExceededError(LittleShopError):
    """A business cap was reached; nothing was changed"""

    status_code = 422


class ConstraintViolationError(LittleShopError):
    """A write would reference a row that does not exist"""

    status_code = 404
