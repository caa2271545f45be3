"""Field-level error kinds raised or collected while checking a gig form."""

from enum import Enum
from typing import List, Optional


class ErrorCode(Enum):
    REQUIRED = "REQUIRED"
    FUTURE_DATE = "FUTURE_DATE"
    INVALID_TIME = "INVALID_TIME"
    PARSE_ERROR = "PARSE_ERROR"


class FormError(Exception):
    """Base form error with the offending field, a code and a user-safe message."""

    code: ErrorCode

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, FormError):
            return NotImplemented
        return (type(self), self.field, self.message) == (type(other), other.field, other.message)

    def __hash__(self) -> int:
        return hash((type(self), self.field, self.message))

    def to_dict(self) -> dict:
        return {"field": self.field, "code": self.code.value, "message": self.message}


class RequiredFieldError(FormError):
    code = ErrorCode.REQUIRED

    def __init__(self, field: str) -> None:
        super().__init__(field, f"The {field} field is required.")


class FutureDateError(FormError):
    code = ErrorCode.FUTURE_DATE

    def __init__(self, field: str = "date") -> None:
        super().__init__(field, "Enter a valid date that is today or later.")


class InvalidTimeError(FormError):
    code = ErrorCode.INVALID_TIME

    def __init__(self, field: str = "time") -> None:
        super().__init__(field, "Enter a valid time (HH:MM).")


class ParseError(FormError):
    """The date and time fields could not be read back as one date-time."""

    code = ErrorCode.PARSE_ERROR

    def __init__(self, value: Optional[str], field: str = "date") -> None:
        super().__init__(field, f"Could not read {value!r} as a date and time.")
        self.value = value


class FormValidationError(Exception):
    """Raised at the request boundary when a form has one or more field errors."""

    def __init__(self, errors: List[FormError]) -> None:
        super().__init__("; ".join(str(e) for e in errors))
        self.errors = list(errors)

    def to_list(self) -> List[dict]:
        return [e.to_dict() for e in self.errors]
