"""Per-field validators for the gig form.

Each validator takes ``(field, value, today)`` and returns a ``FormError``
or ``None``. ``GIG_FORM_RULES`` lists them per field in the order they are
applied; the first failure for a field is reported and every field is
checked.
"""

from datetime import date, datetime, time
from typing import Callable, List, Optional, Sequence, Tuple

from .errors import FormError, FutureDateError, InvalidTimeError, RequiredFieldError

DATE_FORMATS = ("%Y-%m-%d", "%d %b %Y")
TIME_FORMATS = ("%H:%M", "%H:%M:%S", "%H:%M:%S.%f")

Validator = Callable[[str, object, date], Optional[FormError]]


def parse_date(value: str) -> Optional[date]:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt).date()
        except ValueError:
            continue
    return None


def parse_time(value: str) -> Optional[time]:
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt).time()
        except ValueError:
            continue
    return None


def required(field: str, value, today: date) -> Optional[FormError]:
    if value is None:
        return RequiredFieldError(field)
    if isinstance(value, str) and not value.strip():
        return RequiredFieldError(field)
    # genre ids start at 1, so 0 is "nothing selected"
    if isinstance(value, int) and value == 0:
        return RequiredFieldError(field)
    return None


def future_date(field: str, value: str, today: date) -> Optional[FormError]:
    parsed = parse_date(value)
    # calendar dates only: today is fine whatever the clock says
    if parsed is None or parsed < today:
        return FutureDateError(field)
    return None


def valid_time(field: str, value: str, today: date) -> Optional[FormError]:
    if parse_time(value) is None:
        return InvalidTimeError(field)
    return None


GIG_FORM_RULES: Sequence[Tuple[str, Sequence[Validator]]] = (
    ("venue", (required,)),
    ("date", (required, future_date)),
    ("time", (required, valid_time)),
    ("genre", (required,)),
)


def validate_fields(values: dict, today: Optional[date] = None,
                    rules: Sequence[Tuple[str, Sequence[Validator]]] = GIG_FORM_RULES) -> List[FormError]:
    """Run ``rules`` over ``values`` and return the field errors found, in rule order."""
    today = today or date.today()
    errors: List[FormError] = []
    for field, validators in rules:
        value = values.get(field)
        for check in validators:
            error = check(field, value, today)
            if error is not None:
                errors.append(error)
                break
    return errors
