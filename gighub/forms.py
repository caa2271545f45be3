"""The gig form: the editable fields of a gig plus what the page needs to render it.

A form is built per request, empty for a new gig or from a stored ``Gig``
for an edit, checked with ``field_errors``/``check`` and then either turned
into a create/update call or sent back with its errors.

``combined_datetime`` returns a naive ``datetime``: the wall-clock time at
the venue. Nothing converts it to or from UTC.
"""

import datetime
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from dateutil import parser as dateparser
from pydantic import BaseModel, Field, computed_field

from .errors import FormError, FormValidationError, ParseError
from .schemas import GenreOut
from .validators import validate_fields

ADD_HEADING = "Add a Gig"
EDIT_HEADING = "Edit a Gig"


@dataclass(frozen=True)
class Create:
    """The form describes a gig that has not been stored yet."""


@dataclass(frozen=True)
class UpdateExisting:
    """The form edits the stored gig with this id."""

    identifier: int


Intent = Union[Create, UpdateExisting]


class GigFormModel(BaseModel):
    id: int = 0
    venue: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    genre: Optional[int] = Field(0, ge=0, le=255)
    genres: List[GenreOut] = []
    heading: Optional[str] = None

    @property
    def intent(self) -> Intent:
        # whether the id exists is for the store to say
        if self.id != 0:
            return UpdateExisting(self.id)
        return Create()

    def action_label(self) -> str:
        return "Update" if isinstance(self.intent, UpdateExisting) else "Create"

    @computed_field
    @property
    def action(self) -> str:
        return self.action_label()

    def combined_datetime(self) -> datetime.datetime:
        """Parse ``date`` and ``time`` together as one point in time.

        Does not re-run the field checks. Raises ``ParseError`` when the
        joined string is not a date-time, or when it carries a timezone.
        """
        value = f"{self.date} {self.time}"
        try:
            parsed = dateparser.parse(value)
        except (ValueError, OverflowError) as exc:
            raise ParseError(value) from exc
        if parsed.tzinfo is not None:
            raise ParseError(value)
        return parsed

    def field_errors(self, today: Optional[datetime.date] = None) -> List[FormError]:
        return validate_fields(
            {"venue": self.venue, "date": self.date, "time": self.time, "genre": self.genre},
            today=today,
        )

    def check(self, today: Optional[datetime.date] = None) -> None:
        errors = self.field_errors(today)
        if errors:
            raise FormValidationError(errors)

    def with_genres(self, genres: Sequence) -> "GigFormModel":
        return self.model_copy(update={"genres": [GenreOut.model_validate(g) for g in genres]})

    @classmethod
    def empty(cls, genres: Sequence = (), heading: str = ADD_HEADING) -> "GigFormModel":
        return cls(heading=heading).with_genres(genres)

    @classmethod
    def from_gig(cls, gig, genres: Sequence = (), heading: str = EDIT_HEADING) -> "GigFormModel":
        stored = gig.date_time
        if stored.microsecond:
            time_text = stored.strftime("%H:%M:%S.%f")
        elif stored.second:
            time_text = stored.strftime("%H:%M:%S")
        else:
            time_text = stored.strftime("%H:%M")
        form = cls(
            id=gig.id,
            venue=gig.venue,
            date=stored.strftime("%Y-%m-%d"),
            time=time_text,
            genre=gig.genre_id,
            heading=heading,
        )
        return form.with_genres(genres)
