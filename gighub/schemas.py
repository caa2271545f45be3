# gighub/schemas.py
from typing import List
from datetime import datetime
from pydantic import BaseModel

# ---------- Genres ----------
class GenreOut(BaseModel):
    id: int
    name: str
    class Config:
        from_attributes = True

# ---------- Artists ----------
class ArtistOut(BaseModel):
    id: int
    name: str
    class Config:
        from_attributes = True

# ---------- Gigs ----------
class GigOut(BaseModel):
    id: int
    venue: str
    date_time: datetime
    artist: ArtistOut
    genre: GenreOut
    class Config:
        from_attributes = True

# ---------- Form errors ----------
class FieldErrorOut(BaseModel):
    field: str
    code: str
    message: str

class FormErrorsOut(BaseModel):
    errors: List[FieldErrorOut]
    form: dict
