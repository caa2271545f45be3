# gighub/auth.py
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from .database import get_db
from .models import Artist


def current_artist(x_api_key: str = Header(None), db: Session = Depends(get_db)) -> Artist:
    """Resolve the artist making the request from the X-API-Key header."""
    if not x_api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")
    artist = db.query(Artist).filter(Artist.api_key == x_api_key).one_or_none()
    if artist is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")
    return artist
