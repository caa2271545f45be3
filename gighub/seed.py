import os
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
from .database import Base, engine, SessionLocal
from .models import Artist, Genre, Gig

# ids are fixed: forms refer to genres by id, and 0 means "none selected"
GENRES = ["Jazz", "Blues", "Rock", "Country"]


def seed(db: Session, api_key: str = "dev-key", demo_gig: bool = True) -> Artist:
    for genre_id, name in enumerate(GENRES, start=1):
        if db.get(Genre, genre_id) is None:
            db.add(Genre(id=genre_id, name=name))

    artist = db.query(Artist).filter(Artist.api_key == api_key).one_or_none()
    if artist is None:
        artist = Artist(name="Demo Artist", api_key=api_key)
        db.add(artist)
    db.flush()

    if demo_gig and not artist.gigs:
        starts = datetime.now().replace(hour=20, minute=0, second=0, microsecond=0) + timedelta(days=7)
        db.add(Gig(artist_id=artist.id, venue="The Blue Note", date_time=starts, genre_id=1))

    db.commit()
    return artist


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db, api_key=os.getenv("GIGHUB_SEED_API_KEY", "dev-key"))
    finally:
        db.close()
    print("✅ Seeded genres, demo artist and a sample gig.")
