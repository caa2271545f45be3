from sqlalchemy import Column, Integer, SmallInteger, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from .database import Base


class Genre(Base):
    __tablename__ = "genres"

    id = Column(SmallInteger, primary_key=True)  # starts at 1, 0 means "no genre picked"
    name = Column(String(255), unique=True, nullable=False)


class Artist(Base):
    __tablename__ = "artists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), unique=True, nullable=False)
    api_key = Column(String(128), unique=True, nullable=True)  # None for imported artists

    gigs = relationship("Gig", back_populates="artist", cascade="all, delete-orphan")


class Gig(Base):
    __tablename__ = "gigs"

    id = Column(Integer, primary_key=True, index=True)
    artist_id = Column(Integer, ForeignKey("artists.id"), nullable=False, index=True)
    genre_id = Column(SmallInteger, ForeignKey("genres.id"), nullable=False, index=True)
    venue = Column(String(255), nullable=False)
    date_time = Column(DateTime, nullable=False)  # naive, venue wall-clock time

    artist = relationship("Artist", back_populates="gigs")
    genre = relationship("Genre")
