import logging
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, Depends, HTTPException, Request, Response, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, joinedload

from .auth import current_artist
from .database import Base, SessionLocal, engine, get_db
from .errors import FormError, FormValidationError, ParseError, RequiredFieldError
from .forms import GigFormModel, UpdateExisting
from .models import Artist, Genre, Gig
from .schemas import FormErrorsOut, GenreOut, GigOut

logger = logging.getLogger(__name__)

app = FastAPI(title="GigHub API")

# --- CORS for local + frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Initialize DB tables
Base.metadata.create_all(bind=engine)


# --- Root healthcheck
@app.get("/")
def root():
    return {"service": "gighub", "status": "ok"}


# ======================
# Genres
# ======================

def _genres(db: Session) -> List[Genre]:
    return db.query(Genre).order_by(Genre.id.asc()).all()


@app.get("/genres", response_model=List[GenreOut])
def list_genres(db: Session = Depends(get_db)):
    return _genres(db)


# ======================
# Gigs
# ======================

def _gig_query(db: Session):
    return db.query(Gig).options(joinedload(Gig.artist), joinedload(Gig.genre))


def _own_gig(db: Session, gig_id: int, artist: Artist) -> Gig:
    # someone else's gig looks the same as a missing one
    gig = _gig_query(db).filter(Gig.id == gig_id, Gig.artist_id == artist.id).one_or_none()
    if not gig:
        raise HTTPException(status_code=404, detail="Gig not found")
    return gig


def _redisplay(form: GigFormModel, genres: List[Genre], errors: List[FormError]) -> JSONResponse:
    logger.info("Gig form rejected: %s", "; ".join(str(e) for e in errors))
    return JSONResponse(
        status_code=422,
        content={
            "errors": [e.to_dict() for e in errors],
            "form": form.with_genres(genres).model_dump(mode="json"),
        },
    )


FORM_FIELDS = ("venue", "date", "time", "genre")


@app.exception_handler(RequestValidationError)
async def gig_form_validation_handler(request: Request, exc: RequestValidationError):
    """Report badly typed form fields on /gigs/save like any other rejected form."""
    locs = [tuple(e["loc"]) for e in exc.errors()]
    on_form = all(len(loc) > 1 and loc[0] == "body" and loc[1] in FORM_FIELDS for loc in locs)
    if request.url.path != "/gigs/save" or not isinstance(exc.body, dict) or not on_form:
        return await request_validation_exception_handler(request, exc)

    # unusable values are dropped, so those fields report as missing
    bad = {loc[1] for loc in locs}
    form = GigFormModel.model_validate({k: v for k, v in exc.body.items() if k not in bad})
    db = SessionLocal()
    try:
        return _redisplay(form, _genres(db), form.field_errors())
    finally:
        db.close()


@app.get("/gigs", response_model=List[GigOut])
def list_gigs(include_past: bool = False, genre_id: Optional[int] = None, db: Session = Depends(get_db)):
    """List gigs. By default, only shows upcoming ones."""
    q = _gig_query(db)
    if not include_past:
        q = q.filter(Gig.date_time >= datetime.now())
    if genre_id is not None:
        q = q.filter(Gig.genre_id == genre_id)
    return q.order_by(Gig.date_time.asc()).all()


@app.get("/gigs/mine", response_model=List[GigOut])
def list_my_gigs(artist: Artist = Depends(current_artist), db: Session = Depends(get_db)):
    return (
        _gig_query(db)
        .filter(Gig.artist_id == artist.id, Gig.date_time >= datetime.now())
        .order_by(Gig.date_time.asc())
        .all()
    )


@app.get("/gigs/new")
def new_gig_form(artist: Artist = Depends(current_artist), db: Session = Depends(get_db)):
    return GigFormModel.empty(genres=_genres(db)).model_dump(mode="json")


@app.get("/gigs/{gig_id}/edit")
def edit_gig_form(gig_id: int, artist: Artist = Depends(current_artist), db: Session = Depends(get_db)):
    gig = _own_gig(db, gig_id, artist)
    return GigFormModel.from_gig(gig, genres=_genres(db)).model_dump(mode="json")


@app.post("/gigs/save", response_model=GigOut, responses={422: {"model": FormErrorsOut}})
def save_gig(
    form: GigFormModel,
    response: Response,
    artist: Artist = Depends(current_artist),
    db: Session = Depends(get_db),
):
    genres = _genres(db)
    try:
        form.check()
        date_time = form.combined_datetime()
    except FormValidationError as exc:
        return _redisplay(form, genres, exc.errors)
    except ParseError as exc:
        return _redisplay(form, genres, [exc])

    if not any(g.id == form.genre for g in genres):
        return _redisplay(form, genres, [RequiredFieldError("genre")])

    intent = form.intent
    if isinstance(intent, UpdateExisting):
        gig = _own_gig(db, intent.identifier, artist)
        gig.venue = form.venue.strip()
        gig.date_time = date_time
        gig.genre_id = form.genre
        db.commit()
        logger.info("Updated gig %s for artist %s", gig.id, artist.id)
        return _gig_query(db).filter(Gig.id == gig.id).one()

    gig = Gig(
        artist_id=artist.id,
        venue=form.venue.strip(),
        date_time=date_time,
        genre_id=form.genre,
    )
    db.add(gig)
    db.commit()
    db.refresh(gig)
    logger.info("Created gig %s for artist %s", gig.id, artist.id)
    response.status_code = status.HTTP_201_CREATED
    return _gig_query(db).filter(Gig.id == gig.id).one()


@app.delete("/gigs/{gig_id}", status_code=204)
def delete_gig(gig_id: int, artist: Artist = Depends(current_artist), db: Session = Depends(get_db)):
    gig = _own_gig(db, gig_id, artist)
    db.delete(gig)
    db.commit()
    logger.info("Deleted gig %s for artist %s", gig_id, artist.id)
    return None
