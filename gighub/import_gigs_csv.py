import argparse, csv, os, sys
from datetime import date
from typing import Dict, Iterable, Optional, Tuple
from sqlalchemy.orm import Session
from .database import Base, engine, SessionLocal
from .errors import ParseError, RequiredFieldError
from .forms import GigFormModel
from .models import Artist, Genre, Gig

REQUIRED_COLUMNS = ["artist", "venue", "date", "time", "genre"]


def import_rows(db: Session, rows: Iterable[dict], fieldmap: Dict[str, str],
                today: Optional[date] = None) -> Tuple[int, int, int]:
    """Validate each row as a gig form and add the valid ones. Returns (created, skipped, invalid)."""
    genre_ids = {g.name.lower(): g.id for g in db.query(Genre).all()}
    created = skipped = invalid = 0

    for line_no, row in enumerate(rows, start=2):
        artist_name = (row[fieldmap["artist"]] or "").strip()
        genre_name = (row[fieldmap["genre"]] or "").strip().lower()
        form = GigFormModel(
            venue=row[fieldmap["venue"]],
            date=row[fieldmap["date"]],
            time=row[fieldmap["time"]],
            genre=genre_ids.get(genre_name, 0),
        )

        errors = form.field_errors(today)
        if not artist_name:
            errors.insert(0, RequiredFieldError("artist"))
        if not errors:
            try:
                date_time = form.combined_datetime()
            except ParseError as exc:
                errors = [exc]
        if errors:
            print(f"[WARN] line {line_no}: " + "; ".join(str(e) for e in errors), file=sys.stderr)
            invalid += 1
            continue

        artist = db.query(Artist).filter(Artist.name == artist_name).one_or_none()
        if artist is None:
            artist = Artist(name=artist_name)
            db.add(artist)
            db.flush()

        venue = form.venue.strip()
        existing = (
            db.query(Gig)
            .filter(Gig.artist_id == artist.id, Gig.venue == venue, Gig.date_time == date_time)
            .first()
        )
        if existing:
            skipped += 1
            continue

        db.add(Gig(artist_id=artist.id, venue=venue, date_time=date_time, genre_id=form.genre))
        # later rows in the same file must see this one
        db.flush()
        created += 1

    return created, skipped, invalid


def main(argv=None):
    ap = argparse.ArgumentParser(description="Import gigs from CSV into the GigHub database")
    ap.add_argument("csv_path", help="Path to CSV with header: artist,venue,date,time,genre")
    ap.add_argument("--encoding", default="utf-8", help="File encoding (default: utf-8)")
    ap.add_argument("--delimiter", default=",", help="CSV delimiter (default: ,)")
    ap.add_argument("--dry-run", action="store_true", help="Validate only; do not write DB")
    args = ap.parse_args(argv)

    if not os.path.exists(args.csv_path):
        print(f"CSV not found: {args.csv_path}", file=sys.stderr)
        sys.exit(1)

    # Ensure tables exist
    Base.metadata.create_all(bind=engine)

    with open(args.csv_path, "r", encoding=args.encoding, newline="") as f:
        reader = csv.DictReader(f, delimiter=args.delimiter)
        # normalize header names
        fieldmap = {k.lower().strip(): k for k in reader.fieldnames or []}
        missing = [c for c in REQUIRED_COLUMNS if c not in fieldmap]
        if missing:
            print(f"CSV header must include: {', '.join(REQUIRED_COLUMNS)}. Missing: {missing}", file=sys.stderr)
            sys.exit(2)

        db = SessionLocal()
        try:
            created, skipped, invalid = import_rows(db, reader, fieldmap)
            if args.dry_run:
                db.rollback()
                print(f"[DRY RUN] Would create: {created}, skip: {skipped}, invalid: {invalid}")
            else:
                db.commit()
                print(f"Created: {created}, Skipped: {skipped}, Invalid: {invalid}")
        finally:
            db.close()


if __name__ == "__main__":
    main()
