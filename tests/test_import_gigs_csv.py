"""Tests for the CSV gig importer.

Run with: pytest tests/test_import_gigs_csv.py -v
"""

from datetime import date, timedelta

import pytest

from gighub.database import SessionLocal
from gighub.import_gigs_csv import main
from gighub.models import Artist, Gig

SOON = (date.today() + timedelta(days=10)).isoformat()


def _write_csv(tmp_path, rows, header="Artist,Venue,Date,Time,Genre"):
    path = tmp_path / "gigs.csv"
    path.write_text("\n".join([header] + rows) + "\n", encoding="utf-8")
    return str(path)


def _gigs():
    session = SessionLocal()
    try:
        return [(g.artist.name, g.venue, g.date_time.isoformat()) for g in session.query(Gig).all()]
    finally:
        session.close()


def test_imports_valid_rows_and_skips_the_rest(tmp_path, capsys, artist_id):
    path = _write_csv(tmp_path, [
        f"Nina Simone,Village Gate,{SOON},21:00,jazz",
        f"Nina Simone,Village Gate,{SOON},21:00,Jazz",
        f"Nina Simone,Village Gate,{SOON},25:61,Jazz",
        f"Muddy Waters,Checkerboard,{SOON},20:00,Polka",
        f",Checkerboard,{SOON},20:00,Blues",
    ])

    main([path])

    out, err = capsys.readouterr()
    assert "Created: 1, Skipped: 1, Invalid: 3" in out
    assert "line 4" in err and "time" in err
    assert _gigs() == [("Nina Simone", "Village Gate", f"{SOON}T21:00:00")]

    session = SessionLocal()
    try:
        imported = session.query(Artist).filter(Artist.name == "Nina Simone").one()
        assert imported.api_key is None
    finally:
        session.close()


def test_dry_run_writes_nothing(tmp_path, capsys, artist_id):
    path = _write_csv(tmp_path, [f"Nina Simone,Village Gate,{SOON},21:00,Jazz"])

    main([path, "--dry-run"])

    assert "[DRY RUN] Would create: 1" in capsys.readouterr().out
    assert _gigs() == []


def test_missing_file(tmp_path):
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / "nope.csv")])
    assert info.value.code == 1


def test_missing_columns(tmp_path, artist_id):
    path = _write_csv(tmp_path, ["Nina Simone,Village Gate"], header="Artist,Venue")
    with pytest.raises(SystemExit) as info:
        main([path])
    assert info.value.code == 2
