import json

from sqlmodel import Session

import inspect_db
from slotgrid.grid import GridState
from slotgrid_web.models import GridStateRecord


def test_reports_missing_row(db_engine, capsys):
    url = str(db_engine.url)
    assert inspect_db.main(["--database-url", url]) == 0
    assert capsys.readouterr().out.strip() == "No state row found."


def test_prints_decoded_state(store, db_engine, capsys):
    store.save(GridState(rows=2, cols=3, blocked={"1-0"}, names={2: "Pins"}))
    assert inspect_db.main(["--database-url", str(db_engine.url), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {"rows": 2, "cols": 3, "blocked": ["1-0"], "names": {"2": "Pins"}}


def test_malformed_text_is_shown_raw(db_engine, capsys):
    with Session(db_engine) as session:
        session.add(GridStateRecord(id=1, rows=1, cols=1, blocked="[broken", names="{}"))
        session.commit()
    inspect_db.main(["--database-url", str(db_engine.url)])
    out = capsys.readouterr().out
    assert "rows: 1 cols: 1" in out
    assert "blocked: [broken" in out
