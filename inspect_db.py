"""Print the persisted grid state row."""

import argparse
import json
import os
import sys

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError


def _lenient(raw, default):
    try:
        return json.loads(raw or default)
    except (TypeError, ValueError):
        return raw


def read_state_row(database_url):
    """Return the raw state row as a dict or ``None`` when it is missing."""

    engine = create_engine(database_url)
    try:
        with engine.connect() as connection:
            row = connection.execute(
                text('SELECT "rows", "cols", blocked, names FROM gridstaterecord WHERE id = 1')
            ).mappings().first()
    finally:
        engine.dispose()
    if row is None:
        return None
    return {
        "rows": row["rows"],
        "cols": row["cols"],
        "blocked": _lenient(row["blocked"], "[]"),
        "names": _lenient(row["names"], "{}"),
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--database-url",
        default=os.getenv("SLOTGRID_DATABASE_URL", "sqlite:///./slotgrid.db"),
    )
    parser.add_argument("--json", action="store_true", help="print the row as JSON")
    args = parser.parse_args(argv)

    try:
        state = read_state_row(args.database_url)
    except SQLAlchemyError as exc:
        print(f"Query error: {exc}", file=sys.stderr)
        return 1
    if state is None:
        print("No state row found.")
        return 0
    if args.json:
        print(json.dumps(state, ensure_ascii=False))
        return 0
    print("rows:", state["rows"], "cols:", state["cols"])
    print("blocked:", state["blocked"])
    print("names:", state["names"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
