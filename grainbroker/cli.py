"""Management CLI for database operations.

Usage:
    python -m grainbroker.cli migrate          # alembic upgrade head
    python -m grainbroker.cli create-tables    # create_all (development only)
    python -m grainbroker.cli counts           # rows per table
"""

import subprocess
import sys

from sqlalchemy import create_engine, func, select

from grainbroker.config import settings
from grainbroker.database import Base, enable_sqlite_foreign_keys
from grainbroker.models import Customer, Order, Supplier


def _sync_engine(url: str | None = None):
    url = url or settings.database_url_sync
    engine = create_engine(url)
    if url.startswith("sqlite"):
        enable_sqlite_foreign_keys(engine)
    return engine


def migrate() -> int:
    """Run Alembic upgrade head against the configured database."""
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        capture_output=True, text=True,
    )
    if result.returncode != 0:
        print(f"  FAILED: {result.stderr}")
    else:
        print("  OK")
    return result.returncode


def create_tables(url: str | None = None) -> list[str]:
    engine = _sync_engine(url)
    try:
        Base.metadata.create_all(engine)
    finally:
        engine.dispose()
    return sorted(Base.metadata.tables)


def table_counts(url: str | None = None) -> dict[str, int]:
    engine = _sync_engine(url)
    try:
        with engine.connect() as conn:
            return {
                model.__tablename__: conn.execute(select(func.count()).select_from(model)).scalar_one()
                for model in (Customer, Supplier, Order)
            }
    finally:
        engine.dispose()


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    cmd = argv[0] if argv else ""
    if cmd == "migrate":
        return migrate()
    if cmd == "create-tables":
        for name in create_tables():
            print(f"  {name}")
        return 0
    if cmd == "counts":
        counts = table_counts()
        for name, count in counts.items():
            print(f"  {name}: {count}")
        return 0

    print("Usage: python -m grainbroker.cli [migrate|create-tables|counts]")
    return 1


if __name__ == "__main__":
    sys.exit(main())
