"""
Apply SQL migrations from MIGRATIONS_DIR (default ./migrations) in file-name order.

usage: python -m spectrum_accounts.infrastructure.db.migrate [up|status]
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import psycopg

from spectrum_accounts.logging import setup_logging
from spectrum_accounts.settings import get_settings

logger = logging.getLogger(__name__)

SCHEMA_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
  version    text PRIMARY KEY,
  applied_at timestamptz NOT NULL DEFAULT now()
);
"""


def migrations_dir() -> Path:
    return Path(os.environ.get("MIGRATIONS_DIR", "migrations"))


def list_migrations(directory: Path) -> list[Path]:
    if not directory.is_dir():
        raise FileNotFoundError(f"migrations dir not found: {directory}")
    return sorted(directory.glob("*.sql"))


def pending(available: list[Path], applied: set[str]) -> list[Path]:
    return [p for p in available if p.stem not in applied]


def applied_versions(conn: psycopg.Connection) -> set[str]:
    with conn.cursor() as cur:
        cur.execute(SCHEMA_TABLE_SQL)
        cur.execute("SELECT version FROM schema_migrations;")
        return {r[0] for r in cur.fetchall()}


def apply_one(conn: psycopg.Connection, path: Path) -> None:
    with conn.cursor() as cur:
        cur.execute(path.read_text(encoding="utf-8"))
        cur.execute(
            "INSERT INTO schema_migrations (version) VALUES (%s);", (path.stem,)
        )
    conn.commit()
    logger.info("migration applied", extra={"version": path.stem})


def cmd_up(dsn: str, directory: Path) -> int:
    with psycopg.connect(dsn, autocommit=False) as conn:
        to_run = pending(list_migrations(directory), applied_versions(conn))
        conn.commit()
        if not to_run:
            logger.info("no pending migrations")
            return 0
        for path in to_run:
            try:
                apply_one(conn, path)
            except psycopg.Error:
                conn.rollback()
                logger.exception("migration failed", extra={"version": path.stem})
                return 1
    return 0


def cmd_status(dsn: str, directory: Path) -> int:
    with psycopg.connect(dsn) as conn:
        done = applied_versions(conn)
    for path in list_migrations(directory):
        state = "applied" if path.stem in done else "pending"
        print(f"{state:8} {path.stem}")
    return 0


def main(argv: list[str]) -> int:
    settings = get_settings()
    setup_logging(settings.log_level)
    commands = {"up": cmd_up, "status": cmd_status}
    if len(argv) < 2 or argv[1] not in commands:
        print(__doc__.strip().splitlines()[-1], file=sys.stderr)
        return 2
    try:
        return commands[argv[1]](settings.database_url, migrations_dir())
    except FileNotFoundError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
