"""Create the Jobly tables (companies, jobs) from db/schema.sql.

Optionally seeds a couple of companies for local development with --seed.
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

SCHEMA_FILE = Path(__file__).parent.parent / "db" / "schema.sql"

SEED_COMPANIES = [
    ("c1", "C1", 1, "Desc1"),
    ("c2", "C2", 2, "Desc2"),
    ("c3", "C3", 3, "Desc3"),
]


def _extract_statements(sql: str) -> list[str]:
    """Split SQL on ';' and drop comment-only chunks."""
    statements = []
    for chunk in sql.split(";"):
        sql_lines = [line for line in chunk.splitlines() if not line.strip().startswith("--")]
        stmt = "\n".join(sql_lines).strip()
        if stmt:
            statements.append(stmt)
    return statements


async def setup(seed: bool = False) -> None:
    """Create tables if they don't exist, then optionally seed companies."""
    from sqlalchemy import text
    from sqlalchemy.ext.asyncio import create_async_engine

    from app.core.config import to_asyncpg_url

    database_url = os.environ.get("DATABASE_URL_ADMIN") or os.environ.get("DATABASE_URL_APP")
    if not database_url:
        logger.error("DATABASE_URL_ADMIN (or DATABASE_URL_APP) not set")
        sys.exit(1)

    engine = create_async_engine(to_asyncpg_url(database_url))
    try:
        async with engine.begin() as conn:
            for statement in _extract_statements(SCHEMA_FILE.read_text()):
                await conn.execute(text(statement))

            if seed:
                for handle, name, num_employees, description in SEED_COMPANIES:
                    await conn.execute(
                        text("""
                            INSERT INTO companies (handle, name, num_employees, description)
                            VALUES (:handle, :name, :num_employees, :description)
                            ON CONFLICT (handle) DO NOTHING
                        """),
                        {
                            "handle": handle,
                            "name": name,
                            "num_employees": num_employees,
                            "description": description,
                        },
                    )
                logger.info(f"Seeded {len(SEED_COMPANIES)} companies")
    finally:
        await engine.dispose()
    logger.info("Database setup complete")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", action="store_true", help="insert sample companies")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    asyncio.run(setup(seed=args.seed))
