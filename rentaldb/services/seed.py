import logging

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from ..config import settings
from ..db import Base
from ..models import User
from ..security import hash_password
from ..seed_data import SAMPLE
from .records import atomic, table_counts

logger = logging.getLogger(__name__)


def sample_rows(password: str | None = None) -> dict[str, list[dict]]:
    """The sample data set with password hashes filled in for the users."""
    password = password or settings.SEED_PASSWORD
    rows = {table: [dict(row) for row in table_rows] for table, table_rows in SAMPLE.items()}
    for user in rows["users"]:
        user["password_hash"] = hash_password(password)
    return rows


def seed_sample_data(db: Session, password: str | None = None) -> dict[str, int]:
    """
    Insert the sample data set in a single transaction.
    Skips when the users table already holds rows; returns per-table row counts.
    """
    if db.scalars(select(User.id).limit(1)).first() is not None:
        logger.info("Users already present; skipping sample data.")
        return table_counts(db)

    rows = sample_rows(password)
    with atomic(db):
        for table in Base.metadata.sorted_tables:
            table_rows = rows.get(table.name)
            if table_rows:
                db.execute(insert(table), table_rows)

    counts = table_counts(db)
    logger.info("Sample data loaded: %s", ", ".join(f"{name}={n}" for name, n in counts.items()))
    return counts
