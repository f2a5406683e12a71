"""Constraint-violation taxonomy.

Every rejected write surfaces as one of four exceptions, whichever layer
caught it: pydantic at the record-service boundary or the database engine
at flush/commit time.
"""
import logging
import re

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintViolation(Exception):
    """Base class for a write rejected by a schema constraint."""

    def __init__(self, detail: str, table: str | None = None):
        super().__init__(detail)
        self.detail = detail
        self.table = table


class UniquenessViolation(ConstraintViolation):
    pass


class ReferentialIntegrityViolation(ConstraintViolation):
    pass


class DomainCheckViolation(ConstraintViolation):
    pass


class NotNullViolation(ConstraintViolation):
    pass


class RecordNotFound(LookupError):
    """An update or delete named a row that does not exist."""

    def __init__(self, table: str, record_id: str):
        super().__init__(f"{table} {record_id} not found")
        self.table = table
        self.record_id = record_id


# PostgreSQL SQLSTATE class 23 codes
_SQLSTATE = {
    "23505": UniquenessViolation,
    "23503": ReferentialIntegrityViolation,
    "23514": DomainCheckViolation,
    "23502": NotNullViolation,
}

# SQLite and MySQL only report the failure in the message text
_MESSAGE_PATTERNS = [
    (re.compile(r"unique constraint|duplicate entry|duplicate key", re.I), UniquenessViolation),
    (re.compile(r"foreign key constraint", re.I), ReferentialIntegrityViolation),
    (re.compile(r"check constraint", re.I), DomainCheckViolation),
    (re.compile(r"not null constraint|cannot be null", re.I), NotNullViolation),
]

_TABLE_IN_MESSAGE = re.compile(r"constraint failed: (\w+)\.")


def from_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    """Classify an engine ``IntegrityError`` into the violation taxonomy."""
    orig = exc.orig
    detail = str(orig) if orig is not None else str(exc)
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    table = getattr(getattr(orig, "diag", None), "table_name", None)
    if table is None:
        match = _TABLE_IN_MESSAGE.search(detail)
        table = match.group(1) if match else None

    cls = _SQLSTATE.get(code) if code else None
    if cls is None:
        for pattern, candidate in _MESSAGE_PATTERNS:
            if pattern.search(detail):
                cls = candidate
                break
        else:
            logger.warning("Unclassified integrity error: %s", detail)
            cls = ConstraintViolation
    return cls(detail, table=table)


def from_validation_error(exc: ValidationError, table: str | None = None) -> ConstraintViolation:
    """Map a pydantic ``ValidationError`` raised at the insert/update boundary."""
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in errors
    )
    if any(err["type"] == "missing" for err in errors):
        return NotNullViolation(detail, table=table)
    return DomainCheckViolation(detail, table=table)
