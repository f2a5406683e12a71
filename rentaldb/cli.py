import argparse
import logging
import sys

from .config import settings
from .db import Base, SessionLocal, drop_db, engine, init_db
from .ddl import DIALECTS, render_schema
from .errors import ConstraintViolation
from .normalization import audit_metadata, render
from .services.records import table_counts
from .services.seed import seed_sample_data

logger = logging.getLogger("rentaldb.cli")


def configure_logging() -> None:
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def cmd_init_db(args) -> int:
    init_db(engine)
    logger.info("Schema created on %s", engine.url.render_as_string(hide_password=True))
    return 0


def cmd_drop_db(args) -> int:
    if not args.yes:
        logger.error("Refusing to drop every table without --yes")
        return 1
    drop_db(engine)
    logger.info("Schema dropped")
    return 0


def cmd_seed(args) -> int:
    init_db(engine)
    db = SessionLocal()
    try:
        counts = seed_sample_data(db, password=args.password)
    finally:
        db.close()
    for name, count in counts.items():
        print(f"{name:20} {count}")
    return 0


def cmd_counts(args) -> int:
    db = SessionLocal()
    try:
        counts = table_counts(db)
    finally:
        db.close()
    for name, count in counts.items():
        print(f"{name:20} {count}")
    return 0


def cmd_ddl(args) -> int:
    sys.stdout.write(render_schema(args.dialect))
    return 0


def cmd_normalize(args) -> int:
    print(render())
    problems = audit_metadata(Base.metadata)
    if problems:
        for problem in problems:
            logger.error(problem)
        return 1
    print("Audit: every table matches its 3NF relation.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rentaldb", description="Property-rental booking schema tools")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init-db", help="Create every table on DATABASE_URL")
    p.set_defaults(func=cmd_init_db)

    p = sub.add_parser("drop-db", help="Drop every table on DATABASE_URL")
    p.add_argument("--yes", action="store_true", help="Confirm dropping all data")
    p.set_defaults(func=cmd_drop_db)

    p = sub.add_parser("seed", help="Create the schema and load the sample data set")
    p.add_argument("--password", default=None, help="Plaintext password for the sample users")
    p.set_defaults(func=cmd_seed)

    p = sub.add_parser("counts", help="Print the row count of every table")
    p.set_defaults(func=cmd_counts)

    p = sub.add_parser("ddl", help="Print CREATE TABLE/INDEX statements")
    p.add_argument("--dialect", choices=sorted(DIALECTS), default="postgresql")
    p.set_defaults(func=cmd_ddl)

    p = sub.add_parser("normalize", help="Print the normalization derivation and audit the live schema")
    p.set_defaults(func=cmd_normalize)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ConstraintViolation as exc:
        logger.error("%s: %s", type(exc).__name__, exc.detail)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
