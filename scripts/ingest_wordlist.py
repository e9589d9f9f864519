#!/usr/bin/env python3
"""
Load a flat Sanskrit wordlist into the lexemes table.

Usage examples:
    # Parse only and preview the first entries
    python scripts/ingest_wordlist.py --file words.txt --dry-run

    # Create the tables and load everything
    python scripts/ingest_wordlist.py --file words.txt

    # Load the first 500 entries into a local SQLite file, in batches of 100
    python scripts/ingest_wordlist.py --file words.txt --database-url sqlite:///vaan.db --limit 500 --batch-size 100

    # Apply a hand-written schema file instead of the model metadata
    python scripts/ingest_wordlist.py --file words.txt --schema db/schema.sql

Environment:
    DATABASE_URL - database connection string (overridden by --database-url)

"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()
from sqlalchemy import insert
from sqlalchemy.orm import sessionmaker

from app.core.logging_config import setup_logging
from app.db import DATABASE_URL, Base, build_engine
# Import all models so create_all sees every table
from app.models import (
    lexeme, word_of_day, baby_name, user, learning,
    video, blog_post, news_item, translation, admin_audit_log,
)
from app.models.lexeme import Lexeme
from app.services.wordlist import chunked, iter_entries

logger = logging.getLogger("app.ingest")

DEFAULT_BATCH_SIZE = 200


def apply_schema(engine, schema_path=None):
    """Create tables from a SQL file when given, else from the model metadata."""
    if schema_path is None:
        logger.info("Creating tables from model metadata...")
        Base.metadata.create_all(bind=engine)
        return

    path = Path(schema_path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found at {path}")
    logger.info(f"Applying schema from {path}...")
    statements = [s.strip() for s in path.read_text(encoding="utf-8").split(";") if s.strip()]
    with engine.begin() as conn:
        for statement in statements:
            conn.exec_driver_sql(statement)


def ingest_entries(session, entries, batch_size=DEFAULT_BATCH_SIZE):
    """Insert entries in batches, skipping lines already loaded. Returns rows inserted."""
    inserted = 0
    batches = list(chunked(entries, batch_size))
    logger.info(f"Beginning ingestion of {len(entries)} entries in batches of {batch_size}.")
    for i, batch in enumerate(batches, start=1):
        raws = [e.raw for e in batch]
        existing = {
            raw for (raw,) in session.query(Lexeme.raw_entry).filter(Lexeme.raw_entry.in_(raws)).all()
        }
        rows = [e.to_row() for e in batch if e.raw not in existing]
        if rows:
            session.execute(insert(Lexeme), rows)
            session.commit()
        inserted += len(rows)
        logger.info(f"Uploaded batch {i}/{len(batches)} ({len(rows)} new, {len(batch) - len(rows)} already present)")
    return inserted


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Ingest a Sanskrit wordlist into the lexemes table")
    parser.add_argument("--file", required=True, help="Path to the UTF-8 wordlist")
    parser.add_argument("--database-url", help="Database URL (defaults to DATABASE_URL)")
    parser.add_argument("--schema", help="SQL schema file to apply before loading")
    parser.add_argument("--skip-schema", action="store_true", help="Do not create tables first")
    parser.add_argument("--dry-run", action="store_true", help="Parse and preview without writing")
    parser.add_argument("--batch-size", type=int, default=DEFAULT_BATCH_SIZE, help="Rows per insert batch")
    parser.add_argument("--limit", type=int, help="Stop after this many parsed entries")
    return parser.parse_args(argv)


def main(argv=None):
    setup_logging()
    args = parse_args(argv)

    wordlist_path = Path(args.file).resolve()
    if not wordlist_path.exists():
        logger.error(f"Wordlist file not found at {wordlist_path}")
        return 1

    entries = list(iter_entries(wordlist_path, args.limit))
    if not entries:
        logger.error("No ingestible entries found in the provided wordlist.")
        return 1

    if args.dry_run:
        logger.info(f"Parsed {len(entries)} entries.")
        for entry in entries[:5]:
            logger.info(f"Preview: {entry.to_row()}")
        return 0

    if args.batch_size < 1:
        logger.error("--batch-size must be at least 1")
        return 1

    engine = build_engine(args.database_url or DATABASE_URL)
    if not args.skip_schema:
        apply_schema(engine, args.schema)

    session = sessionmaker(bind=engine)()
    try:
        inserted = ingest_entries(session, entries, args.batch_size)
    finally:
        session.close()
    logger.info(f"✅ Ingestion complete: {inserted} lexemes inserted.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
