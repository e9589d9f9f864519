#!/usr/bin/env python3
"""
Register authored (English) UI strings as translation keys.

Only registered keys are picked up by the background translation batches,
so run this after adding strings to the client.

Usage examples:
    # Register the client's bundled English strings
    python scripts/register_translation_keys.py

    # Register a flat {"key": "English text"} JSON file
    python scripts/register_translation_keys.py --file strings.json

Environment:
    DATABASE_URL - database connection string (overridden by --database-url)

"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()
from sqlalchemy.orm import sessionmaker

from app.core.logging_config import setup_logging
from app.db import DATABASE_URL, build_engine
from app.services.translation import register_keys

logger = logging.getLogger("app.translation")


def load_strings(path=None):
    if path is None:
        from vaan_client.i18n import DEFAULT_STRINGS
        return dict(DEFAULT_STRINGS)
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Strings file must hold a flat JSON object")
    return {str(k): str(v) for k, v in data.items()}


def main(argv=None):
    setup_logging()
    parser = argparse.ArgumentParser(description="Register UI strings for translation")
    parser.add_argument("--file", help="JSON object of key -> English text (defaults to the client strings)")
    parser.add_argument("--database-url", help="Database URL (defaults to DATABASE_URL)")
    args = parser.parse_args(argv)

    try:
        strings = load_strings(args.file)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read strings: {e}")
        return 1

    session = sessionmaker(bind=build_engine(args.database_url or DATABASE_URL))()
    try:
        added = register_keys(session, strings)
    finally:
        session.close()
    logger.info(f"✅ Registered {added} new translation keys ({len(strings)} total)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
