#!/usr/bin/env python3
"""
Create the ledger tables and load the demo data set.
Run it directly against the database named by DATABASE_URL, or pass --database-url.
Existing ledger rows are replaced.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from dotenv import load_dotenv
from sqlalchemy import create_engine

from marketplace.common.seed import seed_ledger


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the marketplace ledger with demo data")
    parser.add_argument("--database-url", default=None, help="Overrides DATABASE_URL")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    load_dotenv()
    database_url = args.database_url or os.getenv("DATABASE_URL")
    if not database_url:
        print("DATABASE_URL is not set and --database-url was not given.", file=sys.stderr)
        sys.exit(1)

    engine = create_engine(database_url, future=True)
    try:
        counts = seed_ledger(engine)
    finally:
        engine.dispose()
    print(json.dumps({"seeded": counts}, indent=2))


if __name__ == "__main__":
    main()
