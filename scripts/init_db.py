"""
Create the database tables.

Usage:
    python -m scripts.init_db [--database-url URL]
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), ".env"))

from hirewise.config.logging_config import configure_logging
from hirewise.infrastructure.db.database import create_db_engine, init_db


def main():
    parser = argparse.ArgumentParser(description="Create hirewise tables")
    parser.add_argument("--database-url", default=None, help="Override HIREWISE_DATABASE_URL")
    args = parser.parse_args()

    configure_logging()
    init_db(create_db_engine(args.database_url) if args.database_url else None)
    print("Tables ready.")


if __name__ == "__main__":
    main()
