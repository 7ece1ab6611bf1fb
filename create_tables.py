# create_tables.py
import argparse

from taskboard.config.settings import settings
from taskboard.database import engine, init_db
from taskboard.logging_setup import setup_logging


def create_tables(drop: bool = False, bind=None) -> bool:
    """Create all tables, dropping the existing ones first when asked"""
    try:
        init_db(bind=bind or engine, drop=drop)
        print("✅ All tables created successfully!")
        return True
    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        return False


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create the task dashboard tables")
    parser.add_argument("--drop", action="store_true", help="drop existing tables first (destroys data)")
    args = parser.parse_args(argv)

    setup_logging(settings.LOG_LEVEL)
    if not create_tables(drop=args.drop):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
