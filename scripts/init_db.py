"""Create the quiz tables and seed the topic catalog.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --no-seed
"""

import argparse

from app.db import repository
from app.db.connection import close_pool
from app.utils.constants import DEFAULT_TOPICS


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Initialise the quiz database.")
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Create tables only, skip the default topics.",
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    try:
        repository.init_schema()
        if not args.no_seed:
            repository.seed_topics(list(DEFAULT_TOPICS))
    finally:
        close_pool()


if __name__ == "__main__":
    main()
