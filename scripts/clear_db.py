"""Delete every user, animal and training log from the configured database."""

import argparse
import asyncio
import logging
import sys

from training_log_api.config import settings
from training_log_api.storage import Database

logger = logging.getLogger("clear_db")


async def clear(database_url: str) -> dict[str, int]:
    db = Database(database_url, min_size=1, max_size=1)
    await db.connect()
    try:
        return await db.clear_all()
    finally:
        await db.disconnect()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--database-url",
        default=None,
        help="PostgreSQL URL (defaults to the DATABASE_* settings)",
    )
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    database_url = args.database_url or settings.get_database_url()
    if not args.yes:
        target = database_url.split("@")[-1]
        answer = input(f"Delete ALL records from {target}? [y/N] ")
        if answer.strip().lower() != "y":
            logger.info("Aborted")
            return 1

    deleted = asyncio.run(clear(database_url))
    for table, count in deleted.items():
        logger.info(f"{table}: {count} deleted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
