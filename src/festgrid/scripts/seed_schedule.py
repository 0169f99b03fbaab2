"""Seed script loading raw festival documents from a JSON export."""

import argparse
import asyncio
import json
import logging
from pathlib import Path

from festgrid.database import create_session_factory
from festgrid.stores import Collection, SQLDataStore

logger = logging.getLogger(__name__)


async def seed_schedule(path: Path, store: SQLDataStore | None = None) -> dict[str, int]:
    """
    Save every document of a JSON export into the store.

    The file holds ``{"activities": [...], "films": [...]}``; each document
    needs an ``id`` key, which is not stored in the document body.

    Returns:
        Number of documents saved per collection
    """
    store = store or SQLDataStore()
    payload = json.loads(path.read_text(encoding="utf-8"))

    counts: dict[str, int] = {}
    for collection in Collection:
        saved = 0
        for document in payload.get(collection.value, []):
            doc_id = document.get("id")
            if not doc_id:
                logger.warning(f"Skipping {collection.value} document without id")
                continue
            data = {key: value for key, value in document.items() if key != "id"}
            await store.save_document(collection, str(doc_id), data)
            saved += 1
        counts[collection.value] = saved
        print(f"Seeded {saved} {collection.value}")

    return counts


def main() -> None:
    parser = argparse.ArgumentParser(description="Load festival documents into the database")
    parser.add_argument("path", type=Path, help="JSON file with 'activities' and 'films' arrays")
    parser.add_argument("--database-url", help="Override the configured database URL")
    parser.add_argument("--echo", action="store_true", help="Log SQL statements")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    store = SQLDataStore(session_factory=create_session_factory(args.database_url, echo=args.echo))
    asyncio.run(seed_schedule(args.path, store))


if __name__ == "__main__":
    main()
