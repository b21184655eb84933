"""
Bulk import an export snapshot into the realtime store.

    python -m app.scripts.seed_realtime path/to/export.json
"""
import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

from app.core.config import REALTIME_BACKEND
from app.core.logging import setup_logging
from app.realtime.context import RealtimeContext
from app.realtime.seed import load_seed_document, seed_realtime
from app.realtime.store import RealtimeStoreError


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the realtime store from a JSON export")
    parser.add_argument("path", help="JSON document with active_orders/delivery_boys/drivers/route_cache/users")
    args = parser.parse_args(argv)

    setup_logging()

    path = Path(args.path)
    if not path.is_absolute():
        path = Path.cwd() / path

    store = RealtimeContext(backend=REALTIME_BACKEND).ensure_ready()
    if store is None:
        logger.error("Realtime store not initialized. Check FIREBASE_* env vars/service account path.")
        return 1

    try:
        document = load_seed_document(path)
        updated = asyncio.run(seed_realtime(store, document))
    except (OSError, ValueError, RealtimeStoreError) as e:
        logger.error(f"Seed failed: {e}")
        return 1

    if not updated:
        logger.error(f"Seed wrote nothing from {path}: every supported root was empty or not an object")
        return 1

    logger.info(f"Seed complete from {path}")
    logger.info(f"Updated keys: {', '.join(updated)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
