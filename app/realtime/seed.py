from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from loguru import logger

from app.core.realtime_config import SEEDABLE_ROOTS
from app.realtime.store import RealtimeStore


def load_seed_document(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"JSON file not found: {path}")
    document = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(document, dict):
        raise ValueError("Seed document must be a JSON object")
    return document


def select_seed_payload(document: Dict[str, Any]) -> Dict[str, Any]:
    """Keep the recognised top-level roots; anything else is ignored."""
    payload = {key: document[key] for key in SEEDABLE_ROOTS if key in document}
    if not payload:
        raise ValueError(
            f"No supported keys found in json. Expected any of: {', '.join(SEEDABLE_ROOTS)}"
        )
    return payload


async def seed_realtime(store: RealtimeStore, document: Dict[str, Any]) -> List[str]:
    """
    Patch each recognised root with the document's children.

    Children named in the document are overwritten, children that exist only
    in the store are kept.
    """
    payload = select_seed_payload(document)
    updated: List[str] = []

    for root, children in payload.items():
        if not isinstance(children, dict) or not children:
            logger.warning(f"Seed skipped root with no children | root={root}")
            continue
        await store.update(root, children)
        updated.append(root)

    logger.info(f"Seed complete | roots={', '.join(updated) or '-'}")
    return updated
