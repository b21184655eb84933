from __future__ import annotations

import asyncio
import copy
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from firebase_admin import db as rtdb
from firebase_admin.exceptions import FirebaseError
from loguru import logger


class RealtimeStoreError(Exception):
    """A read or write against the realtime store failed (network, auth, rules)."""


def split_path(path: str) -> List[str]:
    return [p for p in (path or "").strip("/").split("/") if p]


class RealtimeStore(ABC):
    """
    Key-path store with partial-update semantics.

    `update(path, payload)` writes every key of `payload` as a child of `path`
    in one call and leaves siblings untouched. A `None` value deletes that child.
    """

    @abstractmethod
    async def get(self, path: str) -> Any:
        ...

    @abstractmethod
    async def update(self, path: str, payload: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    async def remove(self, path: str) -> None:
        ...


# ------------------------------------------------------------------
# In-process tree
# ------------------------------------------------------------------

def _prune(value: Any) -> Any:
    # mirror the hosted database: null leaves and empty objects are not stored
    if isinstance(value, dict):
        cleaned = {}
        for k, v in value.items():
            v = _prune(v)
            if v is not None:
                cleaned[str(k)] = v
        return cleaned or None
    return value


def _assign(node: Dict[str, Any], parts: List[str], value: Any) -> None:
    head = parts[0]
    if len(parts) == 1:
        if value is None:
            node.pop(head, None)
        else:
            node[head] = value
        return

    child = node.get(head)
    if not isinstance(child, dict):
        if value is None:
            return
        child = {}
        node[head] = child

    _assign(child, parts[1:], value)
    if not child:
        node.pop(head, None)


class MemoryRealtimeStore(RealtimeStore):
    """Nested-dict store for local runs and tests. Single event loop only."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._root: Dict[str, Any] = _prune(copy.deepcopy(initial or {})) or {}

    def snapshot(self) -> Dict[str, Any]:
        return copy.deepcopy(self._root)

    async def get(self, path: str) -> Any:
        node: Any = self._root
        for part in split_path(path):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return copy.deepcopy(node)

    async def update(self, path: str, payload: Dict[str, Any]) -> None:
        if not isinstance(payload, dict) or not payload:
            raise ValueError("update payload must be a non-empty dict")

        base = split_path(path)
        for key, value in payload.items():
            parts = base + split_path(str(key))
            if not parts:
                raise ValueError("cannot overwrite the store root with update()")
            _assign(self._root, parts, _prune(copy.deepcopy(value)))

    async def remove(self, path: str) -> None:
        parts = split_path(path)
        if not parts:
            self._root = {}
            return
        _assign(self._root, parts, None)


# ------------------------------------------------------------------
# Firebase Realtime Database
# ------------------------------------------------------------------

class FirebaseRealtimeStore(RealtimeStore):
    """
    Firebase Realtime Database through the Admin SDK.

    The SDK is blocking, so every call runs on a worker thread. SDK errors are
    re-raised as RealtimeStoreError; nothing is retried here.
    """

    def __init__(self, firebase_app):
        self._app = firebase_app

    def _ref(self, path: str):
        return rtdb.reference("/" + "/".join(split_path(path)), app=self._app)

    async def _call(self, op: str, path: str, fn: Callable, *args) -> Any:
        try:
            return await asyncio.to_thread(fn, *args)
        except FirebaseError as e:
            logger.error(f"Realtime {op} failed | path={path} | {e}")
            raise RealtimeStoreError(f"{op} {path} failed: {e}") from e

    async def get(self, path: str) -> Any:
        return await self._call("get", path, self._ref(path).get)

    async def update(self, path: str, payload: Dict[str, Any]) -> None:
        if not isinstance(payload, dict) or not payload:
            raise ValueError("update payload must be a non-empty dict")
        await self._call("update", path, self._ref(path).update, payload)

    async def remove(self, path: str) -> None:
        await self._call("remove", path, self._ref(path).delete)
