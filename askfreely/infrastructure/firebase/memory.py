"""In-memory Realtime Database (DATABASE_BACKEND=memory).

Same reference API as the REST client over a nested dict. Used for local
development and tests; state lives and dies with the process.
"""

from __future__ import annotations

import copy
from threading import Lock
from typing import Any

from askfreely.infrastructure.firebase.reference import DatabaseReference, normalize_path
from askfreely.shared.utils.generators import generate_push_id


def _prune(value: Any) -> Any:
    """Drop None children and empty objects (the database stores neither)."""
    if isinstance(value, dict):
        pruned = {k: _prune(v) for k, v in value.items()}
        pruned = {k: v for k, v in pruned.items() if v is not None}
        return pruned or None
    return value


class InMemoryRealtimeDatabase:
    """Nested-dict database with atomic per-call writes."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._root: dict[str, Any] = _prune(copy.deepcopy(initial or {})) or {}
        self._lock = Lock()

    def reference(self, path: str = "") -> DatabaseReference:
        return DatabaseReference(self, path)

    async def aclose(self) -> None:
        return None

    def snapshot(self) -> dict[str, Any]:
        """Deep copy of the whole tree (tests)."""
        return copy.deepcopy(self._root)

    def _lookup(self, path: str) -> Any:
        node: Any = self._root
        for part in normalize_path(path).split("/") if path.strip("/") else []:
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def _put(self, path: str, value: Any) -> None:
        parts = normalize_path(path).split("/") if path.strip("/") else []
        value = _prune(copy.deepcopy(value))
        if not parts:
            self._root = value if isinstance(value, dict) else {}
            return
        node = self._root
        trail: list[tuple[dict, str]] = []
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                if value is None:
                    return
                child = {}
                node[part] = child
            trail.append((node, part))
            node = child
        if value is None:
            node.pop(parts[-1], None)
        else:
            node[parts[-1]] = value
        # Removing the last child of a parent removes the parent.
        for parent, key in reversed(trail):
            if parent[key]:
                break
            del parent[key]

    async def read(self, path: str) -> Any:
        with self._lock:
            return copy.deepcopy(self._lookup(path))

    async def write(self, path: str, value: Any) -> None:
        with self._lock:
            self._put(path, value)

    async def patch(self, path: str, values: dict[str, Any]) -> None:
        with self._lock:
            for child, value in values.items():
                self._put(f"{path}/{child}", value)

    async def append(self, path: str, value: Any) -> str:
        key = generate_push_id()
        with self._lock:
            self._put(f"{path}/{key}", value)
        return key

    async def increment(self, path: str, field: str, delta: int) -> None:
        with self._lock:
            current = self._lookup(f"{path}/{field}")
            base = current if isinstance(current, (int, float)) and not isinstance(current, bool) else 0
            self._put(f"{path}/{field}", base + delta)

    async def query_equal(
        self, path: str, child: str, value: Any, limit: int | None
    ) -> dict[str, Any]:
        with self._lock:
            node = self._lookup(path)
            if not isinstance(node, dict):
                return {}
            matches: dict[str, Any] = {}
            for key in sorted(node):
                item = node[key]
                if isinstance(item, dict) and item.get(child) == value:
                    matches[key] = copy.deepcopy(item)
                    if limit and len(matches) >= limit:
                        break
            return matches
