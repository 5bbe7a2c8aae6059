"""Reference/query API shared by the REST and in-memory Realtime Database backends.

Mirrors the firebase-admin ``db.reference`` style for the operations we use
(all async):

    await db.reference("events").child(event_id).get()
    await db.reference("questions").child(event_id).push(data)  -> DatabaseReference
    await db.reference("events").child(event_id).update({...})
    await db.reference("events").child(event_id).increment("questionCount")
    await db.reference("emailQueue").order_by_child("status").equal_to("pending").limit_to_first(10).get()

Backends implement the RealtimeDatabase protocol (path-level primitives);
references only build paths and delegate.
"""

from __future__ import annotations

from typing import Any, Protocol


class RealtimeDatabase(Protocol):
    """Path-level primitives a backend must provide."""

    def reference(self, path: str = "") -> "DatabaseReference":
        """Return a reference to path ('' is the root)."""
        ...

    async def read(self, path: str) -> Any:
        """Return the value at path, or None if absent."""
        ...

    async def write(self, path: str, value: Any) -> None:
        """Replace the value at path (None deletes)."""
        ...

    async def patch(self, path: str, values: dict[str, Any]) -> None:
        """Update the given children of path; other children are untouched."""
        ...

    async def append(self, path: str, value: Any) -> str:
        """Store value under a new chronologically ordered key; return the key."""
        ...

    async def increment(self, path: str, field: str, delta: int) -> None:
        """Atomically add delta to the numeric child field of path (missing = 0)."""
        ...

    async def query_equal(
        self, path: str, child: str, value: Any, limit: int | None
    ) -> dict[str, Any]:
        """Return children of path whose child equals value, in key order."""
        ...

    async def aclose(self) -> None:
        """Release resources."""
        ...


def normalize_path(path: str) -> str:
    """Strip leading/trailing slashes and collapse empty segments."""
    return "/".join(part for part in path.split("/") if part)


def join_path(base: str, child: str) -> str:
    return normalize_path(f"{base}/{child}")


class DatabaseReference:
    """Reference to a location in the database."""

    def __init__(self, db: RealtimeDatabase, path: str) -> None:
        self._db = db
        self._path = normalize_path(path)

    @property
    def path(self) -> str:
        return self._path

    @property
    def key(self) -> str | None:
        """Last path segment, or None for the root."""
        return self._path.rsplit("/", 1)[-1] if self._path else None

    def child(self, path: str) -> "DatabaseReference":
        return DatabaseReference(self._db, join_path(self._path, path))

    async def get(self) -> Any:
        """Fetch the value at this location; None if nothing is stored."""
        return await self._db.read(self._path)

    async def set(self, value: Any) -> None:
        """Create or overwrite the value at this location."""
        await self._db.write(self._path, value)

    async def update(self, values: dict[str, Any]) -> None:
        """Update the given children; untouched children keep their values."""
        if not values:
            return
        await self._db.patch(self._path, values)

    async def delete(self) -> None:
        await self._db.write(self._path, None)

    async def push(self, value: Any) -> "DatabaseReference":
        """Append value under a generated key and return the new child reference."""
        key = await self._db.append(self._path, value)
        return self.child(key)

    async def increment(self, field: str, delta: int = 1) -> None:
        """Atomically add delta to a numeric child (server-side, no read-modify-write)."""
        await self._db.increment(self._path, field, delta)

    def order_by_child(self, child: str) -> "Query":
        return Query(self._db, self._path, child)


class Query:
    """Filtered read over the children of a location (equality filter only)."""

    def __init__(self, db: RealtimeDatabase, path: str, order_by: str) -> None:
        self._db = db
        self._path = path
        self._order_by = order_by
        self._equal_to: Any = None
        self._has_equal_to = False
        self._limit: int | None = None

    def equal_to(self, value: Any) -> "Query":
        self._equal_to = value
        self._has_equal_to = True
        return self

    def limit_to_first(self, n: int) -> "Query":
        if n < 1:
            raise ValueError("limit_to_first requires a positive integer")
        self._limit = n
        return self

    async def get(self) -> dict[str, Any]:
        """Run the query; returns {key: value} in key order (empty dict if no match)."""
        if not self._has_equal_to:
            raise ValueError("Query requires equal_to() before get()")
        return await self._db.query_equal(
            self._path, self._order_by, self._equal_to, self._limit
        )
