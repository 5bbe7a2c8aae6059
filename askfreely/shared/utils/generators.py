"""Realtime Database push key generator.

Keys are 20 characters: 8 encode the millisecond timestamp, 12 are random.
Keys generated later sort after earlier ones (lexicographically), including
keys generated within the same millisecond, which increment the random part.
"""

import secrets
import time
from threading import Lock

PUSH_CHARS = "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"


class PushIdGenerator:
    """Chronologically ordered, collision-resistant keys (Firebase push format)."""

    def __init__(self) -> None:
        self._last_push_ms = -1
        self._last_rand: list[int] = [0] * 12
        self._lock = Lock()

    def __call__(self, now_ms: int | None = None) -> str:
        now = int(time.time() * 1000) if now_ms is None else now_ms
        with self._lock:
            if now == self._last_push_ms:
                # Same millisecond: bump the random suffix so ordering holds.
                i = 11
                while i >= 0 and self._last_rand[i] == 63:
                    self._last_rand[i] = 0
                    i -= 1
                if i >= 0:
                    self._last_rand[i] += 1
            else:
                self._last_rand = [secrets.randbelow(64) for _ in range(12)]
            self._last_push_ms = now
            rand = list(self._last_rand)

        ts_chars = []
        for _ in range(8):
            ts_chars.append(PUSH_CHARS[now % 64])
            now //= 64
        return "".join(reversed(ts_chars)) + "".join(PUSH_CHARS[r] for r in rand)


generate_push_id = PushIdGenerator()
