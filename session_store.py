"""Keyed, expiring storage for game snapshots.

Two backends share the same get/put contract: Redis for real deployments,
and a dict with emulated expiry for tests and single-process runs.
"""

import json
import logging
import threading
import time
from typing import Optional, Protocol

import redis

logger = logging.getLogger(__name__)

KEY_PREFIX = 'game:'


class SessionStore(Protocol):
    def get(self, game_id: str) -> Optional[dict]:
        """Return the latest snapshot, or None if never written or expired."""
        ...

    def put(self, game_id: str, snapshot: dict, ttl: int) -> None:
        """Store the snapshot and restart its expiry countdown."""
        ...

    def ping(self) -> bool:
        ...


class RedisSessionStore:
    def __init__(self, client):
        self.client = client

    @classmethod
    def from_url(cls, url):
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def get(self, game_id):
        if not game_id:
            return None
        data = self.client.get(f'{KEY_PREFIX}{game_id}')
        if data is None:
            return None
        try:
            return json.loads(data)
        except ValueError:
            logger.warning(f"Discarding unreadable snapshot for game {game_id}")
            return None

    def put(self, game_id, snapshot, ttl):
        self.client.setex(f'{KEY_PREFIX}{game_id}', ttl, json.dumps(snapshot))

    def ping(self):
        try:
            return bool(self.client.ping())
        except redis.exceptions.RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False


class MemorySessionStore:
    """In-process store. Entries vanish once ``ttl`` seconds pass without a put."""

    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self._entries = {}
        self._lock = threading.Lock()

    def get(self, game_id):
        with self._lock:
            entry = self._entries.get(game_id)
            if entry is None:
                return None
            expires_at, data = entry
            if self.clock() >= expires_at:
                del self._entries[game_id]
                return None
            return json.loads(data)

    def put(self, game_id, snapshot, ttl):
        # stored encoded so callers never share structure with the store
        with self._lock:
            self._entries[game_id] = (self.clock() + ttl, json.dumps(snapshot))

    def ping(self):
        return True
