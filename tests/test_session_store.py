"""Expiry behavior of the memory store and key handling of the Redis store."""

import json

import redis

from session_store import KEY_PREFIX, MemorySessionStore, RedisSessionStore


class FakeRedis:
    def __init__(self):
        self.data = {}
        self.ttls = {}
        self.fail = False

    def get(self, key):
        return self.data.get(key)

    def setex(self, key, ttl, value):
        self.data[key] = value
        self.ttls[key] = ttl

    def ping(self):
        if self.fail:
            raise redis.exceptions.ConnectionError('connection refused')
        return True


def test_memory_store_get_missing(store):
    assert store.get('nope') is None


def test_memory_store_expires_entries(store, clock):
    store.put('abc', {'started': False}, 60)
    clock.advance(59)
    assert store.get('abc') == {'started': False}
    clock.advance(1)
    assert store.get('abc') is None


def test_memory_store_put_restarts_countdown(store, clock):
    store.put('abc', {'n': 1}, 60)
    clock.advance(50)
    store.put('abc', {'n': 2}, 60)
    clock.advance(50)
    assert store.get('abc') == {'n': 2}


def test_memory_store_returns_copies(store):
    snapshot = {'board': [[None]]}
    store.put('abc', snapshot, 60)
    snapshot['board'][0][0] = 0
    fetched = store.get('abc')
    fetched['board'][0][0] = 1
    assert store.get('abc') == {'board': [[None]]}


def test_memory_store_ping():
    assert MemorySessionStore().ping() is True


def test_redis_store_writes_json_with_ttl():
    client = FakeRedis()
    store = RedisSessionStore(client)

    store.put('abc', {'winner': None, 'current': 1}, 60)

    assert json.loads(client.data[f'{KEY_PREFIX}abc']) == {'winner': None, 'current': 1}
    assert client.ttls[f'{KEY_PREFIX}abc'] == 60
    assert store.get('abc') == {'winner': None, 'current': 1}


def test_redis_store_missing_and_blank_ids():
    store = RedisSessionStore(FakeRedis())
    assert store.get('abc') is None
    assert store.get('') is None


def test_redis_store_treats_corrupt_snapshot_as_absent():
    client = FakeRedis()
    client.data[f'{KEY_PREFIX}abc'] = '{not json'
    assert RedisSessionStore(client).get('abc') is None


def test_redis_store_ping_failure_reported():
    client = FakeRedis()
    client.fail = True
    assert RedisSessionStore(client).ping() is False
