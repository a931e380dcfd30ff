# Tests para RedisTopologyStore (cliente falso, sin servidor Redis)
import asyncio
import json

import pytest

from ospflab.core.errors import MalformedGraph, TopologyLoadError
from ospflab.net.redis_store import RedisTopologyStore, make_redis_client


class FakeRedis:
    def __init__(self):
        self.data = {}
        self.closed = False

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value

    async def aclose(self):
        self.closed = True


def test_save_then_load(sample_graph):
    r = FakeRedis()
    store = RedisTopologyStore(r, key="ospf:test")

    async def go():
        await store.save(sample_graph)
        return await store.load()

    g = asyncio.run(go())
    assert g.frozen
    assert g is not sample_graph
    assert g.to_dict() == sample_graph.to_dict()
    # formato de sobre del lab
    assert json.loads(r.data["ospf:test"])["type"] == "topo"


def test_load_accepts_str_payload():
    r = FakeRedis()
    r.data["k"] = json.dumps({"A": {"B": 2}, "B": {"A": 2}})
    g = asyncio.run(RedisTopologyStore(r, key="k").load())
    assert g.cost("A", "B") == 2


def test_missing_key():
    store = RedisTopologyStore(FakeRedis(), key="vacía")
    with pytest.raises(TopologyLoadError):
        asyncio.run(store.load())


def test_bad_payloads():
    r = FakeRedis()
    r.data["roto"] = b"{"
    r.data["asim"] = json.dumps({"A": {"B": 1}, "B": {}}).encode()
    with pytest.raises(TopologyLoadError):
        asyncio.run(RedisTopologyStore(r, key="roto").load())
    with pytest.raises(MalformedGraph):
        asyncio.run(RedisTopologyStore(r, key="asim").load())


def test_close():
    r = FakeRedis()
    asyncio.run(RedisTopologyStore(r).close())
    assert r.closed


def test_make_client_from_env(monkeypatch):
    monkeypatch.setenv("REDIS_HOST", "10.0.0.9")
    monkeypatch.setenv("REDIS_PORT", "6380")
    monkeypatch.delenv("REDIS_URL", raising=False)
    r = make_redis_client()
    kw = r.connection_pool.connection_kwargs
    assert kw["host"] == "10.0.0.9"
    assert kw["port"] == 6380
