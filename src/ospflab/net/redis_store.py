# src/ospflab/net/redis_store.py
import os, json
from typing import Any, Optional
from redis.asyncio import Redis
from dotenv import load_dotenv

from ospflab.core.errors import TopologyLoadError
from ospflab.core.graph import Graph
from ospflab.core.topology import graph_from_document
from ospflab.logs import get_logger

logger = get_logger(__name__)


def make_redis_client() -> Redis:
    """
    Crea un cliente Redis asíncrono.
    Prioriza REDIS_URL (usar rediss:// para TLS). Si no existe, arma a partir
    de host/port/db/password/tls.
    """
    load_dotenv()
    url = os.getenv("REDIS_URL")
    if url:
        return Redis.from_url(url, decode_responses=False)

    return Redis(
        host=os.getenv("REDIS_HOST", "127.0.0.1"),
        port=int(os.getenv("REDIS_PORT", "6379")),
        db=int(os.getenv("REDIS_DB", "0")),
        password=os.getenv("REDIS_PASSWORD"),
        ssl=os.getenv("REDIS_TLS", "0") == "1",
        decode_responses=False,
    )


class RedisTopologyStore:
    """
    Topología guardada como JSON bajo una clave:
      GET <key> -> {"type":"topo","config":{...}}
    Cada load() arma un snapshot nuevo; nunca muta el grafo servido.
    """
    def __init__(self, client: Any, key: str = "ospf:topology") -> None:
        self._r = client
        self.key = key

    @classmethod
    def from_env(cls, key: Optional[str] = None) -> "RedisTopologyStore":
        return cls(make_redis_client(), key or os.getenv("OSPF_REDIS_KEY", "ospf:topology"))

    async def load(self) -> Graph:
        raw = await self._r.get(self.key)
        if raw is None:
            raise TopologyLoadError(f"redis:{self.key}", "clave inexistente")
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise TopologyLoadError(f"redis:{self.key}", f"JSON inválido: {e}") from e

        g = graph_from_document(data)
        logger.info("topología cargada desde redis:%s (%d routers)", self.key, len(g))
        return g

    async def save(self, graph: Graph) -> None:
        wire = json.dumps({"type": "topo", "config": graph.to_dict()}, separators=(",", ":"))
        await self._r.set(self.key, wire.encode("utf-8"))
        logger.info("topología publicada en redis:%s", self.key)

    async def close(self) -> None:
        close = getattr(self._r, "aclose", None) or getattr(self._r, "close", None)
        if close is not None:
            await close()
