#!/usr/bin/env python3
# Publica un archivo de topología en Redis para el backend OSPF_TOPO_BACKEND=redis
import argparse
import asyncio

from dotenv import load_dotenv

from ospflab.core.topology import load_graph_from_topo
from ospflab.net.redis_store import RedisTopologyStore


async def main():
    load_dotenv()

    ap = argparse.ArgumentParser(description="Sube una topología (topo-*.json) a Redis.")
    ap.add_argument("--topo", required=True, help="Ruta a topo-*.json / network_data.json")
    ap.add_argument("--key", default=None, help="Clave destino. Default: OSPF_REDIS_KEY u ospf:topology")
    args = ap.parse_args()

    # valida antes de publicar: nunca subir una topología rota
    graph = load_graph_from_topo(args.topo)

    store = RedisTopologyStore.from_env(args.key)
    try:
        await store.save(graph)
        print(f"[OK] {len(graph)} routers / {len(graph.edges())} enlaces publicados en '{store.key}'")
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
