# src/ospflab/algorithms/spf.py
# Motor SPF (Dijkstra) al estilo OSPF
# - Heap binario (heapq) sin decrease-key: las entradas obsoletas se saltan al salir
# - Desempate: comparación estricta "<" y, a igual prioridad, sale primero la
#   entrada insertada antes (contador monotónico). El primer predecesor gana.

from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import heapq, itertools, math

from ospflab.core.errors import UnknownSource
from ospflab.core.graph import Graph, Node
from ospflab.logs import get_logger

logger = get_logger(__name__)

INF = math.inf


def dijkstra(graph: Graph, source: Node) -> Tuple[Dict[Node, float], Dict[Node, Optional[Node]]]:
    """
    Ejecuta Dijkstra desde 'source'.
    Retorna:
      - dist: distancia mínima a cada nodo (inf si inalcanzable)
      - prev: predecesor inmediato en la ruta más corta (None si origen o inalcanzable)

    Lanza UnknownSource si 'source' no está en el grafo.
    """
    if source not in graph:
        raise UnknownSource(source)

    dist: Dict[Node, float] = {u: INF for u in graph.nodes()}
    prev: Dict[Node, Optional[Node]] = {u: None for u in graph.nodes()}
    dist[source] = 0

    seq = itertools.count()
    pq: List[Tuple[float, int, Node]] = [(0, next(seq), source)]
    done: set[Node] = set()

    while pq:
        du, _, u = heapq.heappop(pq)
        if u in done or du > dist[u]:
            continue  # entrada obsoleta
        done.add(u)
        for v, w in graph.neighbors(u).items():
            if v in done:
                continue
            alt = du + w
            if alt < dist[v]:
                dist[v] = alt
                prev[v] = u
                heapq.heappush(pq, (alt, next(seq), v))

    logger.debug("dijkstra desde %s: %d/%d nodos alcanzados", source, len(done), len(dist))
    return dist, prev
