# src/ospflab/algorithms/routing_table.py
# Tabla de rutas + árbol SPT a partir del mapa de predecesores
# - next hop = vecino del origen por el que sale la ruta más corta
# - aristas SPT = pares (nodo, predecesor) normalizados y sin duplicados
# - compute_routing_table(): punto de entrada (grafo, origen) -> RoutingResult

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ospflab.algorithms.spf import INF, dijkstra
from ospflab.core.errors import InvariantViolation
from ospflab.core.graph import Graph, Node
from ospflab.logs import get_logger

logger = get_logger(__name__)

UNREACHABLE = "Unreachable"

SptEdge = Tuple[Node, Node]


@dataclass(frozen=True)
class RouteEntry:
    destination: Node
    cost: float
    next_hop: Node  # UNREACHABLE si no hay ruta

    @property
    def reachable(self) -> bool:
        return self.cost != INF


@dataclass
class RoutingResult:
    source: Node
    distances: Dict[Node, float]
    next_hop: Dict[Node, Node]
    predecessor: Dict[Node, Optional[Node]]
    spt_edges: List[SptEdge]
    table: Dict[Node, RouteEntry] = field(default_factory=dict)


def _violation(msg: str) -> InvariantViolation:
    logger.error(msg)
    return InvariantViolation(msg)


def first_hop(prev: Dict[Node, Optional[Node]], source: Node, dest: Node) -> Node:
    """
    Recorre dest <- prev[dest] <- ... hasta el nodo cuyo predecesor es 'source'.
    Un destino conectado directamente es su propio next hop.

    Lanza InvariantViolation si la cadena repite un nodo, se corta antes de
    llegar al origen o excede len(prev) pasos.
    """
    if dest == source:
        raise ValueError("el origen no tiene next hop")
    seen = {dest}
    cur = dest
    for _ in range(len(prev) + 1):
        p = prev.get(cur)
        if p == source:
            return cur
        if p is None:
            raise _violation(f"cadena de predecesores de {dest} se corta en {cur} sin llegar a {source}")
        if p in seen:
            raise _violation(f"ciclo de predecesores al resolver {dest}: {p} repetido")
        seen.add(p)
        cur = p
    raise _violation(f"cadena de predecesores de {dest} no termina")


def reconstruct_path(prev: Dict[Node, Optional[Node]], source: Node, target: Node) -> List[Node]:
    """
    Reconstruye la ruta source -> target usando 'prev'.
    Retorna lista vacía si 'target' es inalcanzable (o desconocido).
    """
    if target == source:
        return [source]
    if prev.get(target) is None:
        return []
    path = [target]
    seen = {target}
    cur = target
    while cur != source:
        cur = prev.get(cur)
        if cur is None:
            raise _violation(f"cadena de predecesores de {target} se corta sin llegar a {source}")
        if cur in seen:
            raise _violation(f"ciclo de predecesores al reconstruir ruta a {target}")
        seen.add(cur)
        path.append(cur)
    path.reverse()
    return path


def spt_edges(prev: Dict[Node, Optional[Node]], source: Node) -> List[SptEdge]:
    """
    Aristas del árbol de caminos más cortos, como pares ordenados y únicos.
    Incluye (nodo, source) para los vecinos directos del origen.
    """
    edges = set()
    for node, p in prev.items():
        if p is None or node == source:
            continue
        a, b = sorted((node, p))
        edges.add((a, b))
    return sorted(edges)


def derive_routing_table(
    graph: Graph,
    source: Node,
    dist: Dict[Node, float],
    prev: Dict[Node, Optional[Node]],
) -> Tuple[Dict[Node, RouteEntry], List[SptEdge]]:
    table: Dict[Node, RouteEntry] = {}
    for dest in graph.nodes():
        if dest == source:
            continue
        cost = dist.get(dest, INF)
        if cost == INF:
            table[dest] = RouteEntry(dest, INF, UNREACHABLE)
        else:
            table[dest] = RouteEntry(dest, cost, first_hop(prev, source, dest))
    return table, spt_edges(prev, source)


def compute_routing_table(graph: Graph, source: Node) -> RoutingResult:
    """
    Función de conveniencia:
      - corre Dijkstra (UnknownSource si el origen no existe)
      - arma la tabla de next hops y las aristas SPT
    Sin estado entre llamadas: misma entrada, mismo resultado.
    """
    dist, prev = dijkstra(graph, source)
    table, edges = derive_routing_table(graph, source, dist, prev)
    result = RoutingResult(
        source=source,
        distances=dist,
        next_hop={d: e.next_hop for d, e in table.items()},
        predecessor=prev,
        spt_edges=edges,
        table=table,
    )
    logger.info("SPT calculado para %s: %d aristas", source, len(edges))
    return result
