# src/ospflab/core/graph.py
# Modelo de grafo para el cálculo SPF
# - Grafo no dirigido con costos por enlace: nodo -> {vecino: costo}
# - Se construye con add_edge/add_edges_from y luego se "congela" (freeze)
# - Los snapshots congelados se comparten entre cálculos concurrentes sin locks

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple
import math

from ospflab.core.errors import MalformedGraph

# -----------------------
#   Tipos y estructura
# -----------------------

Node = str

_EMPTY: Mapping[Node, float] = MappingProxyType({})


@dataclass(frozen=True)
class Edge:
    u: Node
    v: Node
    w: float = 1.0


def _check_cost(u: Node, v: Node, w: Any) -> float:
    # bool es subclase de int; un "true" en el JSON no es un costo
    if isinstance(w, bool) or not isinstance(w, (int, float)):
        raise MalformedGraph(f"costo no numérico en {u}-{v}: {w!r}")
    if not math.isfinite(w) or w < 0:
        raise MalformedGraph(f"costo inválido en {u}-{v}: {w!r} (debe ser finito y >= 0)")
    return w


class Graph:
    """
    Grafo no dirigido con lista de adyacencia tipo dict.
    Cada enlace se guarda en ambos sentidos con el mismo costo.
    """
    def __init__(self) -> None:
        self.adj: Dict[Node, Dict[Node, float]] = {}
        self._frozen = False

    # ---- construcción ----
    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("grafo congelado: construye un snapshot nuevo")

    def add_node(self, u: Node) -> None:
        self._ensure_mutable()
        self.adj.setdefault(u, {})

    def add_edge(self, u: Node, v: Node, w: float = 1.0) -> None:
        self._ensure_mutable()
        if u == v:
            raise MalformedGraph(f"enlace de {u} hacia sí mismo")
        w = _check_cost(u, v, w)
        # enlace duplicado: se queda el menor costo
        old = self.adj.get(u, {}).get(v)
        if old is not None and old <= w:
            return
        self.adj.setdefault(u, {})[v] = w
        self.adj.setdefault(v, {})[u] = w

    def add_edges_from(self, edges: Iterable[Edge]) -> None:
        for e in edges:
            self.add_edge(e.u, e.v, e.w)

    def freeze(self) -> "Graph":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ---- consultas ----
    def neighbors(self, u: Node) -> Mapping[Node, float]:
        nbrs = self.adj.get(u)
        if nbrs is None:
            return _EMPTY
        return MappingProxyType(nbrs)

    def cost(self, u: Node, v: Node) -> float:
        try:
            return self.adj[u][v]
        except KeyError:
            raise MalformedGraph(f"no existe enlace {u}-{v}") from None

    def nodes(self) -> List[Node]:
        return list(self.adj.keys())

    def edges(self) -> List[Tuple[Node, Node, float]]:
        """Cada enlace una sola vez, con extremos ordenados."""
        out: List[Tuple[Node, Node, float]] = []
        for u, nbrs in self.adj.items():
            for v, w in nbrs.items():
                if u < v:
                    out.append((u, v, w))
        out.sort()
        return out

    def to_dict(self) -> Dict[Node, Dict[Node, float]]:
        return {u: dict(nbrs) for u, nbrs in self.adj.items()}

    def __contains__(self, u: object) -> bool:
        return u in self.adj

    def __len__(self) -> int:
        return len(self.adj)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.adj)}, edges={len(self.edges())}, frozen={self._frozen})"

    # -----------------------
    #   Constructores
    # -----------------------

    @classmethod
    def from_adjacency(cls, config: Mapping[Node, Any]) -> "Graph":
        """
        Construye desde el formato de adyacencia:
          {"A": {"B": 3, "C": 5}, "B": {"A": 3}, "C": {"A": 5}}
        o con listas (costo implícito 1):
          {"A": ["B"], "B": ["A"]}

        Valida simetría y que no haya vecinos colgantes.
        """
        if not isinstance(config, Mapping):
            raise MalformedGraph("la topología debe ser un objeto nodo -> vecinos")

        declared: Dict[Node, Dict[Node, Any]] = {}
        for u, neigh in config.items():
            if isinstance(neigh, list):
                declared[str(u)] = {str(v): 1 for v in neigh}
            elif isinstance(neigh, Mapping):
                declared[str(u)] = {str(v): w for v, w in neigh.items()}
            else:
                raise MalformedGraph(f"vecinos de {u} deben ser list o dict")

        g = cls()
        for u in declared:
            g.add_node(u)
        for u, nbrs in declared.items():
            for v, w in nbrs.items():
                if v not in declared:
                    raise MalformedGraph(f"{u} referencia a vecino inexistente {v}")
                back = declared[v].get(u)
                if back is None:
                    raise MalformedGraph(f"enlace asimétrico: {u}->{v} sin {v}->{u}")
                if back != w:
                    raise MalformedGraph(f"costos asimétricos en {u}-{v}: {w!r} vs {back!r}")
                g.add_edge(u, v, w)
        return g

    @classmethod
    def from_links(cls, nodes: Iterable[Node], links: Iterable[Tuple[Node, Node, float]]) -> "Graph":
        """Construye desde lista de nodos + ternas (origen, destino, costo)."""
        g = cls()
        for u in nodes:
            g.add_node(u)
        for u, v, w in links:
            for end in (u, v):
                if end not in g.adj:
                    raise MalformedGraph(f"enlace {u}-{v} referencia a nodo inexistente {end}")
            g.add_edge(u, v, w)
        return g
