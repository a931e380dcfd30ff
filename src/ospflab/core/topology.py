# src/ospflab/core/topology.py
# Carga de topología desde archivo + snapshot recargable
#
# Formatos aceptados:
#   {"type": "topo", "config": {"R1": {"R2": 10}, "R2": {"R1": 10}}}
#   {"R1": {"R2": 10}, "R2": {"R1": 10}}          (network_data.json)

from __future__ import annotations
from pathlib import Path
from typing import Any, Callable, Mapping, Optional
import json, threading

from ospflab.core.errors import MalformedGraph, TopologyLoadError
from ospflab.core.graph import Graph
from ospflab.logs import get_logger

logger = get_logger(__name__)


def graph_from_document(data: Any) -> Graph:
    """Convierte el JSON ya parseado en un grafo congelado."""
    if isinstance(data, Mapping) and "type" in data:
        if data.get("type") != "topo":
            raise MalformedGraph("topo inválido: se espera {'type':'topo','config':{...}}")
        data = data.get("config", {})
    return Graph.from_adjacency(data).freeze()


def load_graph_from_topo(path: str | Path) -> Graph:
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as e:
        raise TopologyLoadError(p, e.strerror or str(e)) from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise TopologyLoadError(p, f"JSON inválido: {e}") from e

    g = graph_from_document(data)
    logger.info("topología cargada desde %s (%d routers)", p, len(g))
    return g


class TopologySnapshot:
    """
    Mantiene el grafo servido. reload() construye un snapshot nuevo y solo
    entonces reemplaza la referencia: un cálculo en curso sigue leyendo el
    grafo viejo completo.
    """
    def __init__(self, loader: Optional[Callable[[], Graph]] = None, graph: Optional[Graph] = None) -> None:
        self._loader = loader
        self._lock = threading.Lock()
        self._graph = graph.freeze() if graph is not None else None

    @classmethod
    def from_file(cls, path: str | Path) -> "TopologySnapshot":
        return cls(lambda: load_graph_from_topo(path))

    def current(self) -> Graph:
        g = self._graph
        if g is None:
            return self.reload()
        return g

    def reload(self) -> Graph:
        if self._loader is None:
            raise TopologyLoadError("snapshot", "no hay loader configurado")
        return self.replace(self._loader())

    def replace(self, graph: Graph) -> Graph:
        graph.freeze()
        with self._lock:
            self._graph = graph
        logger.debug("snapshot de topología reemplazado: %r", graph)
        return graph
