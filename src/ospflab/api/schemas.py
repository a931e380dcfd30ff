# src/ospflab/api/schemas.py
# Contrato JSON del endpoint /api/calculate (pydantic)
from __future__ import annotations
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ospflab.algorithms.routing_table import RoutingResult
from ospflab.algorithms.spf import INF

Cost = Union[int, float]


class NodeIn(BaseModel):
    id: str
    label: Optional[str] = None


class LinkIn(BaseModel):
    source: str
    target: str
    cost: Cost = 1


class CalculateRequest(BaseModel):
    nodes: List[NodeIn]
    links: List[LinkIn] = []
    source: str = Field(min_length=1)


class RouteOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cost: Optional[Cost]            # null = inalcanzable (JSON no tiene Infinity)
    next_hop: str = Field(alias="nextHop")


class RoutingResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str
    distances: Dict[str, Optional[Cost]]
    next_hop: Dict[str, str] = Field(alias="nextHop")
    predecessor: Dict[str, Optional[str]]
    spt_edges: List[Tuple[str, str]] = Field(alias="sptEdges")
    routing_results: Dict[str, RouteOut] = Field(alias="routingResults")
    network_topology: Dict[str, Dict[str, Cost]] = Field(alias="networkTopology")

    @classmethod
    def from_result(cls, result: RoutingResult, topology: Dict[str, Dict[str, Cost]]) -> "RoutingResponse":
        def _cost(c: float) -> Optional[Cost]:
            return None if c == INF else c

        return cls(
            source=result.source,
            distances={n: _cost(d) for n, d in result.distances.items()},
            next_hop=dict(result.next_hop),
            predecessor=dict(result.predecessor),
            spt_edges=list(result.spt_edges),
            routing_results={
                d: RouteOut(cost=_cost(e.cost), next_hop=e.next_hop)
                for d, e in result.table.items()
            },
            network_topology=topology,
        )


class ErrorOut(BaseModel):
    error: str
    detail: Optional[str] = None
