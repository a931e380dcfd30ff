# src/ospflab/api/server.py
# Frontera HTTP (FastAPI) sobre el cálculo SPF
#   GET  /api/calculate?start=R1   -> sobre la topología servida
#   POST /api/calculate            -> sobre la topología enviada en el body
#   GET  /api/topology             -> adyacencia servida
#   POST /api/topology/reload      -> snapshot nuevo (archivo o redis)
from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ospflab.algorithms.routing_table import compute_routing_table
from ospflab.api.schemas import CalculateRequest, ErrorOut, RoutingResponse
from ospflab.config import Settings
from ospflab.core.errors import InvariantViolation, MalformedGraph, TopologyLoadError, UnknownSource
from ospflab.core.graph import Graph
from ospflab.core.topology import TopologySnapshot
from ospflab.logs import get_logger

logger = get_logger(__name__)

INVALID_START = "Invalid or missing start router ID."


def _error(status: int, error: str, detail: Optional[str] = None) -> JSONResponse:
    return JSONResponse(status_code=status, content=ErrorOut(error=error, detail=detail).model_dump())


def create_app(
    settings: Optional[Settings] = None,
    snapshot: Optional[TopologySnapshot] = None,
    store=None,
) -> FastAPI:
    """
    Arma la app. 'snapshot' permite inyectar un grafo fijo (tests);
    'store' es un RedisTopologyStore cuando el backend es redis.
    """
    settings = settings or Settings.from_env()

    if store is None and settings.topo_backend == "redis":
        from ospflab.net.redis_store import RedisTopologyStore
        store = RedisTopologyStore.from_env(settings.redis_key)

    if snapshot is None:
        if store is not None:
            snapshot = TopologySnapshot()
        else:
            snapshot = TopologySnapshot.from_file(settings.topo_path)

    async def _store_graph() -> Graph:
        try:
            return await store.load()
        except MalformedGraph as e:
            raise TopologyLoadError(f"redis:{settings.redis_key}", str(e)) from e

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if store is not None:
            snapshot.replace(await _store_graph())
        yield
        if store is not None:
            await store.close()

    app = FastAPI(title="ospflab", lifespan=lifespan)
    app.state.settings = settings
    app.state.snapshot = snapshot

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # ---- traducción de errores del núcleo ----
    @app.exception_handler(UnknownSource)
    async def _unknown_source(request: Request, exc: UnknownSource):
        logger.warning("origen rechazado: %s", exc.source)
        return _error(400, INVALID_START, str(exc))

    @app.exception_handler(MalformedGraph)
    async def _malformed(request: Request, exc: MalformedGraph):
        return _error(400, "Malformed network topology.", str(exc))

    @app.exception_handler(TopologyLoadError)
    async def _load_error(request: Request, exc: TopologyLoadError):
        logger.error("%s", exc)
        return _error(503, "Network topology unavailable.", str(exc))

    @app.exception_handler(InvariantViolation)
    async def _invariant(request: Request, exc: InvariantViolation):
        logger.error("fallo interno calculando SPT: %s", exc)
        return _error(500, "Internal routing error.", str(exc))

    def _served_graph() -> Graph:
        try:
            return snapshot.current()
        except MalformedGraph as e:
            # topología del servidor inválida: no es culpa del cliente
            raise TopologyLoadError(settings.topo_path, str(e)) from e

    # ---- endpoints ----
    @app.get("/api/calculate", response_model=RoutingResponse)
    def calculate(start: Optional[str] = None):
        if not start:
            return _error(400, INVALID_START)
        graph = _served_graph()
        result = compute_routing_table(graph, start)
        logger.info("SPF Tree computed for source: %s", start)
        return RoutingResponse.from_result(result, graph.to_dict())

    @app.post("/api/calculate", response_model=RoutingResponse)
    def calculate_custom(req: CalculateRequest):
        graph = Graph.from_links(
            [n.id for n in req.nodes],
            [(l.source, l.target, l.cost) for l in req.links],
        ).freeze()
        result = compute_routing_table(graph, req.source)
        return RoutingResponse.from_result(result, graph.to_dict())

    @app.get("/api/topology")
    def topology():
        return _served_graph().to_dict()

    @app.post("/api/topology/reload")
    async def reload_topology():
        if store is not None:
            graph = snapshot.replace(await _store_graph())
        else:
            try:
                graph = snapshot.reload()
            except MalformedGraph as e:
                raise TopologyLoadError(settings.topo_path, str(e)) from e
        return {"routers": len(graph), "links": len(graph.edges())}

    return app
