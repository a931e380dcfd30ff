# src/ospflab/cli.py
# CLI: tabla de rutas desde un archivo de topología, o servidor HTTP
import argparse
import json
import sys

from ospflab.algorithms.routing_table import compute_routing_table, RoutingResult
from ospflab.api.schemas import RoutingResponse
from ospflab.config import Settings
from ospflab.core.errors import RoutingError
from ospflab.core.topology import load_graph_from_topo
from ospflab.logs import set_global_log_level


def _fmt_cost(x):
    x = float(x)
    return int(x) if x.is_integer() else round(x, 3)


def print_routes(result: RoutingResult) -> None:
    """Imprime la tabla de rutas y las aristas del SPT."""
    me = result.source
    print(f"[{me}] Tabla de rutas (SPF):")
    print("Ruta      : Costo")
    print("------------------")
    for dst in sorted(result.table):
        entry = result.table[dst]
        if entry.reachable:
            print(f"{me} -> {dst} : {_fmt_cost(entry.cost)} (nh={entry.next_hop})")
        else:
            print(f"{me} -> {dst} : inf ({entry.next_hop})")
    edges = ", ".join(f"{a}-{b}" for a, b in result.spt_edges)
    print(f"[{me}] aristas SPT: {edges}")


def _cmd_route(args, settings: Settings) -> int:
    graph = load_graph_from_topo(args.topo or settings.topo_path)
    result = compute_routing_table(graph, args.source)
    if args.json:
        body = RoutingResponse.from_result(result, graph.to_dict())
        print(json.dumps(body.model_dump(by_alias=True), indent=2))
    else:
        print_routes(result)
    return 0


def _cmd_serve(args, settings: Settings) -> int:
    import uvicorn
    from ospflab.api.server import create_app

    if args.topo:
        settings.topo_path = args.topo
    app = create_app(settings)
    uvicorn.run(
        app,
        host=args.host or settings.http_host,
        port=args.port or settings.http_port,
        log_level=settings.log_level.lower(),
    )
    return 0


def main(argv=None) -> int:
    p = argparse.ArgumentParser(prog="ospflab.cli")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING...")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("route", help="Calcula la tabla de rutas desde un router")
    r.add_argument("--topo", default=None, help="ruta a topo-*.json / network_data.json")
    r.add_argument("--source", required=True, help="ID del router origen (p.ej. R1)")
    r.add_argument("--json", action="store_true", help="salida JSON como la API")

    s = sub.add_parser("serve", help="Levanta la API HTTP")
    s.add_argument("--topo", default=None)
    s.add_argument("--host", default=None)
    s.add_argument("--port", type=int, default=0)

    args = p.parse_args(argv)

    try:
        # configuración inválida (LOG_LEVEL, puerto...) también sale con código 2
        settings = Settings.from_env()
        set_global_log_level(args.log_level or settings.log_level)
        if args.cmd == "route":
            return _cmd_route(args, settings)
        return _cmd_serve(args, settings)
    except (RoutingError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
