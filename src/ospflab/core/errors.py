# src/ospflab/core/errors.py
# Taxonomía de errores del cálculo SPF.
# El núcleo lanza; la frontera (API / CLI) traduce a 400/500/503 o exit code.
from typing import Any


class RoutingError(Exception):
    """Base de todos los errores de ospflab."""


class UnknownSource(RoutingError):
    """El router origen no existe en el grafo (error del llamador)."""

    def __init__(self, source: Any) -> None:
        self.source = source
        super().__init__(f"router origen desconocido: {source!r}")


class MalformedGraph(RoutingError):
    """Topología inválida: costo negativo, vecino colgante, asimetría..."""


class InvariantViolation(RoutingError):
    """Ciclo o cadena de predecesores que no termina en el origen."""


class TopologyLoadError(RoutingError):
    """No se pudo obtener la topología (archivo/clave ausente, JSON roto)."""

    def __init__(self, where: Any, reason: str) -> None:
        self.where = where
        self.reason = reason
        super().__init__(f"no se pudo cargar topología desde {where}: {reason}")
