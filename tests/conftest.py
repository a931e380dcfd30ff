# tests/conftest.py
# Topología de ejemplo R1..R10 compartida por varias pruebas
import pytest

from ospflab.core.graph import Graph

SAMPLE_LINKS = [
    ("R1", "R2", 10), ("R1", "R3", 5),
    ("R2", "R4", 1), ("R2", "R5", 20),
    ("R3", "R6", 10), ("R3", "R7", 2),
    ("R4", "R8", 3), ("R4", "R10", 1),
    ("R5", "R8", 1), ("R5", "R10", 5),
    ("R6", "R7", 2), ("R6", "R9", 4),
    ("R7", "R9", 1),
    ("R9", "R10", 2), ("R9", "R4", 15),
]
SAMPLE_NODES = [f"R{i}" for i in range(1, 11)]


@pytest.fixture
def sample_graph() -> Graph:
    return Graph.from_links(SAMPLE_NODES, SAMPLE_LINKS).freeze()


@pytest.fixture
def sample_adjacency():
    adj = {n: {} for n in SAMPLE_NODES}
    for u, v, w in SAMPLE_LINKS:
        adj[u][v] = w
        adj[v][u] = w
    return adj
