# Tests para la carga de topología y el snapshot recargable
import json
import threading
from pathlib import Path

import pytest

from ospflab.algorithms.routing_table import compute_routing_table
from ospflab.core.errors import MalformedGraph, TopologyLoadError
from ospflab.core.graph import Graph
from ospflab.core.topology import TopologySnapshot, graph_from_document, load_graph_from_topo

CONFIGS = Path(__file__).resolve().parent.parent / "configs"


def _write(tmp_path, name, data):
    p = tmp_path / name
    p.write_text(json.dumps(data), encoding="utf-8")
    return p


def test_bundled_network_data_matches_sample(sample_graph):
    g = load_graph_from_topo(CONFIGS / "network_data.json")
    assert g.frozen
    assert g.to_dict() == sample_graph.to_dict()


def test_envelope_and_bare_adjacency(tmp_path, sample_adjacency):
    env = _write(tmp_path, "topo-ospf.json", {"type": "topo", "config": sample_adjacency})
    bare = _write(tmp_path, "network_data.json", sample_adjacency)
    a = load_graph_from_topo(env)
    b = load_graph_from_topo(str(bare))
    assert a.to_dict() == b.to_dict()
    assert compute_routing_table(a, "R1").next_hop["R4"] == "R2"


def test_missing_file(tmp_path):
    with pytest.raises(TopologyLoadError):
        load_graph_from_topo(tmp_path / "no-existe.json")


def test_invalid_json(tmp_path):
    p = tmp_path / "roto.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(TopologyLoadError):
        load_graph_from_topo(p)


@pytest.mark.parametrize(
    "doc",
    [
        {"type": "names", "config": {}},
        {"A": {"B": 1}, "B": {"A": 1, "C": 1}},      # C no declarado
        {"A": {"B": -3}, "B": {"A": -3}},             # costo negativo
        ["A", "B"],
    ],
)
def test_malformed_documents(doc):
    with pytest.raises(MalformedGraph):
        graph_from_document(doc)


# ---------- Snapshot ----------

def test_snapshot_reload_swaps_graph(tmp_path):
    p = _write(tmp_path, "topo.json", {"A": {"B": 1}, "B": {"A": 1}})
    snap = TopologySnapshot.from_file(p)
    old = snap.current()
    assert snap.current() is old  # se carga una sola vez

    _write(tmp_path, "topo.json", {"A": {"B": 5}, "B": {"A": 5}, "C": {}})
    new = snap.reload()
    assert new is not old
    assert snap.current() is new
    # el snapshot viejo sigue intacto para quien lo esté usando
    assert old.cost("A", "B") == 1
    assert "C" not in old


def test_snapshot_failed_reload_keeps_previous(tmp_path):
    p = _write(tmp_path, "topo.json", {"A": {"B": 1}, "B": {"A": 1}})
    snap = TopologySnapshot.from_file(p)
    g = snap.current()
    p.write_text("{", encoding="utf-8")
    with pytest.raises(TopologyLoadError):
        snap.reload()
    assert snap.current() is g


def test_snapshot_without_loader():
    snap = TopologySnapshot()
    with pytest.raises(TopologyLoadError):
        snap.current()
    g = Graph()
    g.add_edge("A", "B", 1)
    assert snap.replace(g) is g
    assert g.frozen


def test_concurrent_computations_share_snapshot(sample_graph):
    snap = TopologySnapshot(graph=sample_graph)
    results = []

    def work():
        results.append(compute_routing_table(snap.current(), "R1").next_hop)

    threads = [threading.Thread(target=work) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(results) == 8
    assert all(r == results[0] for r in results)
