# Tests para la CLI (subcomando route)
import json
from pathlib import Path

from ospflab.cli import main

TOPO = str(Path(__file__).resolve().parent.parent / "configs" / "network_data.json")


def test_route_prints_table(capsys):
    assert main(["route", "--topo", TOPO, "--source", "R1"]) == 0
    out = capsys.readouterr().out
    assert "[R1] Tabla de rutas (SPF):" in out
    assert "R1 -> R4 : 11 (nh=R2)" in out
    assert "R1 -> R10 : 10 (nh=R3)" in out
    assert "R2-R4" in out


def test_route_json(capsys):
    assert main(["route", "--topo", TOPO, "--source", "R1", "--json"]) == 0
    body = json.loads(capsys.readouterr().out)
    assert body["nextHop"]["R4"] == "R2"
    assert body["distances"]["R9"] == 8


def test_route_unknown_source(capsys):
    assert main(["route", "--topo", TOPO, "--source", "R99"]) == 2
    assert "R99" in capsys.readouterr().err


def test_route_missing_file(tmp_path, capsys):
    assert main(["route", "--topo", str(tmp_path / "x.json"), "--source", "R1"]) == 2
    assert "error:" in capsys.readouterr().err


def test_invalid_log_level_reports_error(monkeypatch, capsys):
    monkeypatch.setenv("LOG_LEVEL", "ruidoso")
    assert main(["route", "--topo", TOPO, "--source", "R1"]) == 2
    assert "error:" in capsys.readouterr().err


def test_invalid_log_level_flag(capsys):
    assert main(["--log-level", "ruidoso", "route", "--topo", TOPO, "--source", "R1"]) == 2
    assert "ruidoso" in capsys.readouterr().err
