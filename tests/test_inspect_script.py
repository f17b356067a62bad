import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "inspect_topology.py"


@pytest.fixture
def inspect_script():
    spec = importlib.util.spec_from_file_location("inspect_topology", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.mark.asyncio
async def test_inspect_bundled_snapshot(inspect_script, monkeypatch, capsys):
    monkeypatch.delenv("STATIC_SNAPSHOT_DIR", raising=False)
    assert await inspect_script.inspect("static") == 0
    out = capsys.readouterr().out
    assert "127.0.0.1:5688" in out
    assert "mv_join (2001)" in out
    assert "=== Warnings (0) ===" in out


@pytest.mark.asyncio
async def test_inspect_reports_load_failure(inspect_script, monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("STATIC_SNAPSHOT_DIR", str(tmp_path))
    assert await inspect_script.inspect("static") == 1
    assert "Failed to load topology" in capsys.readouterr().out
