import json

import httpx
import pytest

from streaming_dashboard.schemas.topology import TopologySnapshot

SCENARIO_A_ACTORS = [
    {
        "node": "n1",
        "actors": [
            {"id": 1, "downstream": [2], "fragmentId": 10},
            {"id": 2, "downstream": [], "fragmentId": 10},
        ],
    }
]
SCENARIO_A_VIEWS = [{"id": "mv1", "name": "mv1", "fragmentIds": [10]}]


@pytest.fixture
def scenario_a():
    return {
        "api/actors": SCENARIO_A_ACTORS,
        "api/materialized_views": SCENARIO_A_VIEWS,
    }


@pytest.fixture
def snapshot_dir(tmp_path):
    """Write a payload dict (endpoint path -> records) as a static snapshot."""

    def _write(payload):
        files = {
            "api/actors": "actors.json",
            "api/fragments": "fragments.json",
            "api/materialized_views": "materialized_view.json",
        }
        for path, records in payload.items():
            (tmp_path / files[path]).write_text(json.dumps(records))
        return tmp_path

    return _write


@pytest.fixture
def api_transport():
    """MockTransport serving ``payload`` by URL path; unknown paths are 404."""

    def _transport(payload, calls=None):
        def handler(request):
            path = request.url.path.lstrip("/")
            if calls is not None:
                calls.append(path)
            if path not in payload:
                return httpx.Response(404, json={"detail": "not found"})
            return httpx.Response(200, json=payload[path])

        return httpx.MockTransport(handler)

    return _transport


class FixedLoader:
    """Loader stand-in resolving to a fixed snapshot or error."""

    def __init__(self, snapshot=None, error=None):
        self.snapshot = snapshot or TopologySnapshot()
        self.error = error
        self.calls = 0

    async def load_snapshot(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.snapshot


@pytest.fixture
def fixed_loader():
    return FixedLoader
