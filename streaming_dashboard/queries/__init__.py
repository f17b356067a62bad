from streaming_dashboard.queries.cluster import LiveTopologySource
from streaming_dashboard.queries.errors import (
    TopologyFetchError,
    TopologyLoadError,
    TopologyParseError,
)
from streaming_dashboard.queries.static import StaticTopologySource
from streaming_dashboard.queries.topology import TopologyLoader, make_loader, make_source

__all__ = [
    "LiveTopologySource",
    "StaticTopologySource",
    "TopologyFetchError",
    "TopologyLoadError",
    "TopologyLoader",
    "TopologyParseError",
    "make_loader",
    "make_source",
]
