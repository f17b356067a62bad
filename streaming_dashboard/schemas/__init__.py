from streaming_dashboard.schemas.topology import (
    Actor,
    ActorGroup,
    Fragment,
    MaterializedView,
    TopologySnapshot,
    TopologyWarning,
)

__all__ = [
    "Actor",
    "ActorGroup",
    "Fragment",
    "MaterializedView",
    "TopologySnapshot",
    "TopologyWarning",
]
