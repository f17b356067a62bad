from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from streaming_dashboard.schemas.topology import ActorGroup, Fragment


def actor_frame(actor_groups: Sequence[ActorGroup]) -> pd.DataFrame:
    """Flat table of actors, one row each, in snapshot order."""
    rows = [
        {
            "node": group.node,
            "actor_id": actor.id,
            "fragment_id": actor.fragment_id,
            "operator": actor.operator or "",
            "downstream": ", ".join(str(t) for t in actor.downstream),
        }
        for group in actor_groups
        for actor in group.actors
    ]
    return pd.DataFrame(
        rows, columns=["node", "actor_id", "fragment_id", "operator", "downstream"]
    )


def parallelism_bar(fragments: Sequence[Fragment]) -> go.Figure:
    if not fragments:
        return go.Figure().update_layout(
            title="No fragments",
            margin=dict(l=10, r=10, t=30, b=10),
        )
    data = {
        "Fragment": [f"{f.id} {f.kind}".strip() for f in fragments],
        "Actors": [len(f.actor_ids) for f in fragments],
    }
    fig = px.bar(data, x="Fragment", y="Actors", title="Parallelism per Fragment")
    fig.update_layout(height=300, margin=dict(l=10, r=10, t=40, b=10))
    return fig
