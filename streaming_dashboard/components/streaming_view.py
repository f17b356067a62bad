from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from streamlit_agraph import Config, Edge, Node, agraph

from streaming_dashboard.schemas.topology import ActorGroup, MaterializedView
from streaming_dashboard.services.topology_index import view_actor_ids

_FRAGMENT_PALETTE = [
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#17becf",
]
_VIEW_COLOR = "#6a1b9a"


def actor_node_id(actor_id: int) -> str:
    return f"actor:{actor_id}"


def view_node_id(view_id: str) -> str:
    return f"mv:{view_id}"


def _fragment_colors(actor_groups: Sequence[ActorGroup]) -> Dict[int, str]:
    colors: Dict[int, str] = {}
    for group in actor_groups:
        for actor in group.actors:
            if actor.fragment_id not in colors:
                colors[actor.fragment_id] = _FRAGMENT_PALETTE[len(colors) % len(_FRAGMENT_PALETTE)]
    return colors


def build_nodes(
    actor_groups: Sequence[ActorGroup], mv_list: Sequence[MaterializedView]
) -> List[Node]:
    """One node per actor (coloured by fragment) plus one per materialized view."""
    colors = _fragment_colors(actor_groups)
    nodes = []
    drawn = set()
    for group in actor_groups:
        for actor in group.actors:
            # a repeated id is reported by validation; draw its first occurrence
            if actor.id in drawn:
                continue
            drawn.add(actor.id)
            label = f"#{actor.id}"
            if actor.operator:
                label = f"{label} {actor.operator}"
            nodes.append(
                Node(
                    id=actor_node_id(actor.id),
                    label=label,
                    title=f"node {group.node} / fragment {actor.fragment_id}",
                    size=15,
                    color=colors[actor.fragment_id],
                )
            )
    for view in mv_list:
        nodes.append(
            Node(
                id=view_node_id(view.id),
                label=view.name,
                title=f"materialized view {view.id}",
                size=25,
                shape="box",
                color=_VIEW_COLOR,
            )
        )
    return nodes


def edge_pairs(
    actor_groups: Sequence[ActorGroup], mv_list: Sequence[MaterializedView]
) -> List[Tuple[str, str]]:
    """
    Actor fan-out edges plus edges from each view's sink actors to the view.
    Edges to actors missing from the snapshot are not drawn; they surface as
    validation warnings instead.
    """
    downstream_of: Dict[int, Tuple[int, ...]] = {}
    for group in actor_groups:
        for actor in group.actors:
            downstream_of.setdefault(actor.id, actor.downstream)
    pairs = []
    for actor_id, targets in downstream_of.items():
        for target in targets:
            if target in downstream_of:
                pairs.append((actor_node_id(actor_id), actor_node_id(target)))

    for view in mv_list:
        members = tuple(dict.fromkeys(view_actor_ids(view, actor_groups)))
        member_set = set(members)
        for actor_id in members:
            # sink: nothing downstream among the view's own actors
            if not member_set.intersection(downstream_of[actor_id]):
                pairs.append((actor_node_id(actor_id), view_node_id(view.id)))
    return pairs


def build_edges(
    actor_groups: Sequence[ActorGroup], mv_list: Sequence[MaterializedView]
) -> List[Edge]:
    return [Edge(source=source, target=target) for source, target in edge_pairs(actor_groups, mv_list)]


def render_streaming_view(
    actor_groups: Sequence[ActorGroup],
    mv_list: Sequence[MaterializedView],
    height: int = 600,
) -> Optional[str]:
    nodes = build_nodes(actor_groups, mv_list)
    edges = build_edges(actor_groups, mv_list)
    config = Config(
        width="100%",
        height=height,
        directed=True,
        physics=False,
        hierarchical=True,
        layout={
            "hierarchical": {
                "enabled": True,
                "direction": "LR",
                "sortMethod": "directed",
            }
        },
        nodeHighlightBehavior=True,
        highlightColor="#F7A7A6",
        collapsible=False,
    )
    return agraph(nodes=nodes, edges=edges, config=config)
