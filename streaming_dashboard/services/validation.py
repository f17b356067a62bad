from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from streaming_dashboard.schemas.topology import (
    ActorGroup,
    Fragment,
    MaterializedView,
    TopologyWarning,
)

logger = logging.getLogger("TopologyValidation")

DANGLING_DOWNSTREAM = "dangling_downstream"
DUPLICATE_NODE = "duplicate_node"
DUPLICATE_ACTOR = "duplicate_actor"
UNKNOWN_FRAGMENT = "unknown_fragment"
FRAGMENT_MISMATCH = "fragment_mismatch"


def validate_actor_groups(groups: Sequence[ActorGroup]) -> List[TopologyWarning]:
    """
    Check node uniqueness and actor-id uniqueness, then check that every
    downstream edge lands on an actor present in the snapshot. Downstream ids
    carry no node, so an id repeated on another node is ambiguous and reported
    too.
    Every dangling edge yields its own warning.
    """
    warnings: List[TopologyWarning] = []
    seen_nodes: Dict[str, int] = {}
    actor_nodes: Dict[int, str] = {}

    for group in groups:
        if group.node in seen_nodes:
            warnings.append(
                TopologyWarning(
                    code=DUPLICATE_NODE,
                    message=f"Node {group.node} appears more than once in the snapshot",
                    node=group.node,
                )
            )
        seen_nodes[group.node] = seen_nodes.get(group.node, 0) + 1

        node_actors = set()
        for actor in group.actors:
            if actor.id in node_actors:
                warnings.append(
                    TopologyWarning(
                        code=DUPLICATE_ACTOR,
                        message=f"Actor {actor.id} is listed twice on node {group.node}",
                        node=group.node,
                        actor_id=actor.id,
                    )
                )
            elif actor.id in actor_nodes:
                warnings.append(
                    TopologyWarning(
                        code=DUPLICATE_ACTOR,
                        message=(
                            f"Actor {actor.id} on node {group.node} is also listed "
                            f"on node {actor_nodes[actor.id]}"
                        ),
                        node=group.node,
                        actor_id=actor.id,
                    )
                )
            node_actors.add(actor.id)
            actor_nodes.setdefault(actor.id, group.node)

    for group in groups:
        for actor in group.actors:
            for target in actor.downstream:
                if target not in actor_nodes:
                    warnings.append(
                        TopologyWarning(
                            code=DANGLING_DOWNSTREAM,
                            message=(
                                f"Actor {actor.id} on {group.node} points at "
                                f"unknown downstream actor {target}"
                            ),
                            node=group.node,
                            actor_id=actor.id,
                            target_id=target,
                        )
                    )
    return warnings


def validate_views(
    views: Sequence[MaterializedView], fragments: Sequence[Fragment]
) -> List[TopologyWarning]:
    fragment_ids = {fragment.id for fragment in fragments}
    warnings = []
    for view in views:
        for fragment_id in view.fragment_ids:
            if fragment_id not in fragment_ids:
                warnings.append(
                    TopologyWarning(
                        code=UNKNOWN_FRAGMENT,
                        message=(
                            f"Materialized view {view.name} depends on "
                            f"unknown fragment {fragment_id}"
                        ),
                        target_id=fragment_id,
                    )
                )
    return warnings


def validate_fragments(
    groups: Sequence[ActorGroup], fragments: Sequence[Fragment]
) -> List[TopologyWarning]:
    """Cross-check a fetched fragment listing against the actors' own fragment ids."""
    owner = {}
    for fragment in fragments:
        for actor_id in fragment.actor_ids:
            owner[actor_id] = fragment.id

    warnings = []
    for group in groups:
        for actor in group.actors:
            listed = owner.get(actor.id)
            if listed is not None and listed != actor.fragment_id:
                warnings.append(
                    TopologyWarning(
                        code=FRAGMENT_MISMATCH,
                        message=(
                            f"Actor {actor.id} reports fragment {actor.fragment_id} "
                            f"but the fragment listing places it in {listed}"
                        ),
                        node=group.node,
                        actor_id=actor.id,
                        target_id=listed,
                    )
                )
    return warnings


def log_warnings(warnings: Sequence[TopologyWarning]) -> None:
    for warning in warnings:
        logger.warning("[%s] %s", warning.code, warning.message)
