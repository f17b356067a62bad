from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from streaming_dashboard.schemas.topology import Actor, ActorGroup, Fragment, MaterializedView


def actors_by_fragment(groups: Sequence[ActorGroup]) -> Dict[int, List[Actor]]:
    """Group actors by fragment id, keeping first-seen order."""
    index: Dict[int, List[Actor]] = {}
    for group in groups:
        for actor in group.actors:
            index.setdefault(actor.fragment_id, []).append(actor)
    return index


def derive_fragments(groups: Sequence[ActorGroup]) -> Tuple[Fragment, ...]:
    """
    Rebuild the fragment listing from actor records when the cluster does not
    serve one. The kind is the first non-empty operator label among members.
    """
    fragments = []
    for fragment_id, members in actors_by_fragment(groups).items():
        kind = next((actor.operator for actor in members if actor.operator), "")
        fragments.append(
            Fragment(
                id=fragment_id,
                kind=kind,
                actor_ids=tuple(actor.id for actor in members),
            )
        )
    return tuple(fragments)


def view_actor_ids(
    view: MaterializedView, groups: Sequence[ActorGroup]
) -> Tuple[int, ...]:
    """Actors backing ``view``, in snapshot order."""
    wanted = set(view.fragment_ids)
    return tuple(
        actor.id
        for group in groups
        for actor in group.actors
        if actor.fragment_id in wanted
    )


def fragment_parallelism(groups: Sequence[ActorGroup]) -> Dict[int, int]:
    return {fid: len(members) for fid, members in actors_by_fragment(groups).items()}
