import pytest
from pydantic import ValidationError

from streaming_dashboard.schemas.topology import (
    Actor,
    ActorGroup,
    Fragment,
    MaterializedView,
    TopologySnapshot,
)


def test_actor_flat_record():
    actor = Actor.model_validate({"id": 1, "downstream": [2, 3], "fragmentId": 10})
    assert actor.id == 1
    assert actor.downstream == (2, 3)
    assert actor.fragment_id == 10
    assert actor.upstream == ()
    assert actor.operator is None


def test_actor_native_record_flattens_dispatchers():
    actor = Actor.model_validate(
        {
            "actorId": 3,
            "fragmentId": 3,
            "dispatcher": [
                {"type": "HASH", "downstreamActorId": [7, 4]},
                {"type": "BROADCAST", "downstreamActorId": [4, 8]},
            ],
            "upstreamActorId": [1, 2],
            "nodes": {"identity": "HashJoinExecutor", "node": {"hashJoin": {}}},
        }
    )
    # order of first appearance, duplicates removed
    assert actor.downstream == (7, 4, 8)
    assert actor.upstream == (1, 2)
    assert actor.operator == "HashJoinExecutor"


def test_actor_operator_falls_back_to_node_kind():
    actor = Actor.model_validate(
        {"actorId": 4, "fragmentId": 4, "nodes": {"node": {"materialize": {}}}}
    )
    assert actor.operator == "materialize"


def test_actor_without_dispatchers_has_no_downstream():
    actor = Actor.model_validate({"actorId": 4, "fragmentId": 4, "dispatcher": []})
    assert actor.downstream == ()


def test_actor_missing_fragment_is_rejected():
    with pytest.raises(ValidationError):
        Actor.model_validate({"id": 1, "downstream": []})


def test_records_are_frozen():
    actor = Actor(id=1, fragment_id=10)
    with pytest.raises(ValidationError):
        actor.id = 2


def test_group_node_from_worker_record():
    group = ActorGroup.model_validate(
        {"node": {"id": 1, "host": {"host": "127.0.0.1", "port": 5688}}, "actors": []}
    )
    assert group.node == "127.0.0.1:5688"
    assert group.actors == ()


def test_group_node_from_id_only():
    group = ActorGroup.model_validate({"node": {"id": 2}, "actors": None})
    assert group.node == "2"
    assert group.actors == ()


def test_group_node_without_host_or_id_is_rejected():
    with pytest.raises(ValidationError):
        ActorGroup.model_validate({"node": {"type": "COMPUTE_NODE"}, "actors": []})


def test_fragment_native_record():
    fragment = Fragment.model_validate(
        {"fragmentId": 1, "fragmentType": "SOURCE", "actors": [{"actorId": 1}, {"actorId": 5}]}
    )
    assert fragment.id == 1
    assert fragment.kind == "SOURCE"
    assert fragment.actor_ids == (1, 5)


def test_fragment_flat_record():
    fragment = Fragment.model_validate({"id": 10, "kind": "join", "actorIds": [1, 2]})
    assert fragment == Fragment(id=10, kind="join", actor_ids=(1, 2))


def test_view_id_is_text():
    view = MaterializedView.model_validate({"id": 2001, "name": "mv_join", "fragmentIds": [1, 2]})
    assert view.id == "2001"
    assert view.fragment_ids == (1, 2)


def test_snapshot_counts_actors():
    snapshot = TopologySnapshot(
        actor_groups=(
            ActorGroup(node="a", actors=(Actor(id=1, fragment_id=1), Actor(id=2, fragment_id=1))),
            ActorGroup(node="b", actors=(Actor(id=3, fragment_id=2),)),
        )
    )
    assert snapshot.actor_count == 3
    assert [(node, actor.id) for node, actor in snapshot.iter_actors()] == [
        ("a", 1),
        ("a", 2),
        ("b", 3),
    ]


@pytest.mark.parametrize(
    "record",
    [
        {"actorId": 1, "fragmentId": 1, "dispatcher": [5]},
        {"actorId": 1, "fragmentId": 1, "dispatcher": {"type": "HASH"}},
        {"actorId": 1, "fragmentId": 1, "dispatcher": [{"downstreamActorId": 3}]},
        {"id": 1, "fragmentId": 1, "downstream": 5},
        {"id": 1, "fragmentId": 1, "downstream": [None]},
        {"id": 1, "fragmentId": 1, "upstream": ["two"]},
    ],
)
def test_actor_bad_id_lists_are_rejected(record):
    with pytest.raises(ValidationError):
        Actor.model_validate(record)


def test_fragment_actors_must_be_a_list():
    with pytest.raises(ValidationError):
        Fragment.model_validate({"fragmentId": 1, "actors": 3})
