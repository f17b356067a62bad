from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


_FROZEN = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def _id_list(value: Any, what: str) -> List[Any]:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{what} must be a list, got {type(value).__name__}")
    return list(value)


def _dedupe(ids: List[Any]) -> Tuple[int, ...]:
    seen: Dict[int, None] = {}
    for actor_id in ids:
        if isinstance(actor_id, bool) or not isinstance(actor_id, (int, str)):
            raise ValueError(f"actor id must be an integer, got {actor_id!r}")
        seen.setdefault(int(actor_id), None)
    return tuple(seen)


def _operator_label(stream_node: Any) -> Optional[str]:
    """Pick a readable label from the root of an actor's stream-node tree."""
    if not isinstance(stream_node, dict):
        return None
    for key in ("operator", "name", "identity"):
        value = stream_node.get(key)
        if isinstance(value, str) and value:
            return value
    node_body = stream_node.get("node")
    if isinstance(node_body, dict) and node_body:
        return next(iter(node_body))
    return None


class Actor(BaseModel):
    """A single execution unit inside a worker node."""

    model_config = _FROZEN

    id: int = Field(..., alias="actorId")
    fragment_id: int = Field(..., alias="fragmentId")
    downstream: Tuple[int, ...] = Field(default=(), alias="downstreamActorId")
    upstream: Tuple[int, ...] = Field(default=(), alias="upstreamActorId")
    operator: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "actorId" not in data and "id" in data:
            data["actorId"] = data.pop("id")
        if "fragmentId" not in data and "fragment_id" in data:
            data["fragmentId"] = data.pop("fragment_id")
        if "downstreamActorId" not in data:
            if "downstream" in data:
                data["downstreamActorId"] = data.pop("downstream")
            elif "dispatcher" in data:
                # Native records fan out through dispatchers; flatten them.
                targets: List[Any] = []
                for dispatcher in _id_list(data.get("dispatcher") or [], "dispatcher"):
                    if not isinstance(dispatcher, dict):
                        raise ValueError(f"dispatcher must be an object, got {dispatcher!r}")
                    targets.extend(
                        _id_list(dispatcher.get("downstreamActorId") or [], "downstreamActorId")
                    )
                data["downstreamActorId"] = targets
        if "upstreamActorId" not in data and "upstream" in data:
            data["upstreamActorId"] = data.pop("upstream")
        if data.get("operator") is None and "nodes" in data:
            data["operator"] = _operator_label(data["nodes"])
        return data

    @field_validator("downstream", "upstream", mode="before")
    @classmethod
    def _unique_ids(cls, value: Any) -> Tuple[int, ...]:
        if value is None:
            return ()
        return _dedupe(_id_list(value, "actor id list"))


class ActorGroup(BaseModel):
    """One worker node's contribution to a snapshot."""

    model_config = _FROZEN

    node: str
    actors: Tuple[Actor, ...] = ()

    @field_validator("node", mode="before")
    @classmethod
    def _node_address(cls, value: Any) -> str:
        if isinstance(value, dict):
            host = value.get("host")
            if isinstance(host, dict) and host.get("host"):
                port = host.get("port")
                return f"{host['host']}:{port}" if port is not None else str(host["host"])
            if value.get("id") is not None:
                return str(value["id"])
            raise ValueError("worker node record has neither host nor id")
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("actors", mode="before")
    @classmethod
    def _no_null_actors(cls, value: Any) -> Any:
        return () if value is None else value


class Fragment(BaseModel):
    """A logical stage grouping parallel actors running the same operator."""

    model_config = _FROZEN

    id: int = Field(..., alias="fragmentId")
    kind: str = ""
    actor_ids: Tuple[int, ...] = Field(default=(), alias="actorIds")

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "fragmentId" not in data and "id" in data:
            data["fragmentId"] = data.pop("id")
        if "kind" not in data and "fragmentType" in data:
            data["kind"] = data.pop("fragmentType")
        if "actorIds" not in data:
            if "actor_ids" in data:
                data["actorIds"] = data.pop("actor_ids")
            elif "actors" in data:
                data["actorIds"] = [
                    a.get("actorId", a.get("id")) if isinstance(a, dict) else a
                    for a in _id_list(data.pop("actors") or [], "actors")
                ]
        return data

    @field_validator("kind", mode="before")
    @classmethod
    def _kind_text(cls, value: Any) -> str:
        return "" if value is None else str(value)


class MaterializedView(BaseModel):
    """A named persisted view backed by a set of fragments."""

    model_config = _FROZEN

    id: str
    name: str
    fragment_ids: Tuple[int, ...] = Field(default=(), alias="fragmentIds")

    @field_validator("id", mode="before")
    @classmethod
    def _id_text(cls, value: Any) -> str:
        return str(value) if isinstance(value, int) else value


class TopologyWarning(BaseModel):
    """A data-quality finding; never fatal."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    node: Optional[str] = None
    actor_id: Optional[int] = None
    target_id: Optional[int] = None


class TopologySnapshot(BaseModel):
    """Point-in-time capture of the cluster topology, replaced as a whole."""

    model_config = ConfigDict(frozen=True)

    actor_groups: Tuple[ActorGroup, ...] = ()
    materialized_views: Tuple[MaterializedView, ...] = ()
    fragments: Tuple[Fragment, ...] = ()
    warnings: Tuple[TopologyWarning, ...] = ()
    source: str = "static"

    @property
    def actor_count(self) -> int:
        return sum(len(group.actors) for group in self.actor_groups)

    def iter_actors(self):
        for group in self.actor_groups:
            for actor in group.actors:
                yield group.node, actor
