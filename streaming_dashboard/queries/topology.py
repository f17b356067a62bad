from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Protocol, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from streaming_dashboard import config
from streaming_dashboard.queries.cluster import LiveTopologySource
from streaming_dashboard.queries.errors import TopologyParseError
from streaming_dashboard.queries.static import StaticTopologySource
from streaming_dashboard.schemas.topology import (
    ActorGroup,
    Fragment,
    MaterializedView,
    TopologySnapshot,
)
from streaming_dashboard.services.topology_index import derive_fragments
from streaming_dashboard.services.validation import (
    log_warnings,
    validate_actor_groups,
    validate_fragments,
    validate_views,
)

logger = logging.getLogger("TopologyLoader")

RecordT = TypeVar("RecordT", bound=BaseModel)


class TopologySource(Protocol):
    name: str

    async def fetch(self, path: str, optional: bool = False) -> Any:
        ...


def _parse_records(payload: Any, model: Type[RecordT], path: str) -> Tuple[RecordT, ...]:
    if payload is None:
        payload = []
    if not isinstance(payload, list):
        logger.error("Parse failed for %s: expected a list, got %s", path, type(payload).__name__)
        raise TopologyParseError(f"{path} did not return a list of records", path=path)
    try:
        records = TypeAdapter(List[model]).validate_python(payload)
    except ValidationError as e:
        logger.error(
            "Parse failed for %s: %d validation error(s), first: %s",
            path,
            e.error_count(),
            e.errors()[0]["msg"] if e.errors() else "",
        )
        raise TopologyParseError(f"{path} returned malformed {model.__name__} records", path=path) from e
    return tuple(records)


def _fragments_from(payload: Any, actor_groups: Sequence[ActorGroup]) -> Tuple[Fragment, ...]:
    if payload is not None:
        return _parse_records(payload, Fragment, config.FRAGMENTS_PATH)
    return derive_fragments(actor_groups)


class TopologyLoader:
    """
    Fetches the actor groups, fragments and materialized views that make up a
    snapshot. The data source is pluggable; consumers only see parsed records.
    """

    def __init__(self, source: TopologySource) -> None:
        self.source = source

    async def load_actor_groups(self) -> Tuple[ActorGroup, ...]:
        payload = await self.source.fetch(config.ACTORS_PATH)
        return _parse_records(payload, ActorGroup, config.ACTORS_PATH)

    async def load_materialized_views(self) -> Tuple[MaterializedView, ...]:
        payload = await self.source.fetch(config.MVIEWS_PATH)
        return _parse_records(payload, MaterializedView, config.MVIEWS_PATH)

    async def load_fragments(
        self, actor_groups: Optional[Sequence[ActorGroup]] = None
    ) -> Tuple[Fragment, ...]:
        """Fragment listing, or fragments derived from actors when none is served."""
        payload = await self.source.fetch(config.FRAGMENTS_PATH, optional=True)
        if payload is None and actor_groups is None:
            actor_groups = await self.load_actor_groups()
        return _fragments_from(payload, actor_groups)

    async def load_snapshot(self) -> TopologySnapshot:
        """
        Fetch actors, views and the fragment listing concurrently and resolve
        to a single snapshot.

        Any failure fails the whole load, so callers never see actors from one
        snapshot paired with views from another.
        """
        actor_groups, views, fragment_payload = await asyncio.gather(
            self.load_actor_groups(),
            self.load_materialized_views(),
            self.source.fetch(config.FRAGMENTS_PATH, optional=True),
        )
        fragments = _fragments_from(fragment_payload, actor_groups)

        warnings = validate_actor_groups(actor_groups)
        warnings += validate_fragments(actor_groups, fragments)
        warnings += validate_views(views, fragments)
        log_warnings(warnings)

        snapshot = TopologySnapshot(
            actor_groups=actor_groups,
            materialized_views=views,
            fragments=fragments,
            warnings=tuple(warnings),
            source=self.source.name,
        )
        logger.info(
            "Loaded %s snapshot: %d nodes, %d actors, %d fragments, %d views, %d warnings",
            snapshot.source,
            len(snapshot.actor_groups),
            snapshot.actor_count,
            len(snapshot.fragments),
            len(snapshot.materialized_views),
            len(snapshot.warnings),
        )
        return snapshot


def make_source(source: Optional[str] = None) -> TopologySource:
    choice = source or config.topology_source()
    if choice == config.SOURCE_LIVE:
        return LiveTopologySource()
    if choice == config.SOURCE_STATIC:
        return StaticTopologySource()
    raise ValueError(f"Unknown topology source: {choice!r}")


def make_loader(source: Optional[str] = None) -> TopologyLoader:
    return TopologyLoader(make_source(source))
