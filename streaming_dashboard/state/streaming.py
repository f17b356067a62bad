from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Optional, Tuple

from streaming_dashboard.queries.errors import TopologyLoadError
from streaming_dashboard.queries.topology import TopologyLoader
from streaming_dashboard.schemas.topology import (
    ActorGroup,
    MaterializedView,
    TopologySnapshot,
)

logger = logging.getLogger("StreamingPage")


class PageStatus(StrEnum):
    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class BodyKind(StrEnum):
    VISUALIZATION = "visualization"
    NO_DATA = "no_data"


@dataclass(frozen=True)
class PageView:
    """What the page should draw for the controller's current state."""

    show_error: bool
    message: str
    body: BodyKind
    actor_groups: Tuple[ActorGroup, ...]
    materialized_views: Tuple[MaterializedView, ...]


def has_usable_actors(actor_groups: Tuple[ActorGroup, ...]) -> bool:
    # A first group with no actors counts as no data, whatever the group count.
    return bool(actor_groups) and bool(actor_groups[0].actors)


class StreamingPageController:
    """
    Owns the streaming page's loaded collections and its message slot.

    Loads run as asyncio tasks tagged with a generation number. A result is
    applied only while the controller is mounted and its generation is still
    current, so a load resolving after ``unmount`` (or after a newer load
    started) is dropped.
    """

    def __init__(self, loader: TopologyLoader) -> None:
        self._loader = loader
        self.actor_groups: Tuple[ActorGroup, ...] = ()
        self.materialized_views: Tuple[MaterializedView, ...] = ()
        self.snapshot: Optional[TopologySnapshot] = None
        self.message: str = ""
        self.status: PageStatus = PageStatus.EMPTY
        self._mounted = False
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._fetch: Optional[asyncio.Task] = None

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def mount(self) -> asyncio.Task:
        """Start loading a snapshot. Must be called with a running event loop."""
        self._mounted = True
        return self._start_load()

    def reload(self, reset_message: bool = True) -> asyncio.Task:
        if reset_message:
            self.message = ""
        return self.mount()

    def unmount(self) -> None:
        """Tear down: clear the message, drop the snapshot, ignore in-flight loads."""
        self._mounted = False
        self._generation += 1
        self._cancel_fetch()
        self._task = None
        self.message = ""
        self.actor_groups = ()
        self.materialized_views = ()
        self.snapshot = None
        self.status = PageStatus.EMPTY

    async def load(self, reset_message: bool = False) -> None:
        """Mount (or reload) and wait for the load to settle."""
        await self.reload(reset_message)

    def _cancel_fetch(self) -> None:
        if self._fetch is not None and not self._fetch.done():
            self._fetch.cancel()
        self._fetch = None

    def _start_load(self) -> asyncio.Task:
        self._cancel_fetch()
        self._generation += 1
        self.status = PageStatus.LOADING
        loop = asyncio.get_running_loop()
        # Only the fetch is ever cancelled, so awaiting the returned task never raises.
        self._fetch = loop.create_task(self._loader.load_snapshot())
        self._task = loop.create_task(self._run(self._generation, self._fetch))
        return self._task

    def _is_current(self, generation: int) -> bool:
        return self._mounted and generation == self._generation

    async def _run(self, generation: int, fetch: asyncio.Task) -> None:
        try:
            snapshot = await fetch
        except asyncio.CancelledError:
            if self._is_current(generation):
                raise
            logger.debug("Load from generation %d cancelled by teardown", generation)
            return
        except TopologyLoadError as e:
            if not self._is_current(generation):
                logger.debug("Dropping stale load failure: %s", e)
                return
            logger.error("Topology load failed (%s): %s", type(e).__name__, e)
            self.message = str(e)
            self.status = PageStatus.ERROR
            return

        if not self._is_current(generation):
            logger.debug("Dropping stale snapshot from generation %d", generation)
            return
        self.snapshot = snapshot
        self.actor_groups = snapshot.actor_groups
        self.materialized_views = snapshot.materialized_views
        self.status = PageStatus.LOADED

    def view(self) -> PageView:
        body = (
            BodyKind.VISUALIZATION
            if has_usable_actors(self.actor_groups)
            else BodyKind.NO_DATA
        )
        return PageView(
            show_error=bool(self.message),
            message=self.message,
            body=body,
            actor_groups=self.actor_groups,
            materialized_views=self.materialized_views,
        )


def render_view(
    view: PageView,
    visualize: Callable[[Tuple[ActorGroup, ...], Tuple[MaterializedView, ...]], object],
    show_error: Callable[[str], object],
    show_empty: Callable[[], object],
) -> None:
    """Drive the page's affordances from a ``PageView``."""
    if view.show_error:
        show_error(view.message)
    if view.body is BodyKind.VISUALIZATION:
        visualize(view.actor_groups, view.materialized_views)
    else:
        show_empty()
