import asyncio
import sys

from dotenv import load_dotenv

from streaming_dashboard.config import configure_logging
from streaming_dashboard.queries import TopologyLoadError, make_loader


async def inspect(source=None) -> int:
    loader = make_loader(source)
    print(f"Loading topology from {loader.source.name} source...")
    try:
        snapshot = await loader.load_snapshot()
    except TopologyLoadError as e:
        print(f"❌ Failed to load topology: {e}")
        return 1

    print("\n=== Worker Nodes ===")
    for group in snapshot.actor_groups:
        ids = ", ".join(str(actor.id) for actor in group.actors) or "(no actors)"
        print(f"  - {group.node}: {ids}")

    print("\n=== Fragments ===")
    for fragment in snapshot.fragments:
        print(f"  - {fragment.id} [{fragment.kind or '?'}]: {len(fragment.actor_ids)} actor(s)")

    print("\n=== Materialized Views ===")
    if not snapshot.materialized_views:
        print("    (No materialized views)")
    for view in snapshot.materialized_views:
        print(f"  - {view.name} ({view.id}): fragments {list(view.fragment_ids)}")

    print(f"\n=== Warnings ({len(snapshot.warnings)}) ===")
    for warning in snapshot.warnings:
        print(f"  - [{warning.code}] {warning.message}")
    return 0


def main():
    load_dotenv()
    configure_logging()
    source = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(asyncio.run(inspect(source)))


if __name__ == "__main__":
    main()
