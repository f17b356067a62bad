"""
Dashboard settings, read from environment variables at call time.
"""
import logging
import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent
BUNDLED_SNAPSHOT_DIR = PACKAGE_DIR / "data" / "mock" / "join"

SOURCE_LIVE = "live"
SOURCE_STATIC = "static"
TOPOLOGY_SOURCES = (SOURCE_LIVE, SOURCE_STATIC)

# Cluster dashboard API paths
ACTORS_PATH = "api/actors"
FRAGMENTS_PATH = "api/fragments"
MVIEWS_PATH = "api/materialized_views"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


def topology_source() -> str:
    source = os.getenv("TOPOLOGY_SOURCE", SOURCE_STATIC).strip().lower()
    if source not in TOPOLOGY_SOURCES:
        raise ValueError(
            f"TOPOLOGY_SOURCE must be one of {TOPOLOGY_SOURCES}, got {source!r}"
        )
    return source


def meta_api_url() -> str:
    return os.getenv("META_API_URL", "http://localhost:5691").rstrip("/")


def meta_api_timeout() -> float:
    return float(_int_env("META_API_TIMEOUT", 10))


def meta_api_retries() -> int:
    return _int_env("META_API_RETRIES", 3)


def static_snapshot_dir() -> Path:
    raw = os.getenv("STATIC_SNAPSHOT_DIR")
    return Path(raw) if raw else BUNDLED_SNAPSHOT_DIR


def configure_logging() -> None:
    """Set up root logging once for the dashboard process."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
