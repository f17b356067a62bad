"""Streaming topology dashboard: actors, fragments and materialized views."""
