"""Loading of publishers from entry points."""

from importlib.metadata import entry_points
from typing import Any

from log_test_parser.publishers.manifest import PublisherManifest

ENTRY_POINT_GROUP = "log_test_parser.publishers"


class PublisherNotFoundError(Exception):
    """Raised when a publisher is not found."""


def load_publisher_manifest(key: str) -> PublisherManifest[Any]:
    """Load a publisher manifest by key.

    Args:
        key: The publisher key as registered in pyproject.toml
             (e.g., "stdout", "http")

    Returns:
        The publisher manifest instance

    Raises:
        PublisherNotFoundError: If no publisher with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: PublisherManifest[Any] = entry.load()
            return manifest

    available = [e.name for e in entries]
    raise PublisherNotFoundError(
        f"Publisher '{key}' not found. Available publishers: {available}"
    )
