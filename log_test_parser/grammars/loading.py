"""Loading of grammars from entry points."""

from collections.abc import Sequence
from importlib.metadata import entry_points
from typing import Any

from log_test_parser.parsing.table import Grammar

ENTRY_POINT_GROUP = "log_test_parser.grammars"


class GrammarNotFoundError(Exception):
    """Raised when a grammar is not found."""


def available_grammars() -> Sequence[str]:
    """Return the keys of all registered grammars, sorted."""
    return sorted(e.name for e in entry_points(group=ENTRY_POINT_GROUP))


def load_grammar(key: str) -> Grammar[Any, Any]:
    """Load a grammar by key.

    Args:
        key: The grammar key as registered in pyproject.toml
             (e.g., "jest", "python")

    Returns:
        The grammar instance

    Raises:
        GrammarNotFoundError: If no grammar with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            grammar: Grammar[Any, Any] = entry.load()
            return grammar

    available = [e.name for e in entries]
    raise GrammarNotFoundError(
        f"Grammar '{key}' not found. Available grammars: {available}"
    )
