"""Publisher manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel

from log_test_parser.publishers.base import Publisher


@dataclass(frozen=True, kw_only=True)
class PublisherManifest[ConfigT: BaseModel]:
    """Manifest describing a publisher plugin.

    The manifest contains references to the configuration class and the
    publisher factory function for lazy loading of publishers based on their
    key.
    """

    config_cls: type[ConfigT]
    publisher_factory: Callable[[ConfigT], AbstractAsyncContextManager[Publisher]]
