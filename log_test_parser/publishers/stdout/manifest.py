"""Stdout publisher manifest."""

from log_test_parser.publishers.manifest import PublisherManifest
from log_test_parser.publishers.stdout.config import StdoutPublisherConfig
from log_test_parser.publishers.stdout.publisher import StdoutPublisher

stdout_manifest = PublisherManifest(
    config_cls=StdoutPublisherConfig,
    publisher_factory=StdoutPublisher.from_config,
)
