"""HTTP publisher manifest."""

from log_test_parser.publishers.http.config import HttpPublisherConfig
from log_test_parser.publishers.http.publisher import HttpPublisher
from log_test_parser.publishers.manifest import PublisherManifest

http_manifest = PublisherManifest(
    config_cls=HttpPublisherConfig,
    publisher_factory=HttpPublisher.from_config,
)
