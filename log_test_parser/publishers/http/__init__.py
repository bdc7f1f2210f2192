"""HTTP publisher module."""

from log_test_parser.publishers.http.config import HttpPublisherConfig
from log_test_parser.publishers.http.manifest import http_manifest
from log_test_parser.publishers.http.publisher import HttpPublisher

__all__ = ["HttpPublisher", "HttpPublisherConfig", "http_manifest"]
