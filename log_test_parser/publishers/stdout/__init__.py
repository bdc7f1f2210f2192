"""Stdout publisher module."""

from log_test_parser.publishers.stdout.config import StdoutPublisherConfig
from log_test_parser.publishers.stdout.manifest import stdout_manifest
from log_test_parser.publishers.stdout.publisher import StdoutPublisher

__all__ = ["StdoutPublisher", "StdoutPublisherConfig", "stdout_manifest"]
