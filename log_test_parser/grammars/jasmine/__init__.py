"""Jasmine console reporter grammar."""

from log_test_parser.grammars.jasmine.context import JasmineContext, JasmineState
from log_test_parser.grammars.jasmine.grammar import jasmine_grammar

__all__ = ["JasmineContext", "JasmineState", "jasmine_grammar"]
