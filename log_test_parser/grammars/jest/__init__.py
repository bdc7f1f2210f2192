"""Jest console reporter grammar."""

from log_test_parser.grammars.jest.context import JestContext, JestState
from log_test_parser.grammars.jest.grammar import jest_grammar

__all__ = ["JestContext", "JestState", "jest_grammar"]
