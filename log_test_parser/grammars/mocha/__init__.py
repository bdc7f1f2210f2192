"""Mocha spec reporter grammar."""

from log_test_parser.grammars.mocha.context import MochaContext, MochaState
from log_test_parser.grammars.mocha.grammar import mocha_grammar

__all__ = ["MochaContext", "MochaState", "mocha_grammar"]
