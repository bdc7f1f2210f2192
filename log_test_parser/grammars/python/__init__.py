"""unittest text runner grammar."""

from log_test_parser.grammars.python.context import PythonContext, PythonState
from log_test_parser.grammars.python.grammar import python_grammar

__all__ = ["PythonContext", "PythonState", "python_grammar"]
