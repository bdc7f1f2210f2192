"""Regular expressions evaluated under a wall-clock budget.

The standard library ``re`` module cannot interrupt a runaway match, so all
line patterns are compiled with the ``regex`` package, whose search accepts
a ``timeout`` and raises ``TimeoutError`` once it is exceeded.
"""

import regex

DEFAULT_REGEX_TIMEOUT = 0.1

type Pattern = regex.Pattern[str]
type Match = regex.Match[str]


def compile_pattern(source: str) -> Pattern:
    """Compile a line pattern."""
    return regex.compile(source)
