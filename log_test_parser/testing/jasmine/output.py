"""Console output of the Jasmine reporter for tests."""


def run_output(*, seconds: str = "0.012") -> list[str]:
    """Create the output of a run with one failed and one pending spec.

    The run has 3 specs: 1 passed, 1 failed and 1 pending.
    """
    return [
        "Randomized with seed 12345",
        "Started",
        ".F*",
        "",
        "Failures:",
        "1) Calculator subtracts",
        "  Message:",
        "    Expected 1 to be 2.",
        "  Stack:",
        "    Error: Expected 1 to be 2.",
        "        at <Jasmine>",
        "        at UserContext.<anonymous> (spec/calc.spec.js:9:22)",
        "",
        "Pending:",
        "",
        "1) Calculator divides",
        "  Temporarily disabled with xit",
        "",
        "3 specs, 1 failure, 1 pending spec",
        f"Finished in {seconds} seconds",
    ]


SUBTRACTS_STACK_TRACE = "\n".join(
    [
        "1) Calculator subtracts",
        "  Message:",
        "    Expected 1 to be 2.",
        "  Stack:",
        "    Error: Expected 1 to be 2.",
        "        at <Jasmine>",
        "        at UserContext.<anonymous> (spec/calc.spec.js:9:22)",
    ]
)
