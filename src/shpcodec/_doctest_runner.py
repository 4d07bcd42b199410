from __future__ import annotations

import doctest
import sys
from pathlib import Path

# README.md sits at the repository root, above src/shpcodec
DEFAULT_README = Path(__file__).resolve().parents[2] / "README.md"


def _get_doctests(path: str | Path = DEFAULT_README) -> doctest.DocTest:
    # run tests
    with open(path, "rb") as fobj:
        tests = doctest.DocTestParser().get_doctest(
            string=fobj.read().decode("utf8").replace("\r\n", "\n"),
            globs={},
            name="README",
            filename=str(path),
            lineno=0,
        )

    return tests


def _test(args: list[str] = sys.argv[1:], verbosity: bool = False) -> int:
    """Runs the doctests in README.md, or in the markdown file given as
    the first argument, and returns the number of failures."""
    if verbosity == 0:
        print("Getting doctests...")

    path = Path(args[0]) if args else DEFAULT_README
    if not path.is_file():
        # Fall back to the working directory, e.g. for an installed package
        path = Path("README.md")

    tests = _get_doctests(path)

    runner = doctest.DocTestRunner(verbose=verbosity, optionflags=doctest.FAIL_FAST)

    if verbosity == 0:
        print(f"Running {len(tests.examples)} doctests...")
    failure_count, __test_count = runner.run(tests)

    # print results
    if verbosity:
        runner.summarize(True)
    else:
        if failure_count == 0:
            print("All test passed successfully")
        elif failure_count > 0:
            runner.summarize(verbosity)

    return failure_count
