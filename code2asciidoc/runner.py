"""Regenerate .apisamples files by running the documented Go tests."""

from __future__ import annotations

import logging
import os
import subprocess

from .errors import TestRunError

log = logging.getLogger(__name__)

TEST_TIMEOUT = "30s"


def _package_dir(source: str) -> str:
    directory = os.path.dirname(source)
    if not directory:
        return "."
    if os.path.isabs(directory) or directory.startswith("."):
        return directory
    # go test treats bare relative paths as import paths
    return f"./{directory}"


def build_test_command(source: str, test_names: list[str]) -> list[str]:
    """Build the `go test` command that runs exactly the given tests."""
    pattern = "^({})$".format("|".join(test_names))
    return [
        "go",
        "test",
        "-timeout",
        TEST_TIMEOUT,
        _package_dir(source),
        "-run",
        pattern,
        "-count",
        "1",
    ]


def run_tests(source: str, test_names: list[str]) -> None:
    """Run the named tests of the package containing `source`.

    The tests write the sample data referenced by the generated JSON
    includes. Output of `go test` goes straight to our stdout and stderr.

    Raises:
        TestRunError: If go cannot be started or the tests fail.
    """
    if not test_names:
        log.info("No documented tests in %s, skipping test run", source)
        return

    command = build_test_command(source, test_names)
    log.info("Executing: %s", " ".join(command))

    try:
        completed = subprocess.run(command, check=False)
    except OSError as e:
        raise TestRunError("Could not run tests", command, cause=e) from e

    if completed.returncode != 0:
        raise TestRunError(
            f"Could not run tests for sourcefile {source}",
            command,
            returncode=completed.returncode,
        )
