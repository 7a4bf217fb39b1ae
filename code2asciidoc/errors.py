"""Exceptions raised by code2asciidoc.

Only configuration and I/O problems are errors. Malformed or undocumented
test functions are skipped during extraction and never raise.
"""

from __future__ import annotations


class Code2AsciidocError(Exception):
    """Base exception for code2asciidoc operations."""

    def __init__(self, reason: str, cause: BaseException | None = None):
        super().__init__(reason)
        self.reason = reason
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.reason}: {self.cause}"
        return self.reason


class ConfigError(Code2AsciidocError):
    """Raised when command-line options conflict or are missing."""

    pass


class SourceReadError(Code2AsciidocError):
    """Raised when the Go source file cannot be read."""

    pass


class OutputWriteError(Code2AsciidocError):
    """Raised when the output document cannot be written."""

    pass


class TestRunError(Code2AsciidocError):
    """Raised when `go test` fails to regenerate the sample data."""

    __test__ = False  # Not a pytest test class

    def __init__(
        self,
        reason: str,
        command: list[str],
        returncode: int | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(reason, cause)
        self.command = command
        self.returncode = returncode
