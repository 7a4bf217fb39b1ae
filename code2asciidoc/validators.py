"""Option validation and extraction statistics."""

from __future__ import annotations

import os

from .models import ExtractionResult, ValidationResult


def validate_config(source: str, *, relative_to: str = "") -> ValidationResult:
    """Validate command-line options before any file is read.

    Conflicting path modes are rejected by RenderConfig.from_options.

    Checks:
    1. A source file is given (error)
    2. --relative-to and --source are both absolute or both relative (warning,
       mixed paths always fall back to the full source path)

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()

    if not source:
        result.errors.append("Sourcefile must be set")

    if source and relative_to and os.path.isabs(source) != os.path.isabs(relative_to):
        result.warnings.append(
            f"--relative-to {relative_to} and --source {source} mix absolute and "
            "relative paths; include paths will not be made relative"
        )

    return result


def compute_coverage(result: ExtractionResult) -> float:
    """Fraction of test functions that carry documentation (0.0 - 1.0)."""
    total = len(result.all_test_functions)
    if total == 0:
        return 1.0
    return len(result.blocks) / total
