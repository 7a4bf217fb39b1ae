"""Data models for documentation extraction and rendering."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .errors import ConfigError


class PathMode(enum.Enum):
    """How include directives refer to the source and sample files."""

    ABSOLUTE = "absolute"
    PLATFORM_PREFIX = "platform-prefix"  # Antora "example$" prefix
    LITERAL_PREFIX = "literal-prefix"
    RELATIVE_TO = "relative-to"


def selected_path_modes(
    *, antora: bool = False, include_prefix: str = "", relative_to: str = ""
) -> list[PathMode]:
    """Return the non-default path modes requested by the given flags."""
    modes = []
    if antora:
        modes.append(PathMode.PLATFORM_PREFIX)
    if include_prefix:
        modes.append(PathMode.LITERAL_PREFIX)
    if relative_to:
        modes.append(PathMode.RELATIVE_TO)
    return modes


@dataclass
class DocBlock:
    """Extracted documentation for one test function."""

    function_name: str  # "CreateUser" for "func Test_CreateUser(t *testing.T)"
    source_dir: str  # Directory part of the source path, may be ""
    source_filename: str  # "users_test.go"
    title: str = ""
    body: list[str] = field(default_factory=list)
    is_api_doc: bool = False  # Set by startapidocs
    post_title: str = ""
    post: list[str] = field(default_factory=list)
    terminated: bool = False  # enddocs seen before end of input

    @property
    def test_name(self) -> str:
        """Name of the test function as the Go toolchain knows it."""
        return f"Test_{self.function_name}"

    @property
    def sample_filename(self) -> str:
        """Sample data file written by the tests, e.g. users.apisamples."""
        base = self.source_filename.split("_test.go", 1)[0]
        return f"{base}.apisamples"


@dataclass(frozen=True)
class RenderConfig:
    """Rendering toggles, fixed for a whole run."""

    no_header: bool = False
    skip_sample_data: bool = False
    path_mode: PathMode = PathMode.ABSOLUTE
    path_value: str = ""  # Prefix or base directory, depending on path_mode
    no_page_breaks: bool = False
    no_headings: bool = False
    no_outer_tags: bool = False

    @classmethod
    def from_options(
        cls,
        *,
        antora: bool = False,
        include_prefix: str = "",
        relative_to: str = "",
        no_header: bool = False,
        skip_sample_data: bool = False,
        no_page_breaks: bool = False,
        no_headings: bool = False,
        no_outer_tags: bool = False,
    ) -> RenderConfig:
        """Build a config from flag values.

        Raises:
            ConfigError: If more than one path mode is selected.
        """
        modes = selected_path_modes(
            antora=antora, include_prefix=include_prefix, relative_to=relative_to
        )
        if len(modes) > 1:
            raise ConfigError(
                "--antora, --relative-to, and --include-prefix are mutually "
                "exclusive. Use only one."
            )

        mode = modes[0] if modes else PathMode.ABSOLUTE
        value = {
            PathMode.LITERAL_PREFIX: include_prefix,
            PathMode.RELATIVE_TO: relative_to,
        }.get(mode, "")

        return cls(
            no_header=no_header,
            skip_sample_data=skip_sample_data,
            path_mode=mode,
            path_value=value,
            no_page_breaks=no_page_breaks,
            no_headings=no_headings,
            no_outer_tags=no_outer_tags,
        )


@dataclass
class ValidationResult:
    """Results from configuration validation."""

    errors: list[str] = field(default_factory=list)  # Run aborts if non-empty
    warnings: list[str] = field(default_factory=list)  # Logged but allowed


@dataclass
class ExtractionResult:
    """Results from extracting documentation from one source file."""

    blocks: list[DocBlock]
    all_test_functions: list[str]
