"""code2asciidoc - AsciiDoc documentation from commented Go tests."""

from code2asciidoc.errors import (
    Code2AsciidocError,
    ConfigError,
    OutputWriteError,
    SourceReadError,
    TestRunError,
)
from code2asciidoc.extractors import extract_block, extract_docs, split_post
from code2asciidoc.generators import generate_block, generate_document
from code2asciidoc.models import DocBlock, ExtractionResult, PathMode, RenderConfig

__all__ = [
    "Code2AsciidocError",
    "ConfigError",
    "OutputWriteError",
    "SourceReadError",
    "TestRunError",
    "DocBlock",
    "ExtractionResult",
    "PathMode",
    "RenderConfig",
    "extract_block",
    "extract_docs",
    "split_post",
    "generate_block",
    "generate_document",
]
