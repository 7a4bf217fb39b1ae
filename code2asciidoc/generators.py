"""AsciiDoc generators for extracted documentation."""

from __future__ import annotations

import os
from pathlib import Path

from .models import DocBlock, PathMode, RenderConfig

ANTORA_PREFIX = "example$"


def _relative_path(path: str, root: str) -> str:
    """Convert a path to one relative to root, or return it unchanged."""
    try:
        return str(Path(path).relative_to(root))
    except ValueError:
        return path


def include_path(block: DocBlock, filename: str, config: RenderConfig) -> str:
    """Return the path an include directive uses for `filename`."""
    if config.path_mode is PathMode.PLATFORM_PREFIX:
        return f"{ANTORA_PREFIX}{filename}"

    if config.path_mode is PathMode.LITERAL_PREFIX:
        return f"{config.path_value}{filename}"

    full_path = filename
    if block.source_dir:
        full_path = os.path.normpath(os.path.join(block.source_dir, filename))

    if config.path_mode is PathMode.RELATIVE_TO:
        return _relative_path(full_path, config.path_value)

    return full_path


def _anchor(block: DocBlock, kind: str) -> str:
    return f"[#{block.title.lower()}_{block.function_name.lower()}_{kind}]"


def _source_section(block: DocBlock, config: RenderConfig) -> list[str]:
    path = include_path(block, block.source_filename, config)
    return [
        "",
        _anchor(block, "go"),
        f".Go {block.title}",
        "[source,go]",
        "----",
        f"include::{path}[tag={block.function_name},indent=0]",
        "----",
    ]


def _sample_section(block: DocBlock, config: RenderConfig) -> list[str]:
    path = include_path(block, block.sample_filename, config)
    return [
        "",
        _anchor(block, "json"),
        f".JSON {block.title}",
        "[source,json]",
        "----",
        f"include::{path}[tag={block.function_name}]",
        "----",
    ]


def generate_block(block: DocBlock, config: RenderConfig) -> str:
    """Render one documentation block as AsciiDoc.

    The block must already have its post section split off.
    """
    lines: list[str] = []

    if not config.no_outer_tags:
        lines.append(f"// tag::{block.function_name}[]")

    if not config.no_page_breaks:
        lines.append("<<<")

    if not config.no_headings:
        lines.append(f"== {block.title}")

    lines.extend(block.body)
    lines.extend(_source_section(block, config))

    if block.is_api_doc and not config.skip_sample_data:
        lines.extend(_sample_section(block, config))

    if block.post_title:
        lines.append("")
        lines.append(f"=== {block.post_title}")
        lines.extend(block.post)
        lines.append("")

    if not config.no_outer_tags:
        lines.append(f"// end::{block.function_name}[]")

    return "\n".join(lines) + "\n"


def document_title(source: str) -> str:
    """Derive the document title from the source file name.

    "users_test.go" becomes "users ".
    """
    title = os.path.basename(source)
    title = title.replace("test.go", "", 1)
    return title.replace("_", " ")


def generate_header(title: str) -> str:
    """Generate the document header with a table of contents."""
    lines = [
        f"= {title}",
        ":toc: left",
        "",
        "// THIS FILE IS GENERATED. DO NOT EDIT.",
    ]
    return "\n".join(lines) + "\n"


def generate_document(
    blocks: list[DocBlock], config: RenderConfig, title: str
) -> str:
    """Generate the full AsciiDoc document for one source file."""
    parts = []
    if not config.no_header:
        parts.append(generate_header(title))
    parts.extend(generate_block(block, config) for block in blocks)
    return "".join(parts)
