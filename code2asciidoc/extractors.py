"""Documentation extractors for Go test files.

A documented test looks like this::

    func Test_CreateUser(t *testing.T) {
        // startapidocs Creating a user
        // Users are created with a POST request.
        // tag::CreateUser[]
        user := client.CreateUser("alice")
        // end::CreateUser[]
        // startpostdocs Notes
        // Email addresses are not validated.
        // endpostdocs
        // enddocs
    }

The comment directly below the declaration must open the block, otherwise
the test is treated as undocumented.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import replace
from pathlib import Path

from .errors import SourceReadError
from .models import DocBlock, ExtractionResult

log = logging.getLogger(__name__)

FUNC_MARKER = "Test_"
COMMENT_PREFIX = "//"

START_DOCS = "startdocs"
START_API_DOCS = "startapidocs"
END_DOCS = "enddocs"
START_POST_DOCS = "startpostdocs"
END_POST_DOCS = "endpostdocs"
TAG_OPEN = "tag::"
TAG_CLOSE = "end::"


class _BlockState(enum.Enum):
    IN_BODY = "in_body"
    DONE = "done"


class _PostState(enum.Enum):
    BODY = "body"
    IN_POST = "in_post"
    AFTER_POST = "after_post"


def load_lines(path: Path) -> list[str]:
    """Read a source file and split it into lines."""
    try:
        content = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError("Could not read source file", e) from e
    return content.split("\n")


def normalize_comment(line: str) -> str | None:
    """Return the text of a `//` comment line, or None for a code line."""
    stripped = line.strip()
    if not stripped.startswith(COMMENT_PREFIX):
        return None
    return stripped[len(COMMENT_PREFIX) :].strip()


def _text_after(text: str, marker: str) -> str:
    """Strip a leading marker word; text not starting with it is kept whole."""
    return text.removeprefix(marker).strip()


def _start_marker(text: str | None) -> str | None:
    """Return the block-start marker contained in a comment, if any."""
    if text is None:
        return None
    # startapidocs first so its title is cut at the right place
    if START_API_DOCS in text:
        return START_API_DOCS
    if START_DOCS in text:
        return START_DOCS
    return None


def find_test_functions(lines: list[str]) -> list[int]:
    """Return the offsets of all lines that declare a test function."""
    return [i for i, line in enumerate(lines) if FUNC_MARKER in line]


def parse_function_name(line: str) -> str | None:
    """Parse "CreateUser" out of "func Test_CreateUser(t *testing.T) {"."""
    after = line.split(FUNC_MARKER, 1)[1]
    if "(" not in after:
        return None
    name = after.split("(", 1)[0]
    return name or None


def extract_block(
    lines: list[str], offset: int, source_dir: str = "", source_filename: str = ""
) -> DocBlock | None:
    """Extract the documentation block of the test declared at `offset`.

    Returns None when the declaration cannot be parsed or the test carries
    no documentation. A block without `enddocs` runs to the end of input.
    """
    name = parse_function_name(lines[offset])
    if name is None:
        log.debug("Skipping unparseable declaration on line %d", offset + 1)
        return None

    if offset + 1 >= len(lines) or _start_marker(
        normalize_comment(lines[offset + 1])
    ) is None:
        log.debug("Test_%s has no documentation", name)
        return None

    block = DocBlock(
        function_name=name, source_dir=source_dir, source_filename=source_filename
    )
    state = _BlockState.IN_BODY

    for line in lines[offset + 1 :]:
        text = normalize_comment(line)
        if text is None:
            # Code between documentation comments
            continue

        marker = _start_marker(text)
        if marker is not None:
            if marker == START_API_DOCS:
                block.is_api_doc = True
            block.title = _text_after(text, marker)
            continue

        if END_DOCS in text:
            state = _BlockState.DONE
            break

        if text.startswith((TAG_OPEN, TAG_CLOSE)):
            continue

        block.body.append(text)

    block.terminated = state is _BlockState.DONE
    if not block.terminated:
        log.warning(
            "Test_%s: documentation runs to end of file without %s", name, END_DOCS
        )
    return block


def split_post(block: DocBlock) -> DocBlock:
    """Move the startpostdocs/endpostdocs region of the body into `post`.

    Only the first region is recognised. A second startpostdocs inside the
    open region stays as post text; one after the region closed stays as
    body text. A region without a title is dropped.
    """
    body: list[str] = []
    post: list[str] = []
    post_title = ""
    state = _PostState.BODY

    for line in block.body:
        if state is _PostState.BODY and START_POST_DOCS in line:
            post_title = _text_after(line, START_POST_DOCS)
            state = _PostState.IN_POST
            continue

        if END_POST_DOCS in line:
            if state is _PostState.IN_POST:
                state = _PostState.AFTER_POST
            continue

        if state is _PostState.IN_POST:
            post.append(line)
        else:
            body.append(line)

    if state is _PostState.BODY:
        return replace(block, body=body)

    if not post_title:
        post = []
    return replace(block, body=body, post_title=post_title, post=post)


def extract_docs(lines: list[str], source: str) -> ExtractionResult:
    """Extract every documented test function from a Go test file."""
    source_dir, source_filename = os.path.split(source)

    blocks: list[DocBlock] = []
    all_tests: list[str] = []

    for offset in find_test_functions(lines):
        name = parse_function_name(lines[offset])
        if name is not None:
            all_tests.append(name)

        block = extract_block(lines, offset, source_dir, source_filename)
        if block is None:
            continue
        if not block.title:
            log.debug("Test_%s has an empty title, skipping", block.function_name)
            continue

        blocks.append(split_post(block))

    return ExtractionResult(blocks=blocks, all_test_functions=all_tests)
