"""AsciiDoc generator for Go test files.

Reads a Go test file, extracts the startdocs/startapidocs blocks of its
Test_ functions and writes an AsciiDoc document that includes the tagged
test code and, for API docs, the JSON samples the tests record.

Usage:
    code2asciidoc --source /abs/path/users_test.go --out docs/users.adoc -f
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import tempfile
from pathlib import Path

from .errors import Code2AsciidocError, ConfigError, OutputWriteError, TestRunError
from .extractors import extract_docs, load_lines
from .generators import document_title, generate_document
from .models import RenderConfig
from .runner import run_tests
from .validators import compute_coverage, validate_config

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 100


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with the usage exit code."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="code2asciidoc",
        description="AsciiDoc generator for documented Go tests.",
    )
    parser.add_argument(
        "--source",
        default="",
        help="Source file to parse into AsciiDoc, recommended is to set the absolute path.",
    )
    parser.add_argument(
        "--out", default="", help="File to write to, if left empty writes to stdout"
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite the existing out file",
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Run the tests to produce the output file for the JSON samples. "
        "The JSON samples need to be written to a file called the same as the "
        "source Go file minus the _test with a .apisamples extension",
    )
    parser.add_argument(
        "--no-header", action="store_true", help="Do not set a document header and ToC"
    )
    parser.add_argument(
        "--skip-json",
        action="store_true",
        help="Skip JSON sample sections in output (useful when .apisamples file doesn't exist)",
    )
    parser.add_argument(
        "--antora",
        action="store_true",
        help="Use Antora-compatible include paths (example$ prefix instead of absolute paths)",
    )
    parser.add_argument(
        "--no-page-breaks",
        action="store_true",
        help="Do not insert page break markers (<<<) before sections",
    )
    parser.add_argument(
        "--no-headings",
        action="store_true",
        help="Do not generate section headings from tag names",
    )
    parser.add_argument(
        "--no-outer-tags",
        action="store_true",
        help="Do not wrap generated content in outer tag markers",
    )
    parser.add_argument(
        "--relative-to",
        default="",
        help="Make include paths relative to the specified directory",
    )
    parser.add_argument(
        "--include-prefix",
        default="",
        help="Prepend a prefix to all include paths (e.g., 'example$')",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview output to stdout without writing files",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def write_document(path: Path, document: str, overwrite: bool = False) -> None:
    """Write the document to `path` in one step.

    The text goes to a temporary file next to the target which then replaces
    it, so the target never holds a partial document.
    The file gets the usual 0666 minus umask mode, as a plain create would.
    """
    if path.exists() and not overwrite:
        raise OutputWriteError(f"File already exists: {path}")

    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", dir=path.parent, prefix=f".{path.name}.", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(document)
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteError(f"Could not write file: {path}", e) from e


def main(argv: list[str] | None = None) -> int:
    """Generate the AsciiDoc document for one Go test file."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    validation = validate_config(args.source, relative_to=args.relative_to)
    for warning in validation.warnings:
        log.warning(warning)
    if validation.errors:
        for err in validation.errors:
            print(f"Error: {err}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    try:
        config = RenderConfig.from_options(
            antora=args.antora,
            include_prefix=args.include_prefix,
            relative_to=args.relative_to,
            no_header=args.no_header,
            skip_sample_data=args.skip_json,
            no_page_breaks=args.no_page_breaks,
            no_headings=args.no_headings,
            no_outer_tags=args.no_outer_tags,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    out_file = "" if args.dry_run else args.out

    try:
        lines = load_lines(Path(args.source))
        result = extract_docs(lines, args.source)
        log.info(
            "%s: %d/%d test functions documented (%.0f%%)",
            args.source,
            len(result.blocks),
            len(result.all_test_functions),
            compute_coverage(result) * 100,
        )

        document = generate_document(
            result.blocks, config, document_title(args.source)
        )

        if out_file:
            write_document(Path(out_file), document, overwrite=args.force)
            log.info("Wrote %s", out_file)
        else:
            sys.stdout.write(document)
            sys.stdout.flush()

        if args.run:
            run_tests(args.source, [block.test_name for block in result.blocks])
    except TestRunError as e:
        print(f"\nFailed to run for sourcefile: {args.source}", file=sys.stderr)
        print(f"Command: {' '.join(e.command)}", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_FAILURE
    except Code2AsciidocError as e:
        print(e, file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
