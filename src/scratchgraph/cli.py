"""Command-line entry point.

Usage:
    scratchgraph games/pong.sb3
    scratchgraph --format json project.json
    scratchgraph --dump-graph --no-advisories games/pong.sb3

Exit Codes:
    0   Analysis found no errors (advisory warnings allowed)
    1   Analysis found errors
    2   Project could not be loaded

Python 3.13+.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence

from scratchgraph.analysis import AnalysisConfig, BlockGraph
from scratchgraph.diagnostics import (
    DiagnosticFormatter,
    GraphInvariantError,
    OutputFormat,
    ProjectLoadError,
    ScratchGraphError,
)
from scratchgraph.project import load_project
from scratchgraph.validation import analyze_project

__all__ = ["main"]

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_LOAD_FAILED = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scratchgraph",
        description=(
            "Check a Scratch 3 project for cyclic block structure and "
            "report lists read as concatenated strings."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Exit codes: 0 = no errors, 1 = errors found, 2 = project not loaded",
    )
    parser.add_argument("path", help="Path to an .sb3 archive or a project.json file")
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.RUST.value,
        help="Diagnostic output style (default: rust)",
    )
    parser.add_argument(
        "--color",
        action="store_true",
        help="Use ANSI colors in rust-style output",
    )
    parser.add_argument(
        "--dump-graph",
        action="store_true",
        help="Print the block graph as JSON before the diagnostics",
    )
    parser.add_argument(
        "--no-advisories",
        action="store_true",
        help="Skip list concatenation advisories",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log pass summaries to stderr",
    )
    return parser


def _report_error(formatter: DiagnosticFormatter, error: ScratchGraphError) -> None:
    if error.diagnostic is not None:
        print(formatter.format(error.diagnostic), file=sys.stderr)
    else:
        print(f"error: {error}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the analyzer on one project and print the diagnostics.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = AnalysisConfig(report_list_concatenation=not args.no_advisories)
    formatter = DiagnosticFormatter(output_format=OutputFormat(args.format), color=args.color)

    try:
        project = load_project(args.path, max_source_size=config.max_source_size)
    except ProjectLoadError as e:
        _report_error(formatter, e)
        return EXIT_LOAD_FAILED

    try:
        graph = BlockGraph.construct(project, max_depth=config.max_depth)
        if args.dump_graph:
            # JSON output stays one object per line
            indent = None if formatter.output_format is OutputFormat.JSON else 2
            print(json.dumps(graph.to_dict(), indent=indent))
        result = analyze_project(project, config=config, graph=graph)
    except GraphInvariantError as e:
        _report_error(formatter, e)
        return EXIT_ERRORS

    print(formatter.format_result(result))
    return EXIT_OK if result.is_valid else EXIT_ERRORS


if __name__ == "__main__":
    sys.exit(main())
