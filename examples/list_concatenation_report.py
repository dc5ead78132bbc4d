"""List Concatenation Report - Walking the Block Graph Directly.

Loads a Scratch 3 project, prints one line per block that reads a list as
the concatenation of its items, then dumps the block graph.

This is the lower-level counterpart of the ``scratchgraph`` command: it
uses BlockGraph directly instead of analyze_project.

Usage:
    python examples/list_concatenation_report.py games/pong.sb3

Leverages Python 3.13+ features:
- Pattern matching over graph items

Python 3.13+.
"""

from __future__ import annotations

import json
import sys

from scratchgraph import BlockGraph, load_project
from scratchgraph.analysis import ListConcatenationRead
from scratchgraph.diagnostics import DanglingReferenceError


def report(path: str) -> int:
    project = load_project(path)
    graph = BlockGraph.construct(project)

    for item in graph.blocks_reading_list_as_concatenation():
        match item:
            case ListConcatenationRead(block=block, list_id=list_id):
                declared = project.find_list(list_id)
                list_name = declared.name if declared is not None else list_id
                print(
                    f"Be aware that there is a block ({block.opcode}) that reads a list "
                    f"({list_name!r}) as string concatenation of its items. If you are "
                    f"calculating the length of this value, this is NOT the same as the "
                    f"number of items in the list"
                )
            case DanglingReferenceError() as error:
                print(f"Skipped unresolved block {error.reference_id!r}", file=sys.stderr)

    print(json.dumps(graph.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    sys.exit(report(sys.argv[1]))
