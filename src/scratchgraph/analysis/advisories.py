"""Advisories derived from the block graph.

A list reporter dropped into an input evaluates to the list's items joined
into one string. That is legal, but code computing "length of" that value
gets the character count, not the item count. These advisories point at
every such read.

Python 3.13+.
"""

import logging
from collections.abc import Iterator
from dataclasses import replace

from scratchgraph.diagnostics import DanglingReferenceError, Diagnostic, ErrorTemplate

from .graph import BlockGraph

__all__ = ["list_concatenation_advisories"]

logger = logging.getLogger(__name__)


def list_concatenation_advisories(graph: BlockGraph) -> Iterator[Diagnostic]:
    """Describe every block that reads a list as a concatenated string.

    Dangling block or list ids produce an error diagnostic for that item
    and the remaining items are still reported.

    Args:
        graph: Block graph of the project

    Yields:
        Warning diagnostics (LIST_READ_AS_CONCATENATION), or error
        diagnostics (BLOCK_NOT_FOUND, LIST_NOT_FOUND) for unresolvable items
    """
    project = graph.project
    for item in graph.blocks_reading_list_as_concatenation():
        if isinstance(item, DanglingReferenceError):
            logger.debug("Skipping list read of unresolved block %s", item.reference_id)
            if item.diagnostic is not None:
                yield item.diagnostic
            continue

        block, list_id = item.block, item.list_id
        declared = project.find_list(list_id)
        if declared is None:
            yield ErrorTemplate.list_not_found(list_id, block_id=block.id)
            continue

        diagnostic = ErrorTemplate.list_read_as_concatenation(
            block.opcode,
            declared.name,
            block_id=block.id,
            list_id=list_id,
        )
        target = project.find_target(block.id)
        if target is not None:
            diagnostic = replace(diagnostic, target_name=target.name)
        yield diagnostic
