"""Acyclicity check for the next/parameter block structure.

Decides whether evaluation order is well defined: no block may be reached
twice through 'next' links and input references.

The check walks from every entry point (block with no incoming next or
parameter edge) with an explicit stack and then compares the visited count
with the document size. A shortfall means the remaining blocks have no entry
point of their own, so they can only form cycles among themselves.

Python 3.13+.
"""

import logging
from typing import TYPE_CHECKING

from scratchgraph.diagnostics import (
    BlockVisitedTwiceError,
    CycleWithoutEntryError,
    ErrorTemplate,
    VisitedMoreThanInDocError,
)
from scratchgraph.project.model import Project
from scratchgraph.project.types import BlockId

if TYPE_CHECKING:
    from .graph import BlockGraph

__all__ = ["CycleFreeProof", "check_no_cycles", "entry_points"]

logger = logging.getLogger(__name__)

# Only check_no_cycles holds this token, so only it can build a proof.
_PROOF_TOKEN = object()


class CycleFreeProof:
    """Evidence that a project's next/parameter structure is acyclic.

    Returned only by check_no_cycles; holding one means the check passed.
    It is not re-verified when used.

    Attributes:
        project: The project that was checked
    """

    __slots__ = ("_project",)

    def __init__(self, project: Project, *, _token: object = None) -> None:
        if _token is not _PROOF_TOKEN:
            msg = "CycleFreeProof can only be created by check_no_cycles()"
            raise TypeError(msg)
        self._project = project

    @property
    def project(self) -> Project:
        """The project that was checked."""
        return self._project

    def __repr__(self) -> str:
        return f"CycleFreeProof(blocks={self._project.block_count})"


def entry_points(graph: "BlockGraph") -> list[BlockId]:
    """Blocks with no incoming next or parameter edge, in document order."""
    referenced: set[BlockId] = set()
    for targets in graph.parameter_edges.values():
        referenced.update(targets)
    for successor in graph.next_block_edges.values():
        if successor is not None:
            referenced.add(successor)
    return [
        block_id
        for block_id, _opcode in graph.project.iter_opcodes()
        if block_id not in referenced
    ]


def check_no_cycles(graph: "BlockGraph") -> CycleFreeProof:
    """Verify that the next + parameter relation of a project is acyclic.

    read_list_edges and parent_block_edges are not traversed: they describe
    data reads and containment, not evaluation order.

    Ids with no block in the graph (dangling references) are skipped and do
    not count as visited.

    Args:
        graph: Block graph of the project

    Returns:
        CycleFreeProof wrapping the project

    Raises:
        BlockVisitedTwiceError: A path from an entry point revisits a block
        CycleWithoutEntryError: Some blocks are unreachable from any entry point
        VisitedMoreThanInDocError: The graph holds blocks the document does not
            (relations out of sync with the project; not a cycle)

    Complexity:
        Time: O(V + E), Space: O(V)
    """
    stack = entry_points(graph)
    logger.debug("Cycle check: %d entry point(s)", len(stack))

    visited: set[BlockId] = set()
    while stack:
        block_id = stack.pop()
        if block_id in visited:
            raise BlockVisitedTwiceError(
                ErrorTemplate.block_visited_twice(block_id),
                block_id=block_id,
            )
        if block_id not in graph.next_block_edges:
            logger.warning("Cycle check: skipping dangling block reference %s", block_id)
            continue
        visited.add(block_id)

        successor = graph.next_block_edges.get(block_id)
        if successor is not None:
            stack.append(successor)
        stack.extend(graph.parameter_edges.get(block_id, ()))

    doc_block_count = sum(1 for _ in graph.project.iter_opcodes())
    visited_count = len(visited)

    if visited_count > doc_block_count:
        raise VisitedMoreThanInDocError(
            ErrorTemplate.visited_more_than_in_doc(doc_block_count, visited_count),
            doc_block_count=doc_block_count,
            visited_count=visited_count,
        )
    if visited_count < doc_block_count:
        raise CycleWithoutEntryError(
            ErrorTemplate.cycle_without_entry(doc_block_count, visited_count),
            doc_block_count=doc_block_count,
            visited_count=visited_count,
        )

    logger.debug("Cycle check passed: %d block(s) visited", visited_count)
    return CycleFreeProof(graph.project, _token=_PROOF_TOKEN)
