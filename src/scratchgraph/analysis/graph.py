"""Block reference graph over a Scratch project.

Aggregates every block's outgoing edges into four relations keyed by block
id. The graph holds ids only; blocks and lists are resolved through the
project when needed, so the graph is only meaningful alongside the project
it was built from (it keeps a reference to it).

Python 3.13+.
"""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from scratchgraph.diagnostics import DanglingReferenceError, ErrorTemplate
from scratchgraph.project.model import Block, Project
from scratchgraph.project.types import BlockId, ListId

from .edges import add_edges_from_block

if TYPE_CHECKING:
    from .cycles import CycleFreeProof

__all__ = ["BlockGraph", "ListConcatenationRead"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ListConcatenationRead:
    """A block that reads a list as the concatenation of its items."""

    block: Block
    list_id: ListId


@dataclass(frozen=True, slots=True)
class BlockGraph:
    """Four edge relations over all blocks of a project.

    Attributes:
        project: The project the relations were derived from
        parameter_edges: block -> block ids referenced as inputs or nested
            expressions (sparse: absent key means no such edges)
        read_list_edges: block -> list ids read as concatenated strings (sparse)
        next_block_edges: block -> successor id or None (every block present)
        parent_block_edges: block -> parent id or None (every block present)

    Example:
        >>> graph = BlockGraph.construct(project)
        >>> proof = graph.check_no_cycles()
        >>> for item in graph.blocks_reading_list_as_concatenation():
        ...     print(item)
    """

    project: Project
    parameter_edges: Mapping[BlockId, tuple[BlockId, ...]]
    read_list_edges: Mapping[BlockId, tuple[ListId, ...]]
    next_block_edges: Mapping[BlockId, BlockId | None]
    parent_block_edges: Mapping[BlockId, BlockId | None]

    @classmethod
    def construct(cls, project: Project, *, max_depth: int | None = None) -> "BlockGraph":
        """Build the graph from every block of every target.

        Dangling ids are kept as they are; they surface only when looked up.

        Args:
            project: Fully loaded project
            max_depth: Attribute nesting limit (default: MAX_DEPTH)

        Returns:
            The block graph

        Raises:
            DuplicateEdgeError: If a block id appears more than once in the project
        """
        parameter_edges: dict[BlockId, tuple[BlockId, ...]] = {}
        read_list_edges: dict[BlockId, tuple[ListId, ...]] = {}
        next_block_edges: dict[BlockId, BlockId | None] = {}
        parent_block_edges: dict[BlockId, BlockId | None] = {}

        for block in project.iter_blocks():
            add_edges_from_block(
                parameter_edges,
                read_list_edges,
                next_block_edges,
                parent_block_edges,
                block,
                max_depth=max_depth,
            )

        logger.debug(
            "Constructed block graph: %d blocks, %d with parameters, %d reading lists",
            len(next_block_edges),
            len(parameter_edges),
            len(read_list_edges),
        )

        return cls(
            project=project,
            parameter_edges=parameter_edges,
            read_list_edges=read_list_edges,
            next_block_edges=next_block_edges,
            parent_block_edges=parent_block_edges,
        )

    def check_no_cycles(self) -> "CycleFreeProof":
        """Verify the next/parameter structure is acyclic.

        See scratchgraph.analysis.cycles.check_no_cycles.
        """
        from .cycles import check_no_cycles  # noqa: PLC0415 - circular

        return check_no_cycles(self)

    def blocks_reading_list_as_concatenation(
        self,
    ) -> Iterator[ListConcatenationRead | DanglingReferenceError]:
        """Yield every (block, list id) pair of read_list_edges.

        One item per list id, in per-block reference order. A block id that
        does not resolve yields a DanglingReferenceError for each of its list
        ids instead of a pair; later items are unaffected.

        Yields:
            ListConcatenationRead, or DanglingReferenceError for unresolvable blocks
        """
        for block_id, list_ids in self.read_list_edges.items():
            block = self.project.find_block(block_id)
            for list_id in list_ids:
                if block is None:
                    yield DanglingReferenceError(
                        ErrorTemplate.block_not_found(block_id),
                        reference_id=block_id,
                        kind="block",
                    )
                else:
                    yield ListConcatenationRead(block=block, list_id=list_id)

    def to_dict(self) -> dict[str, dict[str, object]]:
        """Plain-data view of the four relations (for dumping as JSON)."""
        return {
            "parameter_edges": {k: list(v) for k, v in self.parameter_edges.items()},
            "read_list_edges": {k: list(v) for k, v in self.read_list_edges.items()},
            "next_block_edges": dict(self.next_block_edges),
            "parent_block_edges": dict(self.parent_block_edges),
        }
