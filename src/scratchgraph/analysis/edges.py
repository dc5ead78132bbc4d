"""Per-block edge extraction.

Populates the four block graph relations for one block. Blocks are
independent of each other here: extraction reads only the block itself.

Python 3.13+.
"""

from collections.abc import Mapping

from scratchgraph.diagnostics import DuplicateEdgeError, ErrorTemplate
from scratchgraph.enums import EdgeRelation
from scratchgraph.project.model import Block
from scratchgraph.project.types import BlockId, ListId

from .visitor import ReferenceCollector

__all__ = ["add_edges_from_block"]


def _check_fresh(relation: Mapping[BlockId, object], name: EdgeRelation, block_id: BlockId) -> None:
    if block_id in relation:
        raise DuplicateEdgeError(
            ErrorTemplate.duplicate_edge_insert(block_id, name),
            block_id=block_id,
            relation=name,
        )


def add_edges_from_block(
    parameter_edges: dict[BlockId, tuple[BlockId, ...]],
    read_list_edges: dict[BlockId, tuple[ListId, ...]],
    next_block_edges: dict[BlockId, BlockId | None],
    parent_block_edges: dict[BlockId, BlockId | None],
    block: Block,
    *,
    max_depth: int | None = None,
) -> None:
    """Record one block's outgoing edges into the four relations.

    next/parent are recorded unconditionally (None when absent). Block and
    list references found in the attributes are recorded only when there is
    at least one, keeping parameter_edges and read_list_edges sparse.

    Args:
        parameter_edges: block -> referenced block ids (sparse)
        read_list_edges: block -> lists read as concatenated strings (sparse)
        next_block_edges: block -> successor (dense)
        parent_block_edges: block -> parent (dense)
        block: Block to extract from
        max_depth: Attribute nesting limit passed to the collector

    Raises:
        DuplicateEdgeError: If any relation already holds this block id
            (the same id was extracted twice, e.g. it appears in two targets)
    """
    block_id = block.id
    _check_fresh(next_block_edges, EdgeRelation.NEXT, block_id)
    _check_fresh(parent_block_edges, EdgeRelation.PARENT, block_id)
    _check_fresh(parameter_edges, EdgeRelation.PARAMETER, block_id)
    _check_fresh(read_list_edges, EdgeRelation.READ_LIST, block_id)

    next_block_edges[block_id] = block.next
    parent_block_edges[block_id] = block.parent

    collector = ReferenceCollector(max_depth=max_depth)
    for attribute in block.attributes:
        collector.visit(attribute.value)

    if collector.block_refs:
        parameter_edges[block_id] = tuple(collector.block_refs)
    if collector.list_refs:
        read_list_edges[block_id] = tuple(collector.list_refs)
