"""Tests for analysis.cycles: entry points, the cycle check and its proof.

Python 3.13+.
"""

from __future__ import annotations

import logging

import pytest
from hypothesis import given

from scratchgraph.analysis import BlockGraph, CycleFreeProof, check_no_cycles, entry_points
from scratchgraph.diagnostics import (
    BlockVisitedTwiceError,
    CycleError,
    CycleWithoutEntryError,
    DiagnosticCode,
    GraphInvariantError,
    VisitedMoreThanInDocError,
)
from scratchgraph.project import (
    Block,
    BlockAttribute,
    BlockRef,
    ListRef,
    Project,
    ShadowOrExpression,
)
from tests.strategies import acyclic_projects, project_of, ring_projects


def _param(block_id: str) -> BlockAttribute:
    return BlockAttribute("VALUE", ShadowOrExpression(expression=BlockRef(block_id)))


def _check(project: Project) -> CycleFreeProof:
    return BlockGraph.construct(project).check_no_cycles()


# ============================================================================
# ENTRY POINTS
# ============================================================================


class TestEntryPoints:
    """Blocks without incoming next or parameter edges."""

    def test_script_head_is_only_entry(self) -> None:
        project = project_of(
            [
                Block(id="hat", opcode="event_whenflagclicked", next="say"),
                Block(id="say", opcode="looks_say", parent="hat", attributes=(_param("join"),)),
                Block(id="join", opcode="operator_join", parent="say"),
            ]
        )
        assert entry_points(BlockGraph.construct(project)) == ["hat"]

    def test_parent_and_list_edges_do_not_count(self) -> None:
        project = project_of(
            [
                Block(
                    id="a",
                    opcode="looks_say",
                    attributes=(
                        BlockAttribute(
                            "MESSAGE", ShadowOrExpression(expression=ListRef(id="b", name="b"))
                        ),
                    ),
                ),
                Block(id="b", opcode="looks_think", parent="a"),
            ]
        )
        assert entry_points(BlockGraph.construct(project)) == ["a", "b"]


# ============================================================================
# SUCCESSFUL CHECKS
# ============================================================================


class TestCheckNoCyclesAccepts:
    """Acyclic documents produce a proof."""

    def test_empty_document(self) -> None:
        proof = _check(Project())
        assert proof.project == Project()

    def test_chain(self) -> None:
        project = project_of(
            [
                Block(id="A", opcode="motion_movesteps", next="B"),
                Block(id="B", opcode="motion_turnright", next="C"),
                Block(id="C", opcode="motion_turnleft"),
            ]
        )
        proof = _check(project)
        assert proof.project is project

    def test_function_form_matches_method(self) -> None:
        graph = BlockGraph.construct(project_of([Block(id="A", opcode="looks_show")]))
        assert check_no_cycles(graph).project is graph.project

    def test_check_is_repeatable(self) -> None:
        graph = BlockGraph.construct(
            project_of(
                [
                    Block(id="A", opcode="looks_show", next="B"),
                    Block(id="B", opcode="looks_hide"),
                ]
            )
        )
        first = graph.check_no_cycles()
        second = graph.check_no_cycles()
        assert first.project is second.project

    @given(acyclic_projects())
    def test_forests_are_acyclic(self, project: Project) -> None:
        """PROPERTY: every forest-shaped document passes."""
        proof = _check(project)
        assert proof.project is project


# ============================================================================
# REJECTED CHECKS
# ============================================================================


class TestCheckNoCyclesRejects:
    """Cycles and invariant violations are classified."""

    def test_two_block_next_cycle_without_entry(self) -> None:
        project = project_of(
            [
                Block(id="A", opcode="control_wait", next="B"),
                Block(id="B", opcode="control_wait", next="A"),
            ]
        )

        with pytest.raises(CycleWithoutEntryError) as exc_info:
            _check(project)

        assert exc_info.value.doc_block_count == 2
        assert exc_info.value.visited_count == 0
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.CYCLE_WITHOUT_ENTRY

    def test_cycle_reached_from_entry(self) -> None:
        project = project_of(
            [
                Block(id="E", opcode="looks_say", attributes=(_param("A"),)),
                Block(id="A", opcode="control_wait", next="B"),
                Block(id="B", opcode="control_wait", next="A"),
            ]
        )

        with pytest.raises(BlockVisitedTwiceError) as exc_info:
            _check(project)

        assert exc_info.value.block_id == "A"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.BLOCK_VISITED_TWICE

    def test_shared_input_is_visited_twice(self) -> None:
        """Two parents referencing one reporter is a revisit."""
        project = project_of(
            [
                Block(id="P", opcode="looks_say", attributes=(_param("R"),)),
                Block(id="Q", opcode="looks_think", attributes=(_param("R"),)),
                Block(id="R", opcode="operator_random"),
            ]
        )

        with pytest.raises(BlockVisitedTwiceError) as exc_info:
            _check(project)
        assert exc_info.value.block_id == "R"

    def test_self_loop_via_parameter(self) -> None:
        project = project_of([Block(id="A", opcode="operator_add", attributes=(_param("A"),))])

        with pytest.raises(CycleWithoutEntryError) as exc_info:
            _check(project)
        assert (exc_info.value.doc_block_count, exc_info.value.visited_count) == (1, 0)

    def test_dangling_next_does_not_hide_self_loop(self) -> None:
        """A dangling id is not counted in place of an unreached block."""
        project = project_of(
            [
                Block(id="E", opcode="looks_show", next="ghost"),
                Block(id="A", opcode="control_wait", next="A"),
            ]
        )

        with pytest.raises(CycleWithoutEntryError) as exc_info:
            _check(project)
        assert (exc_info.value.doc_block_count, exc_info.value.visited_count) == (2, 1)

    def test_dangling_parameter_does_not_hide_ring(self) -> None:
        project = project_of(
            [
                Block(id="E", opcode="looks_say", attributes=(_param("phantom"),)),
                Block(id="A", opcode="control_wait", next="B"),
                Block(id="B", opcode="control_wait", next="A"),
            ]
        )

        with pytest.raises(CycleWithoutEntryError) as exc_info:
            _check(project)
        assert (exc_info.value.doc_block_count, exc_info.value.visited_count) == (3, 1)

    def test_dangling_next_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        project = project_of([Block(id="A", opcode="looks_show", next="ghost")])

        with caplog.at_level(logging.WARNING, logger="scratchgraph.analysis.cycles"):
            proof = _check(project)

        assert proof.project is project
        assert "ghost" in caplog.text

    def test_graph_out_of_sync_is_invariant_violation(self) -> None:
        project = project_of([Block(id="A", opcode="looks_show", next="B")])
        graph = BlockGraph(
            project=project,
            parameter_edges={},
            read_list_edges={},
            next_block_edges={"A": "B", "B": None},
            parent_block_edges={"A": None, "B": "A"},
        )

        with pytest.raises(VisitedMoreThanInDocError) as exc_info:
            graph.check_no_cycles()

        error = exc_info.value
        assert isinstance(error, GraphInvariantError)
        assert not isinstance(error, CycleError)
        assert (error.doc_block_count, error.visited_count) == (1, 2)

    @given(ring_projects())
    def test_rings_have_no_entry(self, project: Project) -> None:
        """PROPERTY: a rootless ring of n blocks reports (n, 0)."""
        with pytest.raises(CycleWithoutEntryError) as exc_info:
            _check(project)

        assert exc_info.value.doc_block_count == project.block_count
        assert exc_info.value.visited_count == 0


# ============================================================================
# PROOF
# ============================================================================


class TestCycleFreeProof:
    """The proof cannot be forged."""

    def test_direct_construction_rejected(self) -> None:
        with pytest.raises(TypeError, match="check_no_cycles"):
            CycleFreeProof(Project())

    def test_wrong_token_rejected(self) -> None:
        with pytest.raises(TypeError):
            CycleFreeProof(Project(), _token=object())

    def test_repr_mentions_block_count(self) -> None:
        proof = _check(project_of([Block(id="A", opcode="looks_show")]))
        assert repr(proof) == "CycleFreeProof(blocks=1)"
