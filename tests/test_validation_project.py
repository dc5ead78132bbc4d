"""Tests for validation/project.py and AnalysisConfig.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from hypothesis import given

from scratchgraph import AnalysisConfig, analyze_project, analyze_project_file
from scratchgraph.analysis import BlockGraph
from scratchgraph.diagnostics import (
    AnalysisResult,
    DiagnosticCode,
    DuplicateEdgeError,
)
from scratchgraph.project import (
    Block,
    BlockAttribute,
    BlockRef,
    ListDeclaration,
    ListRef,
    Project,
    ShadowOrExpression,
    Target,
)
from tests.strategies import acyclic_projects, project_of


def _list_reader(block_id: str, list_id: str, **kwargs: Any) -> Block:
    return Block(
        id=block_id,
        opcode="looks_say",
        attributes=(
            BlockAttribute(
                "MESSAGE", ShadowOrExpression(expression=ListRef(id=list_id, name=list_id))
            ),
        ),
        **kwargs,
    )


def _ring_with_list_read() -> Project:
    return project_of(
        [
            _list_reader("A", "L", next="B"),
            Block(id="B", opcode="control_wait", next="A"),
        ],
        [ListDeclaration(id="L", name="items")],
    )


# ============================================================================
# AnalysisConfig
# ============================================================================


class TestAnalysisConfig:
    """Construction-time validation."""

    def test_defaults_run_every_pass(self) -> None:
        config = AnalysisConfig()
        assert config.check_cycles
        assert config.report_list_concatenation
        assert config.max_depth == 100

    @pytest.mark.parametrize("field", ["max_depth", "max_source_size"])
    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_limits_rejected(self, field: str, value: int) -> None:
        with pytest.raises(ValueError, match=f"{field} must be positive"):
            AnalysisConfig(**{field: value})


# ============================================================================
# analyze_project
# ============================================================================


class TestAnalyzeProject:
    """Passes combined into one AnalysisResult."""

    def test_clean_project(self) -> None:
        result = analyze_project(project_of([Block(id="A", opcode="looks_show")]))

        assert result.is_valid
        assert result.is_acyclic
        assert result.warning_count == 0

    def test_cycle_and_advisory_reported_together(self) -> None:
        result = analyze_project(_ring_with_list_read())

        assert not result.is_valid
        assert not result.is_acyclic
        assert [d.code for d in result.errors] == [DiagnosticCode.CYCLE_WITHOUT_ENTRY]
        assert [d.code for d in result.warnings] == [DiagnosticCode.LIST_READ_AS_CONCATENATION]

    def test_advisories_do_not_affect_validity(self) -> None:
        project = project_of(
            [_list_reader("A", "L")], [ListDeclaration(id="L", name="items")]
        )
        result = analyze_project(project)

        assert result.is_valid
        assert result.warning_count == 1

    def test_dangling_list_is_error(self) -> None:
        result = analyze_project(project_of([_list_reader("A", "nowhere")]))

        assert [d.code for d in result.errors] == [DiagnosticCode.LIST_NOT_FOUND]
        assert result.is_acyclic

    def test_passes_can_be_disabled(self) -> None:
        config = AnalysisConfig(check_cycles=False, report_list_concatenation=False)
        result = analyze_project(_ring_with_list_read(), config=config)

        assert result == AnalysisResult.valid()

    def test_dangling_next_does_not_mask_cycle(self) -> None:
        project = project_of(
            [
                Block(id="E", opcode="looks_show", next="ghost"),
                Block(id="A", opcode="control_wait", next="A"),
            ]
        )
        result = analyze_project(project)

        assert not result.is_acyclic
        assert [d.code for d in result.errors] == [DiagnosticCode.CYCLE_WITHOUT_ENTRY]

    def test_invariant_violations_propagate(self) -> None:
        duplicate = Project(
            targets=(
                Target(name="Stage", blocks=(Block(id="A", opcode="looks_show"),)),
                Target(name="Sprite1", blocks=(Block(id="A", opcode="looks_hide"),)),
            )
        )
        with pytest.raises(DuplicateEdgeError):
            analyze_project(duplicate)

    def test_entry_reachable_cycle(self) -> None:
        project = project_of(
            [
                Block(
                    id="E",
                    opcode="looks_say",
                    attributes=(
                        BlockAttribute("MESSAGE", ShadowOrExpression(expression=BlockRef("A"))),
                    ),
                ),
                Block(id="A", opcode="control_wait", next="B"),
                Block(id="B", opcode="control_wait", next="A"),
            ]
        )
        [error] = analyze_project(project).errors

        assert error.code == DiagnosticCode.BLOCK_VISITED_TWICE
        assert error.block_id == "A"

    def test_debug_summary_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="scratchgraph"):
            analyze_project(project_of([Block(id="A", opcode="looks_show")]))

        assert "Analyzed project: 1 blocks, 0 errors, 0 warnings" in caplog.text
        assert "Constructed block graph" in caplog.text

    def test_prebuilt_graph_is_reused(self, caplog: pytest.LogCaptureFixture) -> None:
        project = _ring_with_list_read()
        graph = BlockGraph.construct(project)

        with caplog.at_level(logging.DEBUG, logger="scratchgraph"):
            result = analyze_project(project, graph=graph)

        assert "Constructed block graph" not in caplog.text
        assert [d.code for d in result.errors] == [DiagnosticCode.CYCLE_WITHOUT_ENTRY]
        assert result.warning_count == 1

    def test_graph_of_other_project_rejected(self) -> None:
        graph = BlockGraph.construct(project_of([Block(id="A", opcode="looks_show")]))

        with pytest.raises(ValueError, match="different project"):
            analyze_project(_ring_with_list_read(), graph=graph)

    @given(acyclic_projects())
    def test_forests_always_valid(self, project: Project) -> None:
        """PROPERTY: forest-shaped documents without list reads are clean."""
        result = analyze_project(project)
        assert result.is_valid
        assert result.proof is not None
        assert result.proof.project is project


# ============================================================================
# analyze_project_file
# ============================================================================


class TestAnalyzeProjectFile:
    """Loading plus analysis."""

    def test_analyzes_loaded_project(self, write_sb3: Callable[..., Path]) -> None:
        document = {
            "targets": [
                {
                    "name": "Sprite1",
                    "blocks": {
                        "a": {"opcode": "control_wait", "next": "b", "parent": None},
                        "b": {"opcode": "control_wait", "next": "a", "parent": None},
                    },
                }
            ]
        }
        result = analyze_project_file(write_sb3(document))

        assert [d.code for d in result.errors] == [DiagnosticCode.CYCLE_WITHOUT_ENTRY]

    def test_load_failure_becomes_error_result(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        with caplog.at_level(logging.ERROR, logger="scratchgraph.validation.project"):
            result = analyze_project_file(path)

        assert [d.code for d in result.errors] == [DiagnosticCode.PROJECT_JSON_INVALID]
        assert result.proof is None
        assert "Failed to load project" in caplog.text

    def test_size_limit_from_config(self, write_project_json: Callable[..., Path]) -> None:
        path = write_project_json({"targets": []})
        result = analyze_project_file(path, config=AnalysisConfig(max_source_size=5))

        assert [d.code for d in result.errors] == [DiagnosticCode.PROJECT_TOO_LARGE]
