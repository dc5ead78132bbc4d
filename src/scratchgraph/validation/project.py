"""Scratch project analysis.

Runs every analysis pass over a loaded project and gathers the outcome into
one AnalysisResult. Useful for CI pipelines and classroom tooling that
check projects without running them.

Architecture:
    - analyze_project(): Main entry point, orchestrates the passes
    - _check_cycles(): Pass 1 - next/parameter acyclicity
    - _collect_advisories(): Pass 2 - lists read as concatenated strings
    - analyze_project_file(): Loads the project first, reporting load
      failures as an error result

Python 3.13+.
"""

import logging
from pathlib import Path

from scratchgraph.analysis import (
    AnalysisConfig,
    BlockGraph,
    CycleFreeProof,
    check_no_cycles,
    list_concatenation_advisories,
)
from scratchgraph.diagnostics import (
    AnalysisResult,
    CycleError,
    Diagnostic,
    ProjectLoadError,
)
from scratchgraph.project import Project, load_project

__all__ = ["analyze_project", "analyze_project_file"]

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = AnalysisConfig()


def _check_cycles(graph: BlockGraph) -> tuple[CycleFreeProof | None, list[Diagnostic]]:
    """Run the cycle check, turning classified cycles into diagnostics."""
    try:
        return check_no_cycles(graph), []
    except CycleError as e:
        logger.debug("Cycle check failed: %s", e)
        if e.diagnostic is None:
            raise
        return None, [e.diagnostic]


def _collect_advisories(graph: BlockGraph) -> tuple[list[Diagnostic], list[Diagnostic]]:
    """Split advisory output into (errors, warnings) by severity."""
    errors: list[Diagnostic] = []
    warnings: list[Diagnostic] = []
    for diagnostic in list_concatenation_advisories(graph):
        if diagnostic.severity == "warning":
            warnings.append(diagnostic)
        else:
            errors.append(diagnostic)
    return errors, warnings


def analyze_project(
    project: Project,
    *,
    config: AnalysisConfig | None = None,
    graph: BlockGraph | None = None,
) -> AnalysisResult:
    """Analyze a loaded project.

    Analysis passes:
    1. Cycles: the next/parameter structure must be acyclic
    2. Advisories: lists read as concatenated strings; dangling block and
       list ids found on the way are reported as errors

    Args:
        project: Loaded project
        config: Pass selection and limits (default: AnalysisConfig())
        graph: Block graph already built from project (default: built here)

    Returns:
        AnalysisResult with error and warning diagnostics, plus the
        CycleFreeProof when the cycle check ran and passed

    Raises:
        GraphInvariantError: If the project breaks a structural invariant
            (duplicate block ids, runaway attribute nesting)
        ValueError: If graph was built from a different project

    Example:
        >>> result = analyze_project(project)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error.format_error())
    """
    if config is None:
        config = _DEFAULT_CONFIG

    if graph is None:
        graph = BlockGraph.construct(project, max_depth=config.max_depth)
    elif graph.project is not project:
        msg = "graph was built from a different project"
        raise ValueError(msg)

    errors: list[Diagnostic] = []
    warnings: list[Diagnostic] = []
    proof: CycleFreeProof | None = None

    if config.check_cycles:
        proof, cycle_errors = _check_cycles(graph)
        errors.extend(cycle_errors)

    if config.report_list_concatenation:
        advisory_errors, advisory_warnings = _collect_advisories(graph)
        errors.extend(advisory_errors)
        warnings.extend(advisory_warnings)

    logger.debug(
        "Analyzed project: %d blocks, %d errors, %d warnings",
        project.block_count,
        len(errors),
        len(warnings),
    )

    return AnalysisResult(errors=tuple(errors), warnings=tuple(warnings), proof=proof)


def analyze_project_file(
    path: str | Path,
    *,
    config: AnalysisConfig | None = None,
) -> AnalysisResult:
    """Load and analyze a project file (.sb3 or project.json).

    Load failures do not raise; they come back as a result holding a single
    error diagnostic.

    Args:
        path: Path to the project
        config: Pass selection and limits (default: AnalysisConfig())

    Returns:
        AnalysisResult for the project, or a failed result if it did not load
    """
    if config is None:
        config = _DEFAULT_CONFIG

    try:
        project = load_project(path, max_source_size=config.max_source_size)
    except ProjectLoadError as e:
        logger.error("Failed to load project %s: %s", path, e)
        if e.diagnostic is None:
            raise
        return AnalysisResult.from_errors(e.diagnostic)

    return analyze_project(project, config=config)
