"""scratchgraph - structural analysis of Scratch 3 projects.

Builds a reference graph over the blocks of a Scratch project, proves that
its next/parameter structure is acyclic, and reports blocks that read a
list as the concatenation of its items.

Public API:
    load_project - Load an .sb3 archive or project.json
    parse_project - Decode project.json content
    BlockGraph - Block reference graph (construct, check_no_cycles)
    CycleFreeProof - Evidence returned by a passing cycle check
    analyze_project - Run every pass and collect diagnostics
    analyze_project_file - Load, then analyze
    AnalysisConfig - Pass selection and limits

Exceptions:
    ScratchGraphError - Base exception class
    ProjectLoadError - Project could not be loaded
    CycleError - Next/parameter structure is cyclic
    GraphInvariantError - Impossible graph state
    DanglingReferenceError - Unresolvable block or list id

Submodules:
    scratchgraph.project - Document model and loader
    scratchgraph.analysis - Graph construction, cycle check, advisories
    scratchgraph.diagnostics - Diagnostic codes, templates, formatting
    scratchgraph.validation - Whole-project analysis entry points
"""

from .analysis import AnalysisConfig, BlockGraph, CycleFreeProof
from .diagnostics import (
    AnalysisResult,
    CycleError,
    DanglingReferenceError,
    GraphInvariantError,
    ProjectLoadError,
    ScratchGraphError,
)
from .project import Project, load_project, parse_project
from .validation import analyze_project, analyze_project_file

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("scratchgraph")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "BlockGraph",
    "CycleError",
    "CycleFreeProof",
    "DanglingReferenceError",
    "GraphInvariantError",
    "Project",
    "ProjectLoadError",
    "ScratchGraphError",
    "__version__",
    "analyze_project",
    "analyze_project_file",
    "load_project",
    "parse_project",
]
