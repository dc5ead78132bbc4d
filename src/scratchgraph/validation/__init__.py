"""Whole-project analysis entry points.

Runs the graph passes over a project and collects diagnostics into an
AnalysisResult.

Python 3.13+.
"""

from scratchgraph.validation.project import analyze_project, analyze_project_file

__all__ = [
    "analyze_project",
    "analyze_project_file",
]
