"""Diagnostic system for scratchgraph.

Provides structured error diagnostics with codes, hints, and help URLs,
plus the exception hierarchy raised by the analysis passes.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    BlockVisitedTwiceError,
    CycleError,
    CycleWithoutEntryError,
    DanglingReferenceError,
    DuplicateEdgeError,
    GraphInvariantError,
    ProjectLoadError,
    ScratchGraphError,
    VisitedMoreThanInDocError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate
from .validation import AnalysisResult

__all__ = [
    "AnalysisResult",
    "BlockVisitedTwiceError",
    "CycleError",
    "CycleWithoutEntryError",
    "DanglingReferenceError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DuplicateEdgeError",
    "ErrorTemplate",
    "GraphInvariantError",
    "OutputFormat",
    "ProjectLoadError",
    "ScratchGraphError",
    "VisitedMoreThanInDocError",
]
