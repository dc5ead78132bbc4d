"""Unified analysis result for project analysis.

Consolidates feedback from all analysis passes:
- Cycle check: errors for entry-reachable and rootless cycles
- Reference lookups: errors for dangling block and list ids
- Advisories: warnings for lists read as concatenated strings

Python 3.13+.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from scratchgraph.analysis.cycles import CycleFreeProof

__all__ = ["AnalysisResult"]


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Immutable result of analyzing one project.

    Attributes:
        errors: Error-severity diagnostics
        warnings: Advisory diagnostics
        proof: Cycle-free proof when the cycle check passed, else None

    Example:
        >>> result = AnalysisResult.valid()
        >>> result.is_valid
        True
        >>> result.error_count
        0
    """

    errors: tuple[Diagnostic, ...]
    warnings: tuple[Diagnostic, ...]
    proof: "CycleFreeProof | None" = None

    @property
    def is_valid(self) -> bool:
        """Check if analysis found no errors.

        Warnings do not affect validity - they're informational.
        """
        return len(self.errors) == 0

    @property
    def is_acyclic(self) -> bool:
        """True when the cycle check produced a proof."""
        return self.proof is not None

    @property
    def error_count(self) -> int:
        """Get number of errors."""
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        """Get number of advisory warnings."""
        return len(self.warnings)

    @staticmethod
    def valid() -> "AnalysisResult":
        """Create a result with no errors or warnings."""
        return AnalysisResult(errors=(), warnings=())

    @staticmethod
    def from_errors(*errors: Diagnostic) -> "AnalysisResult":
        """Create a failed result from error diagnostics only."""
        return AnalysisResult(errors=tuple(errors), warnings=())
