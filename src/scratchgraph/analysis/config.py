"""Analysis configuration.

Provides a single frozen dataclass that encapsulates the knobs of the
analysis pipeline.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from scratchgraph.constants import MAX_DEPTH, MAX_PROJECT_SIZE

__all__ = ["AnalysisConfig"]


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Immutable configuration for analyze_project.

    All fields have sensible defaults; ``AnalysisConfig()`` runs every pass.

    Attributes:
        max_depth: Attribute nesting limit for edge extraction (default: 100).
        check_cycles: Run the next/parameter acyclicity check (default: True).
        report_list_concatenation: Emit advisories for lists read as
            concatenated strings (default: True).
        max_source_size: Maximum project.json size in bytes accepted by
            analyze_project_file (default: 64 MB).

    Example:
        >>> config = AnalysisConfig(report_list_concatenation=False)
        >>> result = analyze_project(project, config=config)
    """

    max_depth: int = MAX_DEPTH
    check_cycles: bool = True
    report_list_concatenation: bool = True
    max_source_size: int = MAX_PROJECT_SIZE

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If max_depth or max_source_size is not positive.
        """
        if self.max_depth <= 0:
            msg = "max_depth must be positive"
            raise ValueError(msg)
        if self.max_source_size <= 0:
            msg = "max_source_size must be positive"
            raise ValueError(msg)
