"""Graph analysis for Scratch projects.

Provides block reference graph construction, the next/parameter
acyclicity check, and list-concatenation advisories.

Python 3.13+.
"""

from .advisories import list_concatenation_advisories
from .config import AnalysisConfig
from .cycles import CycleFreeProof, check_no_cycles, entry_points
from .graph import BlockGraph, ListConcatenationRead
from .visitor import AttributeVisitor, ReferenceCollector

__all__ = [
    "AnalysisConfig",
    "AttributeVisitor",
    "BlockGraph",
    "CycleFreeProof",
    "ListConcatenationRead",
    "ReferenceCollector",
    "check_no_cycles",
    "entry_points",
    "list_concatenation_advisories",
]
