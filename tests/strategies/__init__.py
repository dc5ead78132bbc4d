"""Hypothesis strategies for scratchgraph property-based testing.

Usage:
    from tests.strategies import acyclic_projects, ring_projects
    from tests.strategies.project import project_of

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - acyclic_projects, ring_projects, list_read_projects
"""

from .project import (
    acyclic_projects,
    block_ids,
    list_read_projects,
    project_of,
    ring_projects,
)

__all__ = [
    "acyclic_projects",
    "block_ids",
    "list_read_projects",
    "project_of",
    "ring_projects",
]
