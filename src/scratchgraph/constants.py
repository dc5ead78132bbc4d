"""Shared constants for scratchgraph.

This module provides centralized configuration constants used across
the project loader and the analysis passes. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for attribute traversal
- Input limits: Size constraints for project files
- Archive layout: Member names inside .sb3 archives

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_PROJECT_SIZE",
    # Archive layout
    "PROJECT_JSON_MEMBER",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth for attribute traversal.
# Attribute values nest a handful of levels at most (procedure argument map ->
# expression -> block reference). 100 levels is malformed input.
MAX_DEPTH: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum size of a decoded project.json in bytes (64 MB).
# Large classroom projects stay well below 10 MB of JSON.
MAX_PROJECT_SIZE: int = 64 * 1024 * 1024

# ============================================================================
# ARCHIVE LAYOUT
# ============================================================================

# Scratch 3 archives store the document in a single JSON member.
PROJECT_JSON_MEMBER: str = "project.json"

