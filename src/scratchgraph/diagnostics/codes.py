"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Reference errors (ids that do not resolve)
        2000-2999: Cycle errors (control/evaluation structure not acyclic)
        3000-3999: Invariant violations (broken input or traversal assumptions)
        4000-4999: Project loading errors
        5100-5199: Advisories (legal but easily misread constructs)
    """

    # Reference errors (1000-1999)
    BLOCK_NOT_FOUND = 1001
    LIST_NOT_FOUND = 1002

    # Cycle errors (2000-2999)
    BLOCK_VISITED_TWICE = 2001
    CYCLE_WITHOUT_ENTRY = 2002

    # Invariant violations (3000-3999)
    VISITED_MORE_THAN_IN_DOC = 3001
    DUPLICATE_EDGE_INSERT = 3002
    MAX_DEPTH_EXCEEDED = 3003

    # Project loading errors (4000-4999)
    PROJECT_READ_FAILED = 4001
    PROJECT_JSON_INVALID = 4002
    PROJECT_STRUCTURE_INVALID = 4003
    PROJECT_TOO_LARGE = 4004

    # Advisories (5100-5199)
    LIST_READ_AS_CONCATENATION = 5101


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Provides rich error information for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        help_url: Documentation URL for this error
        block_id: Block the diagnostic is about (if any)
        opcode: Opcode of that block (if known)
        list_id: List the diagnostic is about (if any)
        target_name: Owning target (sprite or stage), if known
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    help_url: str | None = None
    block_id: str | None = None
    opcode: str | None = None
    list_id: str | None = None
    target_name: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler error.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[BLOCK_VISITED_TWICE]: Block 'a' is reachable twice from an entry point
              --> block a
              = help: Check the 'next' links and inputs that lead back into this block

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
