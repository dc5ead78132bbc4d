"""scratchgraph exception hierarchy with structured diagnostics.

All exceptions can store Diagnostic objects for rich error information.

Cycle errors and invariant violations are separate branches so callers
never mistake an impossible traversal state for a real cycle.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class ScratchGraphError(Exception):
    """Base exception for all scratchgraph errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ScratchGraphError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ProjectLoadError(ScratchGraphError):
    """Project file could not be read or decoded into the object model."""


class DanglingReferenceError(ScratchGraphError, LookupError):
    """A graph relation holds an id the document cannot resolve.

    Produced lazily, one per failed lookup. Sequences of results carry it as a
    value for the failing item instead of raising.

    Attributes:
        reference_id: The id that did not resolve
        kind: 'block' or 'list'
    """

    def __init__(self, message: str | Diagnostic, *, reference_id: str, kind: str) -> None:
        super().__init__(message)
        self.reference_id = reference_id
        self.kind = kind


class CycleError(ScratchGraphError):
    """The next/parameter reference structure is not acyclic."""


class BlockVisitedTwiceError(CycleError):
    """A path from an entry point loops back into itself.

    Attributes:
        block_id: The block reached a second time
    """

    def __init__(self, message: str | Diagnostic, *, block_id: str) -> None:
        super().__init__(message)
        self.block_id = block_id


class CycleWithoutEntryError(CycleError):
    """Blocks left unvisited form cycles that no entry point reaches.

    Only aggregate counts are reported. The members of the cycle are not
    named.

    Attributes:
        doc_block_count: Blocks in the document
        visited_count: Blocks reached from entry points
    """

    def __init__(
        self, message: str | Diagnostic, *, doc_block_count: int, visited_count: int
    ) -> None:
        super().__init__(message)
        self.doc_block_count = doc_block_count
        self.visited_count = visited_count


class GraphInvariantError(ScratchGraphError):
    """The input or the traversal broke an assumption the analysis relies on.

    Not a user-facing finding. Typical cause: the same block id appears in
    more than one target.
    """


class VisitedMoreThanInDocError(GraphInvariantError):
    """The cycle check visited more blocks than the document holds.

    Attributes:
        doc_block_count: Blocks in the document
        visited_count: Distinct ids visited
    """

    def __init__(
        self, message: str | Diagnostic, *, doc_block_count: int, visited_count: int
    ) -> None:
        super().__init__(message)
        self.doc_block_count = doc_block_count
        self.visited_count = visited_count


class DuplicateEdgeError(GraphInvariantError):
    """A relation already had an entry for a block being extracted.

    Attributes:
        block_id: The block extracted twice
        relation: Name of the relation that already held it
    """

    def __init__(self, message: str | Diagnostic, *, block_id: str, relation: str) -> None:
        super().__init__(message)
        self.block_id = block_id
        self.relation = relation
