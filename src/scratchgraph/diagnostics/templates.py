"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and consistently formatted, and documents
    every error case in one place.
    """

    # Base documentation URL
    _DOCS_BASE = "https://en.scratch-wiki.info/wiki"

    # ------------------------------------------------------------------
    # Reference errors
    # ------------------------------------------------------------------

    @staticmethod
    def block_not_found(block_id: str) -> Diagnostic:
        """Block id does not resolve within the document.

        Args:
            block_id: The id that was looked up

        Returns:
            Diagnostic for BLOCK_NOT_FOUND
        """
        msg = f"Block '{block_id}' not found in project"
        return Diagnostic(
            code=DiagnosticCode.BLOCK_NOT_FOUND,
            message=msg,
            hint="The project references a block id that no target defines",
            block_id=block_id,
        )

    @staticmethod
    def list_not_found(list_id: str, *, block_id: str | None = None) -> Diagnostic:
        """List id does not resolve within the document.

        Args:
            list_id: The id that was looked up
            block_id: Block holding the reference (if known)

        Returns:
            Diagnostic for LIST_NOT_FOUND
        """
        msg = f"List '{list_id}' not found in project"
        return Diagnostic(
            code=DiagnosticCode.LIST_NOT_FOUND,
            message=msg,
            hint="The project references a list id that no target declares",
            block_id=block_id,
            list_id=list_id,
        )

    # ------------------------------------------------------------------
    # Cycle errors
    # ------------------------------------------------------------------

    @staticmethod
    def block_visited_twice(block_id: str) -> Diagnostic:
        """Entry-reachable cycle.

        Args:
            block_id: The block reached a second time

        Returns:
            Diagnostic for BLOCK_VISITED_TWICE
        """
        msg = f"Block '{block_id}' is reachable twice from an entry point"
        return Diagnostic(
            code=DiagnosticCode.BLOCK_VISITED_TWICE,
            message=msg,
            hint="Check the 'next' links and inputs that lead back into this block",
            block_id=block_id,
        )

    @staticmethod
    def cycle_without_entry(doc_block_count: int, visited_count: int) -> Diagnostic:
        """Rootless cycle.

        Args:
            doc_block_count: Blocks in the document
            visited_count: Blocks reached from entry points

        Returns:
            Diagnostic for CYCLE_WITHOUT_ENTRY
        """
        unreached = doc_block_count - visited_count
        msg = (
            f"{unreached} block(s) form a cycle with no entry point "
            f"(document has {doc_block_count} blocks, visited {visited_count})"
        )
        return Diagnostic(
            code=DiagnosticCode.CYCLE_WITHOUT_ENTRY,
            message=msg,
            hint="Some blocks only reference each other through 'next' links or inputs",
        )

    # ------------------------------------------------------------------
    # Invariant violations
    # ------------------------------------------------------------------

    @staticmethod
    def visited_more_than_in_doc(doc_block_count: int, visited_count: int) -> Diagnostic:
        """Traversal visited graph blocks the document does not hold.

        Args:
            doc_block_count: Blocks in the document
            visited_count: Distinct ids visited

        Returns:
            Diagnostic for VISITED_MORE_THAN_IN_DOC
        """
        msg = (
            f"Visited {visited_count} blocks but the document has only "
            f"{doc_block_count}"
        )
        return Diagnostic(
            code=DiagnosticCode.VISITED_MORE_THAN_IN_DOC,
            message=msg,
            hint="The block graph was not built from this project",
        )

    @staticmethod
    def duplicate_edge_insert(block_id: str, relation: str) -> Diagnostic:
        """Block extracted twice into the same relation.

        Args:
            block_id: The block id
            relation: Relation that already held the id

        Returns:
            Diagnostic for DUPLICATE_EDGE_INSERT
        """
        msg = f"Block '{block_id}' already has {relation} edges"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_EDGE_INSERT,
            message=msg,
            hint="The same block id appears in more than one target",
            block_id=block_id,
        )

    @staticmethod
    def attribute_depth_exceeded(max_depth: int) -> Diagnostic:
        """Attribute nesting deeper than the traversal allows.

        Args:
            max_depth: Maximum allowed depth

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum attribute nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Attribute values nest only a few levels in a valid project",
        )

    # ------------------------------------------------------------------
    # Project loading
    # ------------------------------------------------------------------

    @staticmethod
    def project_read_failed(path: str, reason: str) -> Diagnostic:
        """Project file could not be read.

        Args:
            path: File path
            reason: Underlying error text

        Returns:
            Diagnostic for PROJECT_READ_FAILED
        """
        msg = f"Cannot read project '{path}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.PROJECT_READ_FAILED,
            message=msg,
            hint="Pass an .sb3 archive or an extracted project.json",
        )

    @staticmethod
    def project_json_invalid(reason: str) -> Diagnostic:
        """project.json is not valid JSON.

        Args:
            reason: Decoder error text

        Returns:
            Diagnostic for PROJECT_JSON_INVALID
        """
        msg = f"project.json is not valid JSON: {reason}"
        return Diagnostic(
            code=DiagnosticCode.PROJECT_JSON_INVALID,
            message=msg,
        )

    @staticmethod
    def project_structure_invalid(location: str, reason: str) -> Diagnostic:
        """project.json decoded but does not have the Scratch 3 shape.

        Args:
            location: Where in the document the problem is
            reason: What is wrong

        Returns:
            Diagnostic for PROJECT_STRUCTURE_INVALID
        """
        msg = f"Invalid project structure at {location}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.PROJECT_STRUCTURE_INVALID,
            message=msg,
            hint="Only Scratch 3 (sb3) projects are supported",
        )

    @staticmethod
    def project_too_large(size: int, max_size: int) -> Diagnostic:
        """Project document exceeds the configured size limit.

        Args:
            size: Actual size in bytes
            max_size: Allowed size in bytes

        Returns:
            Diagnostic for PROJECT_TOO_LARGE
        """
        msg = f"project.json is {size} bytes, limit is {max_size}"
        return Diagnostic(
            code=DiagnosticCode.PROJECT_TOO_LARGE,
            message=msg,
            hint="Raise max_source_size if the project is trusted",
        )

    # ------------------------------------------------------------------
    # Advisories
    # ------------------------------------------------------------------

    @staticmethod
    def list_read_as_concatenation(
        opcode: str,
        list_name: str,
        *,
        block_id: str,
        list_id: str,
    ) -> Diagnostic:
        """Block reads a list as the string concatenation of its items.

        Args:
            opcode: Opcode of the reading block
            list_name: Display name of the list
            block_id: Id of the reading block
            list_id: Id of the list

        Returns:
            Warning diagnostic for LIST_READ_AS_CONCATENATION
        """
        msg = (
            f"Block ({opcode}) reads list {list_name!r} as string concatenation "
            f"of its items"
        )
        return Diagnostic(
            code=DiagnosticCode.LIST_READ_AS_CONCATENATION,
            message=msg,
            hint=(
                "If you are calculating the length of this value, this is NOT "
                "the same as the number of items in the list"
            ),
            help_url=f"{ErrorTemplate._DOCS_BASE}/List",
            block_id=block_id,
            opcode=opcode,
            list_id=list_id,
            severity="warning",
        )
