"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from .validation import AnalysisResult

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Compiler-style multi-line output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Formats Diagnostic objects into human-readable or machine-readable
    output.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate messages to max_content_length
        color: Enable ANSI color codes (for terminal output)
        max_content_length: Maximum message length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.block_visited_twice("a")
        >>> print(formatter.format(diagnostic))
        error[BLOCK_VISITED_TWICE]: Block 'a' is reachable twice from an entry point
          --> block a
          = help: Check the 'next' links and inputs that lead back into this block

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        BLOCK_VISITED_TWICE: Block 'a' is reachable twice from an entry point
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics, separated by blank lines (JSON: one per line)."""
        separator = "\n" if self.output_format is OutputFormat.JSON else "\n\n"
        return separator.join(self.format(d) for d in diagnostics)

    def format_result(self, result: "AnalysisResult") -> str:
        """Format an AnalysisResult with a summary line and all diagnostics.

        Args:
            result: AnalysisResult to format

        Returns:
            Formatted string with summary and details
        """
        if self.output_format is OutputFormat.JSON:
            return self.format_all((*result.errors, *result.warnings))

        parts: list[str] = []

        if result.is_valid:
            parts.append(
                f"Analysis passed: {result.warning_count} advisory warning(s)"
            )
        else:
            parts.append(
                f"Analysis failed: {result.error_count} error(s), "
                f"{result.warning_count} warning(s)"
            )

        if result.errors:
            parts.append("")
            parts.append(self.format_all(result.errors))

        if result.warnings:
            parts.append("")
            parts.append(self.format_all(result.warnings))

        return "\n".join(parts)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in compiler style.

        Example output:
            warning[LIST_READ_AS_CONCATENATION]: Block (looks_say) reads list 'items' ...
              --> block k2 (looks_say) in Sprite1
              = help: If you are calculating the length of this value, ...
              = note: see https://en.scratch-wiki.info/wiki/List
        """
        severity = diagnostic.severity if diagnostic.severity == "warning" else "error"

        if self.color:
            if severity == "error":
                severity_str = f"\033[1;31m{severity}\033[0m"  # Bold red
            else:
                severity_str = f"\033[1;33m{severity}\033[0m"  # Bold yellow
        else:
            severity_str = severity

        message = self._maybe_sanitize(diagnostic.message)
        parts = [f"{severity_str}[{diagnostic.code.name}]: {message}"]

        if diagnostic.block_id:
            location = f"  --> block {diagnostic.block_id}"
            if diagnostic.opcode:
                location += f" ({diagnostic.opcode})"
            if diagnostic.target_name:
                location += f" in {diagnostic.target_name}"
            parts.append(location)

        if diagnostic.list_id:
            parts.append(f"  = list: {diagnostic.list_id}")

        if diagnostic.hint:
            hint = self._maybe_sanitize(diagnostic.hint)
            parts.append(f"  = help: {hint}")

        if diagnostic.help_url:
            parts.append(f"  = note: see {diagnostic.help_url}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            BLOCK_VISITED_TWICE: Block 'a' is reachable twice from an entry point
        """
        message = self._maybe_sanitize(diagnostic.message)
        return f"{diagnostic.code.name}: {message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "BLOCK_NOT_FOUND", "code_value": 1001, "message": "...", ...}
        """
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
            "severity": diagnostic.severity,
        }

        if diagnostic.block_id:
            data["block_id"] = diagnostic.block_id

        if diagnostic.opcode:
            data["opcode"] = diagnostic.opcode

        if diagnostic.list_id:
            data["list_id"] = diagnostic.list_id

        if diagnostic.target_name:
            data["target_name"] = diagnostic.target_name

        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        if diagnostic.help_url:
            data["help_url"] = diagnostic.help_url

        return json.dumps(data, ensure_ascii=False)

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled."""
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
