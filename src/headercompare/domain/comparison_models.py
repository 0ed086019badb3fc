from __future__ import annotations

"""
Comparison Domain Data Models.

Defines the run-local counters accumulated by the tree comparator and the
immutable report handed from the engine to the interface layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass
class ComparisonResult:
    """
    Mutable counters owned by a single comparison.

    Attributes:
        files_compared: Number of leaf-file pairs whose contents were checked.
        errors: Number of mismatches, missing entries and read failures.
        messages: Human-readable error messages, in the order recorded.
    """
    files_compared: int = 0
    errors: int = 0
    messages: List[str] = field(default_factory=list)

    def record_error(self, message: str) -> None:
        self.errors += 1
        self.messages.append(message)

    @property
    def ok(self) -> bool:
        return self.errors == 0


@dataclass(frozen=True)
class RunReport:
    """
    Summary of a complete compile, generate and compare run.

    Attributes:
        source_file_count: Source files matching the naming pattern.
        compiler_header_count: Top-level entries in the compiler header dir.
        generator_header_count: Top-level entries in the generator header dir.
        files_compared: File pairs checked by the tree comparator.
        errors: Total accumulated errors, count cross-check included.
        messages: Error messages in the order recorded.
        classes_dir: Directory holding compiled artifacts.
        compiler_headers_dir: Candidate header tree.
        generator_headers_dir: Golden header tree.
    """
    source_file_count: int
    compiler_header_count: int
    generator_header_count: int
    files_compared: int
    errors: int
    messages: List[str] = field(default_factory=list)

    classes_dir: str = ""
    compiler_headers_dir: str = ""
    generator_headers_dir: str = ""

    @property
    def ok(self) -> bool:
        return self.errors == 0

    @property
    def counts_consistent(self) -> bool:
        return (
            self.compiler_header_count == self.generator_header_count
            and self.compiler_header_count == self.files_compared
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view used by the JSON output mode."""
        return {
            "ok": self.ok,
            "source_file_count": self.source_file_count,
            "compiler_header_count": self.compiler_header_count,
            "generator_header_count": self.generator_header_count,
            "files_compared": self.files_compared,
            "errors": self.errors,
            "messages": list(self.messages),
            "classes_dir": self.classes_dir,
            "compiler_headers_dir": self.compiler_headers_dir,
            "generator_headers_dir": self.generator_headers_dir,
        }
