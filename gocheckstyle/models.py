"""Core data types: problem tags, positions and problems."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ProblemType(Enum):
    """Rule-type tags, shared by problems and the ``fatal`` option."""

    FILE_LINE = "file_line"
    FUNC_LINE = "func_line"
    PARAMS_NUM = "params_num"
    RESULTS_NUM = "results_num"
    FORMATED = "formated"
    PKG_NAME = "pkg_name"
    CAMEL_NAME = "camel_name"


class Severity(Enum):
    """Reporting severity derived from the configured fatal tags."""

    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Position:
    """A 1-based location in a source file. Columns count bytes."""

    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def to_dict(self) -> dict[str, Any]:
        return {"filename": self.filename, "line": self.line, "column": self.column}


@dataclass(frozen=True)
class Problem:
    """One style violation found during a check pass."""

    position: Position
    description: str
    rule_type: ProblemType
    source_line: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "position": self.position.to_dict(),
            "description": self.description,
            "rule_type": self.rule_type.value,
            "source_line": self.source_line,
        }


__all__ = ["Position", "Problem", "ProblemType", "Severity"]
