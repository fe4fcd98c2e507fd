"""Output reporters for style check results.

A reporter receives the problems of each checked file and, once all files
are done, renders them and returns the exit status the run should end with.
Each reporter is created for one run and owns its own tallies.
"""

import json
import sys
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Any, TextIO

from .engine import Checker
from .models import Problem

EXIT_OK = 0
EXIT_FATAL = 1


class Reporter(ABC):
    """Collects problems across files and renders them at the end."""

    def __init__(self, checker: Checker, stream: TextIO):
        """Initialize the reporter.

        Args:
            checker: Checker whose configuration classifies severities.
            stream: Output stream.
        """
        self.checker = checker
        self.stream = stream
        self.has_fatal = False

    @abstractmethod
    def receive_problems(self, file_name: str, problems: list[Problem]) -> None:
        """Record the problems found in one file."""

    @abstractmethod
    def finalize(self) -> int:
        """Render the report.

        Returns:
            Process exit status: EXIT_FATAL if any fatal problem was seen.
        """

    def _exit_status(self) -> int:
        return EXIT_FATAL if self.has_fatal else EXIT_OK


class PlainReporter(Reporter):
    """Human-readable report, normal problems first, then fatal ones.

    Example output:
         ========= There are 1 normal problems =========
        main.go:12:1: func run() 61 lines more than 50
         ========= There are 1 fatal problems =========
        main.go:1:1: source is not formatted
    """

    def __init__(self, checker: Checker, stream: TextIO | None = None):
        super().__init__(checker, stream or sys.stderr)
        self.normal_problems: list[Problem] = []
        self.fatal_problems: list[Problem] = []

    def receive_problems(self, file_name: str, problems: list[Problem]) -> None:
        for problem in problems:
            if self.checker.is_fatal(problem):
                self.fatal_problems.append(problem)
                self.has_fatal = True
            else:
                self.normal_problems.append(problem)

    def finalize(self) -> int:
        if self.normal_problems:
            self._print_header(len(self.normal_problems), "normal")
            self._print_problems(self.normal_problems)

        if self.fatal_problems:
            self._print_header(len(self.fatal_problems), "fatal")
            self._print_problems(self.fatal_problems)

        if not self.normal_problems and not self.fatal_problems:
            print(" ========= There are no problems ========= ", file=self.stream)

        return self._exit_status()

    def _print_header(self, count: int, kind: str) -> None:
        print(f" ========= There are {count} {kind} problems ========= ", file=self.stream)

    def _print_problems(self, problems: list[Problem]) -> None:
        for problem in problems:
            print(f"{problem.position}: {problem.description}", file=self.stream)


class XMLReporter(Reporter):
    """Checkstyle 4.3 XML report, as consumed by CI dashboards."""

    CHECKSTYLE_VERSION = "4.3"

    def __init__(self, checker: Checker, stream: TextIO | None = None):
        super().__init__(checker, stream or sys.stdout)
        self.problems: dict[str, list[Problem]] = {}

    def receive_problems(self, file_name: str, problems: list[Problem]) -> None:
        if not problems:
            return
        self.problems[file_name] = list(problems)

    def finalize(self) -> int:
        root = ET.Element("checkstyle", version=self.CHECKSTYLE_VERSION)
        for file_name, problems in self.problems.items():
            file_element = ET.SubElement(root, "file", name=file_name)
            for problem in problems:
                severity = self.checker.severity_of(problem)
                if self.checker.is_fatal(problem):
                    self.has_fatal = True
                ET.SubElement(
                    file_element,
                    "error",
                    line=str(problem.position.line),
                    column=str(problem.position.column),
                    severity=severity.value,
                    message=problem.description,
                    source=f"checkstyle.{problem.rule_type.value}",
                )

        ET.indent(root, space="\t")
        self.stream.write('<?xml version="1.0" encoding="UTF-8"?>\n')
        self.stream.write(ET.tostring(root, encoding="unicode"))
        self.stream.write("\n")
        return self._exit_status()


class JSONReporter(Reporter):
    """Machine-readable report.

    Output format:
    {
        "problems": [{"file": str, "severity": str, ...Problem.to_dict()}],
        "counts": {"normal": int, "fatal": int},
        "has_fatal": bool
    }
    """

    def __init__(self, checker: Checker, stream: TextIO | None = None):
        super().__init__(checker, stream or sys.stdout)
        self.entries: list[dict[str, Any]] = []
        self.fatal_count = 0

    def receive_problems(self, file_name: str, problems: list[Problem]) -> None:
        for problem in problems:
            severity = self.checker.severity_of(problem)
            if self.checker.is_fatal(problem):
                self.fatal_count += 1
                self.has_fatal = True
            self.entries.append(
                {"file": file_name, "severity": severity.value, **problem.to_dict()}
            )

    def finalize(self) -> int:
        output = {
            "problems": self.entries,
            "counts": {
                "normal": len(self.entries) - self.fatal_count,
                "fatal": self.fatal_count,
            },
            "has_fatal": self.has_fatal,
        }
        json.dump(output, self.stream, indent=2)
        self.stream.write("\n")
        return self._exit_status()


REPORTERS: dict[str, type[Reporter]] = {
    "plain": PlainReporter,
    "xml": XMLReporter,
    "json": JSONReporter,
}


def create_reporter(name: str, checker: Checker, stream: TextIO | None = None) -> Reporter:
    """Create a reporter by name.

    Raises:
        ValueError: If ``name`` is not a known reporter.
    """
    try:
        reporter_class = REPORTERS[name]
    except KeyError:
        raise ValueError(f"Unknown reporter: {name}") from None

    return reporter_class(checker, stream)


__all__ = [
    "EXIT_FATAL",
    "EXIT_OK",
    "JSONReporter",
    "PlainReporter",
    "REPORTERS",
    "Reporter",
    "XMLReporter",
    "create_reporter",
]
