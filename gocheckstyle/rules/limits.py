"""Size and signature limit rules.

All limits are disabled by a zero threshold.
"""

from abc import abstractmethod
from typing import TYPE_CHECKING

from tree_sitter import Node

from ..models import ProblemType
from .base import BaseRule

if TYPE_CHECKING:
    from ..config import CheckstyleConfig
    from ..engine import CheckSession


def count_fields(node: Node | None) -> int:
    """Count the fields of a parameter or result list.

    Every declared name is one field; an unnamed declaration or a variadic
    declaration is one field. A bare result type (``func f() error``) is one.
    """
    if node is None:
        return 0
    if node.type != "parameter_list":
        return 1

    count = 0
    for child in node.named_children:
        if child.type == "parameter_declaration":
            count += max(len(child.children_by_field_name("name")), 1)
        elif child.type == "variadic_parameter_declaration":
            count += 1
    return count


def function_label(name: str | None) -> str:
    """How a function is named in problem descriptions."""
    if not name:
        return "func literal"
    return f"func {name}()"


class FileLineRule(BaseRule):
    """Limit the number of physical lines in a file."""

    @property
    def rule_type(self) -> ProblemType:
        return ProblemType.FILE_LINE

    @property
    def name(self) -> str:
        return "File Length"

    def is_enabled(self, config: "CheckstyleConfig") -> bool:
        return config.file_line != 0

    def check(self, session: "CheckSession") -> None:
        limit = session.config.file_line
        line_count = session.parsed.line_count
        if line_count > limit:
            session.report(
                session.parsed.end_of_file(),
                f"{line_count} lines more than {limit}",
                self.rule_type,
            )


class FunctionLineRule(BaseRule):
    """Limit the span of each function, method and function literal."""

    @property
    def rule_type(self) -> ProblemType:
        return ProblemType.FUNC_LINE

    @property
    def name(self) -> str:
        return "Function Length"

    def is_enabled(self, config: "CheckstyleConfig") -> bool:
        return config.func_line != 0

    def check(self, session: "CheckSession", func: Node, name: str | None) -> None:
        limit = session.config.func_line
        start = session.parsed.position(func)
        end = session.parsed.end_position(func)
        line_count = end.line - start.line
        if line_count > limit:
            session.report(
                start,
                f"{function_label(name)} {line_count} lines more than {limit}",
                self.rule_type,
            )


class SignatureLimitRule(BaseRule):
    """Shared logic for the parameter and result count rules."""

    noun = "fields"

    @abstractmethod
    def limit(self, config: "CheckstyleConfig") -> int:
        """Configured threshold; zero disables the rule."""

    def is_enabled(self, config: "CheckstyleConfig") -> bool:
        return self.limit(config) != 0

    def check(
        self, session: "CheckSession", field_list: Node | None, name: str | None
    ) -> None:
        """Report one problem when ``field_list`` exceeds the limit.

        Args:
            session: Current check session.
            field_list: Parameter list, result list, bare result type or None.
            name: Function or interface method name, None for literals.
        """
        if field_list is None:
            return
        limit = self.limit(session.config)
        count = count_fields(field_list)
        if count > limit:
            session.report(
                session.parsed.position(field_list),
                f"{function_label(name)} has {count} {self.noun}, more than {limit}",
                self.rule_type,
            )


class ParamsNumRule(SignatureLimitRule):
    """Limit the number of parameter fields."""

    noun = "params"

    @property
    def rule_type(self) -> ProblemType:
        return ProblemType.PARAMS_NUM

    @property
    def name(self) -> str:
        return "Parameter Count"

    def limit(self, config: "CheckstyleConfig") -> int:
        return config.params_num


class ResultsNumRule(SignatureLimitRule):
    """Limit the number of result fields."""

    noun = "results"

    @property
    def rule_type(self) -> ProblemType:
        return ProblemType.RESULTS_NUM

    @property
    def name(self) -> str:
        return "Result Count"

    def limit(self, config: "CheckstyleConfig") -> int:
        return config.results_num
