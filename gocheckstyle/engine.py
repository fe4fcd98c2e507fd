"""Rule engine for Go style checks.

The :class:`Checker` parses one file and hands it to a :class:`CheckSession`,
which runs the file-level rules and then walks every declaration,
dispatching on :class:`~gocheckstyle.syntax.NodeKind`. Declarations nest
arbitrarily (closures in functions, structs in functions, methods in
interface types), so per-declaration rules are applied wherever the walk
finds one.

Example usage:
    from gocheckstyle import create_checker

    checker = create_checker(b'{"func_line": 50, "camel_name": true}')
    for problem in checker.check("main.go", source):
        print(problem.position, problem.description)
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import ClassVar

from tree_sitter import Node

from .checkstyle_logging import get_logger
from .config import CheckstyleConfig, load_config
from .models import Position, Problem, ProblemType, Severity
from .rules import (
    CamelNameRule,
    FileLineRule,
    FormattedRule,
    FunctionLineRule,
    PackageNameRule,
    ParamsNumRule,
    ResultsNumRule,
)
from .syntax import (
    CONST_SPEC_TYPES,
    IMPORT_SPEC_TYPES,
    INTERFACE_METHOD_TYPES,
    SPEC_LIST_TYPES,
    TYPE_SPEC_TYPES,
    VAR_SPEC_TYPES,
    GoSyntax,
    NodeKind,
    ParsedFile,
    SyntaxProvider,
    classify,
    is_test_file,
)

logger = get_logger("engine")

Handler = Callable[[Node, bool], None]


@dataclass
class CheckSession:
    """State of one check call: the parsed file and the problems found."""

    file_name: str
    src: bytes
    config: CheckstyleConfig
    syntax: SyntaxProvider
    parsed: ParsedFile
    problems: list[Problem] = field(default_factory=list)

    formatted_rule: ClassVar[FormattedRule] = FormattedRule()
    file_line_rule: ClassVar[FileLineRule] = FileLineRule()
    func_line_rule: ClassVar[FunctionLineRule] = FunctionLineRule()
    params_rule: ClassVar[ParamsNumRule] = ParamsNumRule()
    results_rule: ClassVar[ResultsNumRule] = ResultsNumRule()
    camel_rule: ClassVar[CamelNameRule] = CamelNameRule()
    pkg_rule: ClassVar[PackageNameRule] = PackageNameRule()

    def __post_init__(self) -> None:
        self.handlers: dict[NodeKind, Handler] = {
            NodeKind.FUNCTION: self._visit_function,
            NodeKind.METHOD: self._visit_method,
            NodeKind.FUNC_LITERAL: self._visit_func_literal,
            NodeKind.IMPORT_GROUP: self._visit_import_group,
            NodeKind.CONST_GROUP: self._visit_const_group,
            NodeKind.VAR_GROUP: self._visit_var_group,
            NodeKind.TYPE_GROUP: self._visit_type_group,
            NodeKind.SHORT_VAR: self._visit_short_var,
            NodeKind.TYPE_SWITCH: self._visit_type_switch,
            NodeKind.STRUCT: self._visit_struct,
            NodeKind.INTERFACE: self._visit_interface,
            NodeKind.OTHER: self._visit_other,
        }

    @property
    def is_test(self) -> bool:
        return is_test_file(self.file_name)

    def report(self, position: Position, description: str, rule_type: ProblemType) -> None:
        """Record a problem at ``position``."""
        self.problems.append(
            Problem(
                position=position,
                description=description,
                rule_type=rule_type,
                source_line=self.parsed.line_text(position.line),
            )
        )

    def run(self) -> list[Problem]:
        """Apply all enabled rules in their fixed order."""
        if self.formatted_rule.is_enabled(self.config):
            self.formatted_rule.check(self)

        if self.is_test:
            return self.problems

        if self.file_line_rule.is_enabled(self.config):
            self.file_line_rule.check(self)

        if self.pkg_rule.is_enabled(self.config):
            self.pkg_rule.check(self)

        for declaration in self.parsed.declarations:
            self.visit(declaration, nested=False)

        return self.problems

    def visit(self, node: Node, nested: bool) -> None:
        """Dispatch ``node`` to the handler for its kind.

        Args:
            node: Tree node.
            nested: True inside a function body.
        """
        self.handlers[classify(node)](node, nested)

    # --- handlers, one per NodeKind ---

    def _visit_other(self, node: Node, nested: bool) -> None:
        # Iterative so long expression chains don't exhaust the stack.
        stack = list(reversed(node.named_children))
        while stack:
            child = stack.pop()
            kind = classify(child)
            if kind is NodeKind.OTHER:
                stack.extend(reversed(child.named_children))
            else:
                self.handlers[kind](child, nested)

    def _visit_function(self, node: Node, nested: bool) -> None:
        name_node = node.child_by_field_name("name")
        name = self.parsed.text(name_node) if name_node else None
        self._check_function_line(node, name)
        if name_node:
            self._check_name(name_node, "func", False)
        self._check_signature(node, name)
        self._visit_body(node)

    def _visit_method(self, node: Node, nested: bool) -> None:
        name_node = node.child_by_field_name("name")
        name = self.parsed.text(name_node) if name_node else None
        self._check_function_line(node, name)
        if name_node:
            self._check_name(name_node, "method", False)
        self._check_field_names(node.child_by_field_name("receiver"), "receiver")
        self._check_signature(node, name)
        self._visit_body(node)

    def _visit_func_literal(self, node: Node, nested: bool) -> None:
        self._check_function_line(node, None)
        self._check_signature(node, None)
        self._visit_body(node)

    def _visit_import_group(self, node: Node, nested: bool) -> None:
        for spec in self._specs(node, IMPORT_SPEC_TYPES):
            alias = spec.child_by_field_name("name")
            if alias is not None and alias.type == "package_identifier":
                self._check_name(alias, "import", False)

    def _visit_const_group(self, node: Node, nested: bool) -> None:
        self._visit_value_specs(node, CONST_SPEC_TYPES, "const", nested)

    def _visit_var_group(self, node: Node, nested: bool) -> None:
        self._visit_value_specs(node, VAR_SPEC_TYPES, "var", nested)

    def _visit_type_group(self, node: Node, nested: bool) -> None:
        for spec in self._specs(node, TYPE_SPEC_TYPES):
            name_node = spec.child_by_field_name("name")
            if name_node is not None:
                self._check_name(name_node, "type", False)
            type_node = spec.child_by_field_name("type")
            if type_node is not None:
                self.visit(type_node, nested)

    def _visit_short_var(self, node: Node, nested: bool) -> None:
        # Receive and range clauses also come in a plain "=" form.
        left = node.child_by_field_name("left")
        if left is not None and self._defines(node):
            self._check_defined_names(left)
        right = node.child_by_field_name("right")
        if right is not None:
            self.visit(right, nested)

    def _visit_type_switch(self, node: Node, nested: bool) -> None:
        alias = node.child_by_field_name("alias")
        for child in node.named_children:
            if child == alias:
                self._check_defined_names(child)
            else:
                self.visit(child, nested)

    def _visit_struct(self, node: Node, nested: bool) -> None:
        for field_list in node.named_children:
            if field_list.type != "field_declaration_list":
                continue
            for field_decl in field_list.named_children:
                if field_decl.type != "field_declaration":
                    continue
                for ident in field_decl.children_by_field_name("name"):
                    self._check_name(ident, "field", False)
                type_node = field_decl.child_by_field_name("type")
                if type_node is not None:
                    self.visit(type_node, nested)

    def _visit_interface(self, node: Node, nested: bool) -> None:
        for method in self._interface_methods(node):
            name_node = method.child_by_field_name("name")
            name = self.parsed.text(name_node) if name_node else None
            if name_node:
                self._check_name(name_node, "method", False)
            self._check_signature(method, name)

    # --- helpers ---

    def _specs(self, node: Node, spec_types: set[str]) -> Iterator[Node]:
        """Specs of a declaration group, flattening parenthesized lists."""
        for child in node.named_children:
            if child.type in spec_types:
                yield child
            elif child.type in SPEC_LIST_TYPES:
                yield from self._specs(child, spec_types)

    def _interface_methods(self, node: Node) -> Iterator[Node]:
        for child in node.named_children:
            if child.type in INTERFACE_METHOD_TYPES:
                yield child
            elif child.type == "method_spec_list":
                yield from self._interface_methods(child)

    def _visit_value_specs(
        self, node: Node, spec_types: set[str], kind: str, nested: bool
    ) -> None:
        for spec in self._specs(node, spec_types):
            for ident in spec.children_by_field_name("name"):
                self._check_name(ident, kind, nested)
            # Types and initializers may hold struct types and closures.
            self._visit_other(spec, nested)

    def _visit_body(self, node: Node) -> None:
        body = node.child_by_field_name("body")
        if body is not None:
            self.visit(body, nested=True)

    def _check_function_line(self, node: Node, name: str | None) -> None:
        if self.func_line_rule.is_enabled(self.config):
            self.func_line_rule.check(self, node, name)

    def _check_signature(self, node: Node, name: str | None) -> None:
        params = node.child_by_field_name("parameters")
        result = node.child_by_field_name("result")
        if self.params_rule.is_enabled(self.config):
            self.params_rule.check(self, params, name)
        if self.results_rule.is_enabled(self.config):
            self.results_rule.check(self, result, name)
        self._check_field_names(params, "param")
        self._check_field_names(result, "result")

    def _check_field_names(self, field_list: Node | None, kind: str) -> None:
        """Names declared in a parameter, result or receiver list."""
        if field_list is None or field_list.type != "parameter_list":
            return
        for decl in field_list.named_children:
            if decl.type in ("parameter_declaration", "variadic_parameter_declaration"):
                for ident in decl.children_by_field_name("name"):
                    self._check_name(ident, kind, True)

    def _defines(self, node: Node) -> bool:
        """Whether an assignment-like node declares with ``:=``."""
        return any(child.type == ":=" for child in node.children)

    def _check_defined_names(self, names: Node) -> None:
        for ident in names.named_children:
            if ident.type == "identifier":
                self._check_name(ident, "var", True)

    def _check_name(self, ident: Node, kind: str, not_first_cap: bool) -> None:
        if self.camel_rule.is_enabled(self.config):
            self.camel_rule.check(self, ident, kind, not_first_cap)


class Checker:
    """Applies the configured style rules to Go source files.

    A checker holds no per-file state; ``check`` may be called concurrently
    from several threads.
    """

    def __init__(self, config: CheckstyleConfig, syntax: SyntaxProvider | None = None):
        """Initialize the checker.

        Args:
            config: Rule configuration, shared read-only by all checks.
            syntax: Declaration-tree provider. Defaults to :class:`GoSyntax`.
        """
        self.config = config
        self.syntax = syntax or GoSyntax()
        self._fatal_tags = config.fatal_tags

    def check(self, file_name: str, src: bytes) -> list[Problem]:
        """Check one source file.

        Args:
            file_name: Name used in problem positions and to detect test files.
            src: Raw source bytes.

        Returns:
            Problems in rule order; empty when nothing fires.

        Raises:
            ParseError: If the source does not parse. No problems are returned.
            CanonicalFormatError: If gofmt fails on source that parsed.
        """
        parsed = self.syntax.parse(file_name, src)
        session = CheckSession(
            file_name=file_name,
            src=src,
            config=self.config,
            syntax=self.syntax,
            parsed=parsed,
        )
        problems = session.run()
        logger.debug(f"{file_name}: {len(problems)} problem(s)")
        return problems

    def is_fatal(self, problem: Problem) -> bool:
        """Whether the problem's rule type is configured as fatal."""
        return problem.rule_type.value in self._fatal_tags

    def severity_of(self, problem: Problem) -> Severity:
        return Severity.ERROR if self.is_fatal(problem) else Severity.WARNING


def create_checker(config: bytes | str, syntax: SyntaxProvider | None = None) -> Checker:
    """Create a checker from a JSON configuration document.

    Raises:
        ConfigError: If the document is malformed.
    """
    return Checker(load_config(config), syntax=syntax)


__all__ = ["CheckSession", "Checker", "create_checker"]
