"""Declaration-tree provider for Go source.

Parsing uses the tree-sitter Go grammar; canonical formatting is delegated
to the ``gofmt`` executable. The engine only talks to the
:class:`SyntaxProvider` interface, so tests can substitute either half.
"""

import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from .checkstyle_logging import get_logger
from .errors import CanonicalFormatError, ParseError
from .models import Position

logger = get_logger("syntax")

GO_LANGUAGE = Language(tree_sitter_go.language())

TEST_FILE_SUFFIX = "_test.go"
GOFMT_ENV_VAR = "GOCHECKSTYLE_GOFMT"


class NodeKind(Enum):
    """Declaration-bearing node kinds the checker dispatches on."""

    FUNCTION = "function"
    METHOD = "method"
    FUNC_LITERAL = "func_literal"
    IMPORT_GROUP = "import_group"
    CONST_GROUP = "const_group"
    VAR_GROUP = "var_group"
    TYPE_GROUP = "type_group"
    SHORT_VAR = "short_var"
    TYPE_SWITCH = "type_switch"
    STRUCT = "struct"
    INTERFACE = "interface"
    OTHER = "other"


_KIND_BY_NODE_TYPE = {
    "function_declaration": NodeKind.FUNCTION,
    "method_declaration": NodeKind.METHOD,
    "func_literal": NodeKind.FUNC_LITERAL,
    "import_declaration": NodeKind.IMPORT_GROUP,
    "const_declaration": NodeKind.CONST_GROUP,
    "var_declaration": NodeKind.VAR_GROUP,
    "type_declaration": NodeKind.TYPE_GROUP,
    "short_var_declaration": NodeKind.SHORT_VAR,
    "receive_statement": NodeKind.SHORT_VAR,
    "range_clause": NodeKind.SHORT_VAR,
    "type_switch_statement": NodeKind.TYPE_SWITCH,
    "struct_type": NodeKind.STRUCT,
    "interface_type": NodeKind.INTERFACE,
}

# Spec node types differ between grammar releases.
IMPORT_SPEC_TYPES = {"import_spec"}
CONST_SPEC_TYPES = {"const_spec"}
VAR_SPEC_TYPES = {"var_spec"}
TYPE_SPEC_TYPES = {"type_spec", "type_alias"}
SPEC_LIST_TYPES = {"import_spec_list", "var_spec_list", "const_spec_list", "type_spec_list"}
INTERFACE_METHOD_TYPES = {"method_elem", "method_spec"}


def classify(node: Node) -> NodeKind:
    """Map a tree node to the kind the checker dispatches on."""
    return _KIND_BY_NODE_TYPE.get(node.type, NodeKind.OTHER)


def is_test_file(file_name: str) -> bool:
    """Go test files are recognized by their ``_test.go`` suffix."""
    return file_name.endswith(TEST_FILE_SUFFIX)


@dataclass
class ParsedFile:
    """A parsed source file and its position resolver.

    Lives for the duration of one check call.
    """

    file_name: str
    src: bytes
    root: Node
    _lines: list[bytes] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._lines = self.src.split(b"\n")

    @property
    def line_count(self) -> int:
        """Physical lines; a trailing newline does not start a new line."""
        count = self.src.count(b"\n")
        if self.src and not self.src.endswith(b"\n"):
            count += 1
        return count

    @property
    def package_clause(self) -> Node | None:
        for child in self.root.named_children:
            if child.type == "package_clause":
                return child
        return None

    @property
    def package_name(self) -> Node | None:
        clause = self.package_clause
        if clause is None or not clause.named_children:
            return None
        return clause.named_children[0]

    @property
    def declarations(self) -> list[Node]:
        """Top-level declarations in source order, comments excluded."""
        return [
            child
            for child in self.root.named_children
            if child.type not in ("comment", "package_clause")
        ]

    def text(self, node: Node) -> str:
        return self.src[node.start_byte : node.end_byte].decode("utf-8", "replace")

    def position(self, node: Node) -> Position:
        """1-based start position of ``node``."""
        row, column = node.start_point
        return Position(self.file_name, row + 1, column + 1)

    def end_position(self, node: Node) -> Position:
        """1-based position just past the end of ``node``."""
        row, column = node.end_point
        return Position(self.file_name, row + 1, column + 1)

    def start_of_file(self) -> Position:
        """Position of the package clause, like Go's ``ast.File.Pos``."""
        clause = self.package_clause
        if clause is None:
            return Position(self.file_name, 1, 1)
        return self.position(clause)

    def end_of_file(self) -> Position:
        """End of the last declaration, like Go's ``ast.File.End``."""
        declarations = self.declarations or [self.package_clause]
        last = declarations[-1]
        if last is None:
            return self.end_position(self.root)
        return self.end_position(last)

    def line_text(self, line: int) -> str:
        """Source text of a 1-based line, or "" past the end of the file."""
        if line < 1 or line > len(self._lines):
            return ""
        return self._lines[line - 1].rstrip(b"\r").decode("utf-8", "replace")


class SyntaxProvider(ABC):
    """Parses source into a declaration tree and canonically formats it."""

    @abstractmethod
    def parse(self, file_name: str, src: bytes) -> ParsedFile:
        """Parse source bytes.

        Raises:
            ParseError: If the source is not syntactically valid.
        """

    @abstractmethod
    def canonical_format(self, src: bytes) -> bytes:
        """Return the canonical formatting of ``src``.

        Raises:
            CanonicalFormatError: If the formatter cannot process the input.
        """


class GoSyntax(SyntaxProvider):
    """tree-sitter parser plus ``gofmt`` formatter."""

    def __init__(self, gofmt_path: str | None = None):
        """Initialize the provider.

        Args:
            gofmt_path: gofmt executable. Defaults to ``$GOCHECKSTYLE_GOFMT``
                or ``gofmt`` on PATH.
        """
        self.gofmt_path = gofmt_path or os.environ.get(GOFMT_ENV_VAR, "gofmt")

    def parse(self, file_name: str, src: bytes) -> ParsedFile:
        # Parser objects are not shareable between threads; make one per call.
        tree = Parser(GO_LANGUAGE).parse(src)
        parsed = ParsedFile(file_name=file_name, src=src, root=tree.root_node)

        if tree.root_node.has_error:
            raise self._syntax_error(parsed)
        if parsed.package_clause is None:
            raise ParseError(file_name, 1, 1, "expected 'package'")
        return parsed

    def canonical_format(self, src: bytes) -> bytes:
        try:
            result = subprocess.run(
                [self.gofmt_path],
                input=src,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise CanonicalFormatError(f"Cannot run {self.gofmt_path}: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", "replace").strip()
            raise CanonicalFormatError(f"{self.gofmt_path} failed: {stderr}")
        return result.stdout

    def _syntax_error(self, parsed: ParsedFile) -> ParseError:
        """Build a ParseError pointing at the first ERROR or MISSING node."""
        stack = [parsed.root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR":
                position = parsed.position(node)
                snippet = parsed.text(node).splitlines()[:1]
                detail = f"unexpected {snippet[0]!r}" if snippet else "unexpected input"
                return ParseError(parsed.file_name, position.line, position.column, detail)
            if node.is_missing:
                position = parsed.position(node)
                return ParseError(
                    parsed.file_name, position.line, position.column, f"missing {node.type}"
                )
            stack.extend(reversed(node.children))

        logger.debug(f"{parsed.file_name}: tree has errors but no error node found")
        return ParseError(parsed.file_name, 1, 1)


__all__ = [
    "GO_LANGUAGE",
    "GoSyntax",
    "NodeKind",
    "ParsedFile",
    "SyntaxProvider",
    "classify",
    "is_test_file",
]
