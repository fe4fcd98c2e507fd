"""Tests for the Go declaration-tree provider."""

import pytest

from gocheckstyle.errors import ParseError
from gocheckstyle.models import Position
from gocheckstyle.syntax import (
    GOFMT_ENV_VAR,
    GoSyntax,
    NodeKind,
    classify,
    is_test_file,
)


@pytest.fixture
def syntax():
    return GoSyntax(gofmt_path="gofmt")


class TestIsTestFile:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("foo_test.go", True),
            ("pkg/foo_test.go", True),
            ("foo.go", False),
            ("test.go", False),
            ("foo_test.go.bak", False),
        ],
    )
    def test_suffix(self, name, expected):
        assert is_test_file(name) is expected


class TestParse:
    """Tests for GoSyntax.parse."""

    def test_parses_valid_source(self, syntax, read_testdata):
        parsed = syntax.parse("fileline.go", read_testdata("fileline.go"))
        assert parsed.file_name == "fileline.go"
        assert [d.type for d in parsed.declarations] == [
            "import_declaration",
            "function_declaration",
            "var_declaration",
        ]

    def test_package_name(self, syntax):
        parsed = syntax.parse("a.go", b"package foo_bar\n")
        assert parsed.text(parsed.package_name) == "foo_bar"

    def test_comments_are_not_declarations(self, syntax):
        parsed = syntax.parse("a.go", b"// doc\npackage a\n\n// x\nvar x = 1\n")
        assert [d.type for d in parsed.declarations] == ["var_declaration"]

    def test_syntax_error_location(self, syntax):
        src = b"package a\n\nvar x = 1\n\nfunc f() {\n\treturn )\n}\n"
        with pytest.raises(ParseError) as exc_info:
            syntax.parse("bad.go", src)
        error = exc_info.value
        assert error.file_name == "bad.go"
        assert error.line >= 5
        assert str(error).startswith(f"bad.go:{error.line}:{error.column}: syntax error")

    def test_missing_package_clause(self, syntax):
        with pytest.raises(ParseError) as exc_info:
            syntax.parse("a.go", b"")
        assert (exc_info.value.line, exc_info.value.column) == (1, 1)

    def test_gofmt_path_from_environment(self, monkeypatch):
        monkeypatch.setenv(GOFMT_ENV_VAR, "/opt/go/bin/gofmt")
        assert GoSyntax().gofmt_path == "/opt/go/bin/gofmt"
        assert GoSyntax(gofmt_path="gofmt").gofmt_path == "gofmt"


class TestParsedFile:
    """Tests for ParsedFile line counting and positions."""

    @pytest.mark.parametrize(
        "src,expected",
        [
            (b"package a\n", 1),
            (b"package a", 1),
            (b"package a\n\nvar x = 1\n", 3),
            (b"package a\n\nvar x = 1", 3),
            (b"package a\n\n\n", 3),
        ],
    )
    def test_line_count(self, syntax, src, expected):
        assert syntax.parse("a.go", src).line_count == expected

    def test_start_of_file_is_package_clause(self, syntax):
        parsed = syntax.parse("a.go", b"// Package a.\npackage a\n")
        assert parsed.start_of_file() == Position("a.go", 2, 1)

    def test_end_of_file_is_end_of_last_declaration(self, syntax):
        parsed = syntax.parse("a.go", b"package a\n\nvar x = 1\n\n// trailing\n")
        assert parsed.end_of_file() == Position("a.go", 3, 10)

    def test_end_of_file_without_declarations(self, syntax):
        parsed = syntax.parse("a.go", b"package abc\n")
        assert parsed.end_of_file() == Position("a.go", 1, 12)

    def test_positions_are_one_based(self, syntax):
        parsed = syntax.parse("a.go", b"package a\n\nfunc f() {}\n")
        func = parsed.declarations[0]
        assert parsed.position(func) == Position("a.go", 3, 1)
        assert parsed.end_position(func) == Position("a.go", 3, 12)

    def test_line_text(self, syntax):
        parsed = syntax.parse("a.go", b"package a\r\n\r\nvar x = 1\r\n")
        assert parsed.line_text(1) == "package a"
        assert parsed.line_text(3) == "var x = 1"
        assert parsed.line_text(0) == ""
        assert parsed.line_text(42) == ""


class TestClassify:
    """Tests for node classification."""

    def test_top_level_kinds(self, syntax):
        src = (
            b"package a\n\n"
            b'import "fmt"\n\n'
            b"const c = 1\n\n"
            b"var v = 1\n\n"
            b"type t struct{}\n\n"
            b"func f() {}\n\n"
            b"func (r t) m() {}\n"
        )
        parsed = syntax.parse("a.go", src)
        assert [classify(d) for d in parsed.declarations] == [
            NodeKind.IMPORT_GROUP,
            NodeKind.CONST_GROUP,
            NodeKind.VAR_GROUP,
            NodeKind.TYPE_GROUP,
            NodeKind.FUNCTION,
            NodeKind.METHOD,
        ]

    def test_statement_level_declarations(self, syntax):
        src = (
            b"package a\n\n"
            b"func f(ch chan int, x interface{}, items []int) {\n"
            b"\tselect {\n"
            b"\tcase v := <-ch:\n"
            b"\t\t_ = v\n"
            b"\t}\n"
            b"\tswitch t := x.(type) {\n"
            b"\tdefault:\n"
            b"\t\t_ = t\n"
            b"\t}\n"
            b"\tfor k := range items {\n"
            b"\t\t_ = k\n"
            b"\t}\n"
            b"}\n"
        )
        parsed = syntax.parse("a.go", src)
        kinds = {}
        stack = [parsed.root]
        while stack:
            node = stack.pop()
            kinds.setdefault(node.type, classify(node))
            stack.extend(node.named_children)
        assert kinds["receive_statement"] is NodeKind.SHORT_VAR
        assert kinds["range_clause"] is NodeKind.SHORT_VAR
        assert kinds["type_switch_statement"] is NodeKind.TYPE_SWITCH

    def test_everything_else_is_other(self, syntax):
        parsed = syntax.parse("a.go", b"package a\n")
        assert classify(parsed.package_clause) is NodeKind.OTHER
        assert classify(parsed.root) is NodeKind.OTHER
