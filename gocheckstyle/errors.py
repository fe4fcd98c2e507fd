"""Exceptions raised by gocheckstyle.

Errors mean a file or configuration could not be evaluated. Style issues
are never raised; they are returned as :class:`~gocheckstyle.models.Problem`.
"""


class CheckstyleError(Exception):
    """Base class for all gocheckstyle errors."""


class ConfigError(CheckstyleError):
    """The configuration document is malformed or cannot be read."""


class ParseError(CheckstyleError):
    """The source file is not syntactically valid Go."""

    def __init__(self, file_name: str, line: int, column: int, detail: str = ""):
        self.file_name = file_name
        self.line = line
        self.column = column
        self.detail = detail
        message = f"{file_name}:{line}:{column}: syntax error"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class CanonicalFormatError(CheckstyleError):
    """The canonical formatter failed on source that already parsed."""
