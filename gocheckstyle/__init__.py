"""gocheckstyle - configurable style checker for Go source files.

Parses Go files into declaration trees, walks every declaration and
applies size, signature, naming and formatting rules, reporting each
violation as a located Problem.
"""

__version__ = "1.0.0"
__description__ = "Configurable style checker for Go source files"

from .config import DEFAULT_CONFIG, CheckstyleConfig, load_config, load_config_file
from .engine import Checker, CheckSession, create_checker
from .errors import CanonicalFormatError, CheckstyleError, ConfigError, ParseError
from .main import main as cli_main
from .models import Position, Problem, ProblemType, Severity
from .syntax import GoSyntax, ParsedFile, SyntaxProvider

__all__ = [
    "DEFAULT_CONFIG",
    "CanonicalFormatError",
    "CheckSession",
    "Checker",
    "CheckstyleConfig",
    "CheckstyleError",
    "ConfigError",
    "GoSyntax",
    "ParseError",
    "ParsedFile",
    "Position",
    "Problem",
    "ProblemType",
    "Severity",
    "SyntaxProvider",
    "cli_main",
    "create_checker",
    "load_config",
    "load_config_file",
]
