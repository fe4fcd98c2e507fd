"""Configuration model for the style checker.

The configuration is a flat JSON document with one option per rule family.
Every rule is opt-in: a zero threshold or a false flag disables it.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .checkstyle_logging import get_logger
from .errors import ConfigError

logger = get_logger("config")

DEFAULT_CONFIG = """{
    "file_line": 200,
    "_file_line_comment": "file line count limit",
    "func_line": 50,
    "_func_line_comment": "function line count limit",
    "params_num": 4,
    "_params_num_comment": "function parameter count limit",
    "results_num": 3,
    "_results_num_comment": "function return variable count limit",
    "formated": true,
    "_formated_comment": "gofmt",
    "pkg_name": true,
    "_pkg_name_comment": "package name should not contain _ and camel",
    "camel_name": true,
    "_camel_name_comment": "const/var/function/import name should use camel name",
    "ignore": [
        "tmp/*",
        "src/tmp.go"
    ],
    "_ignore_comment": "ignore file",
    "fatal": [
        "formated"
    ],
    "_fatal_comment": "put the check rule of error level here"
}"""


class CheckstyleConfig(BaseModel):
    """Options controlling which rules run and their thresholds."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    file_line: int = Field(
        default=0, ge=0, description="Max physical lines per non-test file"
    )
    func_line: int = Field(default=0, ge=0, description="Max body lines per function")
    params_num: int = Field(default=0, ge=0, description="Max parameter fields")
    results_num: int = Field(default=0, ge=0, description="Max result fields")
    formated: bool = Field(default=False, description="Require gofmt output")
    pkg_name: bool = Field(default=False, description="Check package name")
    camel_name: bool = Field(default=False, description="Check identifier names")

    # Accepted for compatibility; no rule reads them.
    func_comment: bool = Field(default=False, description="Reserved")
    max_indent: int = Field(default=0, ge=0, description="Reserved")

    fatal: list[str] = Field(
        default_factory=list, description="Rule-type tags reported as errors"
    )
    ignore: list[str] = Field(
        default_factory=list, description="Glob patterns of paths to skip"
    )

    @property
    def fatal_tags(self) -> frozenset[str]:
        """Fatal rule-type tags as a set."""
        return frozenset(self.fatal)


def load_config(data: bytes | str) -> CheckstyleConfig:
    """Parse a JSON configuration document.

    Args:
        data: JSON text.

    Returns:
        Validated configuration.

    Raises:
        ConfigError: If the document is not valid JSON or has invalid values.
    """
    try:
        return CheckstyleConfig.model_validate_json(data)
    except ValidationError as e:
        logger.debug(f"Rejected configuration: {e}")
        raise ConfigError(f"Invalid checkstyle config: {e}") from e


def load_config_file(path: Path | str) -> CheckstyleConfig:
    """Read and parse a JSON configuration file.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    config_path = Path(path)
    try:
        data = config_path.read_bytes()
    except OSError as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e

    config = load_config(data)
    logger.debug(f"Loaded config from {config_path}")
    return config


__all__ = [
    "DEFAULT_CONFIG",
    "CheckstyleConfig",
    "load_config",
    "load_config_file",
]
