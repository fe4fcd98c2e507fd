"""Identifier and package naming rules.

Go names use mixedCaps. Identifiers scoped to a function (parameters,
results, receivers, local variables) must also start lower-case.
"""

from typing import TYPE_CHECKING

from tree_sitter import Node

from ..models import ProblemType
from .base import BaseRule

if TYPE_CHECKING:
    from ..config import CheckstyleConfig
    from ..engine import CheckSession

SHOUTING_MIN_LENGTH = 5


def camel_name_violation(kind: str, name: str, not_first_cap: bool) -> str | None:
    """Return a description of the naming violation, or None.

    Args:
        kind: Identifier kind used in the description (``var``, ``param``...).
        name: The identifier as written.
        not_first_cap: True when the identifier must start lower-case.

    Returns:
        Problem description, or None when the name is acceptable.
    """
    # One leading underscore marks an intentionally unused name.
    stripped = name[1:] if name.startswith("_") else name
    if not stripped:
        return None

    if "_" in stripped:
        return f"{kind} name {name} should use camel name instead of underscore"
    if len(stripped) >= SHOUTING_MIN_LENGTH and stripped.upper() == stripped:
        return f"{kind} name {name} should not be all capitals, use camel name"
    if not_first_cap and stripped[0].isupper():
        return f"{kind} name {name} should start with a lower case letter"
    return None


def package_name_violation(name: str) -> str | None:
    """Return a description of the package naming violation, or None."""
    if "_" in name:
        suggestion = name.replace("_", "/")
        return (
            f"don't use an underscore in package name, {name} should be {suggestion}"
        )
    if name.lower() != name:
        return f"don't use capital letters in package name: {name}"
    return None


class CamelNameRule(BaseRule):
    """Declared identifiers must use camel case."""

    @property
    def rule_type(self) -> ProblemType:
        return ProblemType.CAMEL_NAME

    @property
    def name(self) -> str:
        return "Camel Case Names"

    def is_enabled(self, config: "CheckstyleConfig") -> bool:
        return config.camel_name

    def check(
        self, session: "CheckSession", ident: Node, kind: str, not_first_cap: bool
    ) -> None:
        description = camel_name_violation(kind, session.parsed.text(ident), not_first_cap)
        if description:
            session.report(session.parsed.position(ident), description, self.rule_type)


class PackageNameRule(BaseRule):
    """Package names are lower case without underscores."""

    @property
    def rule_type(self) -> ProblemType:
        return ProblemType.PKG_NAME

    @property
    def name(self) -> str:
        return "Package Name"

    def is_enabled(self, config: "CheckstyleConfig") -> bool:
        return config.pkg_name

    def check(self, session: "CheckSession") -> None:
        ident = session.parsed.package_name
        if ident is None:
            return
        description = package_name_violation(session.parsed.text(ident))
        if description:
            session.report(session.parsed.position(ident), description, self.rule_type)
