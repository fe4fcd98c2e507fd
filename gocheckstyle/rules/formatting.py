"""Canonical-formatting compliance rule."""

from typing import TYPE_CHECKING

from ..models import ProblemType
from .base import BaseRule

if TYPE_CHECKING:
    from ..config import CheckstyleConfig
    from ..engine import CheckSession

NOT_FORMATTED = "source is not formatted"


class FormattedRule(BaseRule):
    """Source must be byte-identical to its gofmt output.

    At most one problem per file, placed at the package clause.
    """

    @property
    def rule_type(self) -> ProblemType:
        return ProblemType.FORMATED

    @property
    def name(self) -> str:
        return "Canonical Formatting"

    def is_enabled(self, config: "CheckstyleConfig") -> bool:
        return config.formated

    def check(self, session: "CheckSession") -> None:
        # CanonicalFormatError propagates: the source already parsed.
        canonical = session.syntax.canonical_format(session.src)
        if len(canonical) != len(session.src) or canonical != session.src:
            session.report(
                session.parsed.start_of_file(), NOT_FORMATTED, self.rule_type
            )
