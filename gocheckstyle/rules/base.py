"""Base class for style rules.

A rule owns one rule-type tag, decides from the configuration whether it
runs, and reports problems through the check session it is handed.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..models import ProblemType

if TYPE_CHECKING:
    from ..config import CheckstyleConfig


class BaseRule(ABC):
    """Abstract base class for style rules."""

    @property
    @abstractmethod
    def rule_type(self) -> ProblemType:
        """Tag attached to every problem this rule reports."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable rule name."""

    @abstractmethod
    def is_enabled(self, config: "CheckstyleConfig") -> bool:
        """Whether the configuration opts in to this rule."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.rule_type.value}>"
