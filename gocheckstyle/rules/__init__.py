"""Style rules applied by the checker.

Each rule is opt-in through the configuration and reports problems into
the check session that invokes it.
"""

from .base import BaseRule
from .formatting import FormattedRule
from .limits import (
    FileLineRule,
    FunctionLineRule,
    ParamsNumRule,
    ResultsNumRule,
    count_fields,
)
from .naming import (
    CamelNameRule,
    PackageNameRule,
    camel_name_violation,
    package_name_violation,
)

__all__ = [
    "BaseRule",
    "CamelNameRule",
    "FileLineRule",
    "FormattedRule",
    "FunctionLineRule",
    "PackageNameRule",
    "ParamsNumRule",
    "ResultsNumRule",
    "camel_name_violation",
    "count_fields",
    "package_name_violation",
]
