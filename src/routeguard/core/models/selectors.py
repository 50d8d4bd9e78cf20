"""Label selector models."""

from dataclasses import dataclass, field
from enum import Enum


class SelectorOperator(Enum):
    """Operators allowed in a label selector expression."""

    IN = "In"
    NOT_IN = "NotIn"
    EXISTS = "Exists"
    DOES_NOT_EXIST = "DoesNotExist"


@dataclass
class LabelSelectorRequirement:
    """A single `matchExpressions` entry.

    The operator is kept as the raw string so that a malformed selector can
    still be represented and reported when it is evaluated.
    """

    key: str
    operator: str
    values: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        if self.operator == SelectorOperator.EXISTS.value:
            return self.key
        if self.operator == SelectorOperator.DOES_NOT_EXIST.value:
            return f"!{self.key}"
        op = "in" if self.operator == SelectorOperator.IN.value else "notin"
        return f"{self.key} {op} ({','.join(sorted(self.values))})"


@dataclass
class LabelSelector:
    """Kubernetes style label selector (`matchLabels` and `matchExpressions`)."""

    match_labels: dict[str, str] = field(default_factory=dict)
    match_expressions: list[LabelSelectorRequirement] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Check if the selector has no terms (matches everything)."""
        return not self.match_labels and not self.match_expressions

    def __str__(self) -> str:
        terms = [f"{k}={v}" for k, v in sorted(self.match_labels.items())]
        terms.extend(str(expr) for expr in self.match_expressions)
        return ",".join(terms) if terms else "<everything>"
