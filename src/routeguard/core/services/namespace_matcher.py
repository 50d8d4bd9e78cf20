"""Evaluate a namespace selector against a namespace's labels."""

import re

from routeguard.core.models import LabelSelector, LabelSelectorRequirement, Namespace, SelectorError, SelectorOperator

_NAME_PATTERN = re.compile(r"([A-Za-z0-9][-A-Za-z0-9_.]*)?[A-Za-z0-9]")
_DNS_SUBDOMAIN_PATTERN = re.compile(r"[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*")
_NAME_MAX_LENGTH = 63
_PREFIX_MAX_LENGTH = 253


def _validate_label_key(key: str) -> None:
    if not isinstance(key, str):
        raise SelectorError(f"invalid label key {key!r}: must be a string")
    prefix, _, name = key.rpartition("/")
    if "/" in key and (not prefix or len(prefix) > _PREFIX_MAX_LENGTH or not _DNS_SUBDOMAIN_PATTERN.fullmatch(prefix)):
        raise SelectorError(f"invalid label key {key!r}: prefix must be a DNS subdomain")
    if not name or len(name) > _NAME_MAX_LENGTH or not _NAME_PATTERN.fullmatch(name):
        raise SelectorError(f"invalid label key {key!r}: name must be a qualified name")


def _validate_label_value(key: str, value: str) -> None:
    if not isinstance(value, str):
        raise SelectorError(f"invalid label value {value!r} for key {key!r}: must be a string")
    if value == "":
        return
    if len(value) > _NAME_MAX_LENGTH or not _NAME_PATTERN.fullmatch(value):
        raise SelectorError(f"invalid label value {value!r} for key {key!r}")


def _validate_expression(expr: LabelSelectorRequirement) -> SelectorOperator:
    try:
        operator = SelectorOperator(expr.operator)
    except ValueError:
        raise SelectorError(f"{expr.operator!r} is not a valid label selector operator") from None

    if operator in (SelectorOperator.IN, SelectorOperator.NOT_IN):
        if not expr.values:
            raise SelectorError(f"values must be non-empty for operator {operator.value} on key {expr.key!r}")
    elif expr.values:
        raise SelectorError(f"values must be empty for operator {operator.value} on key {expr.key!r}")

    _validate_label_key(expr.key)
    for value in expr.values:
        _validate_label_value(expr.key, value)
    return operator


def _expression_matches(operator: SelectorOperator, expr: LabelSelectorRequirement, labels: dict[str, str]) -> bool:
    if operator == SelectorOperator.EXISTS:
        return expr.key in labels
    if operator == SelectorOperator.DOES_NOT_EXIST:
        return expr.key not in labels
    if operator == SelectorOperator.IN:
        return expr.key in labels and labels[expr.key] in expr.values
    # NotIn also matches when the key is absent
    return expr.key not in labels or labels[expr.key] not in expr.values


def validate_selector(selector: LabelSelector) -> list[tuple[SelectorOperator, LabelSelectorRequirement]]:
    """
    Check a selector for structural errors.

    Returns the expressions paired with their parsed operators.

    Raises:
        SelectorError: on an unknown operator, a bad values list, or an
            invalid label key or value.
    """
    for key, value in selector.match_labels.items():
        _validate_label_key(key)
        _validate_label_value(key, value)
    return [(_validate_expression(expr), expr) for expr in selector.match_expressions]


def matches_namespace_selector(selector: LabelSelector | None, namespace: Namespace) -> bool:
    """Check if a namespace is selected. A missing selector selects every namespace."""
    if selector is None:
        return True

    expressions = validate_selector(selector)
    labels = namespace.labels

    for key, value in selector.match_labels.items():
        if labels.get(key) != value:
            return False

    return all(_expression_matches(operator, expr, labels) for operator, expr in expressions)
