"""Core domain models for routeguard."""

from routeguard.core.models.decision import AdmissionDecision
from routeguard.core.models.errors import (
    AdmissionError,
    ConfigError,
    ParseError,
    PolicyViolation,
    SelectorError,
    SnapshotError,
)
from routeguard.core.models.hsts import (
    HSTS_ANNOTATION,
    HSTSConfig,
    IncludeSubDomainsPolicy,
    IngressPolicy,
    MaxAgePolicy,
    PreloadPolicy,
    RequiredHSTSPolicy,
)
from routeguard.core.models.route import Namespace, Route, TLSTermination
from routeguard.core.models.selectors import LabelSelector, LabelSelectorRequirement, SelectorOperator

__all__ = [
    "HSTS_ANNOTATION",
    "AdmissionDecision",
    "AdmissionError",
    "ConfigError",
    "HSTSConfig",
    "IncludeSubDomainsPolicy",
    "IngressPolicy",
    "LabelSelector",
    "LabelSelectorRequirement",
    "MaxAgePolicy",
    "Namespace",
    "ParseError",
    "PolicyViolation",
    "PreloadPolicy",
    "RequiredHSTSPolicy",
    "Route",
    "SelectorError",
    "SelectorOperator",
    "SnapshotError",
    "TLSTermination",
]
