"""Core domain models, interfaces and HSTS evaluation for routeguard."""

from routeguard.core.interfaces import SnapshotProvider
from routeguard.core.models import AdmissionDecision, IngressPolicy, Namespace, Route
from routeguard.core.services import HSTSEvaluator

__all__ = ["AdmissionDecision", "HSTSEvaluator", "IngressPolicy", "Namespace", "Route", "SnapshotProvider"]
