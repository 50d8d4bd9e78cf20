"""Admission plugin wiring the HSTS evaluator to cluster snapshots."""

from routeguard.admission.plugin import (
    PLUGIN_NAME,
    AdmissionRequest,
    Operation,
    RequiredRouteAnnotations,
    build_admission_review,
)
from routeguard.admission.snapshots import StaticSnapshotProvider

__all__ = [
    "PLUGIN_NAME",
    "AdmissionRequest",
    "Operation",
    "RequiredRouteAnnotations",
    "StaticSnapshotProvider",
    "build_admission_review",
]
