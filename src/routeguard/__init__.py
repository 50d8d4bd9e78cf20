"""routeguard - Required HSTS policy admission for routes."""

from routeguard.cli import cli
from routeguard.core import AdmissionDecision, HSTSEvaluator

__version__ = "0.1.0"
__all__ = ["AdmissionDecision", "HSTSEvaluator", "cli"]
