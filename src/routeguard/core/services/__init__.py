"""Core services for routeguard."""

from routeguard.core.services.annotation_parser import hsts_config_from_route, parse_hsts_annotation
from routeguard.core.services.domain_matcher import matches_domain
from routeguard.core.services.evaluator import HSTSEvaluator
from routeguard.core.services.namespace_matcher import matches_namespace_selector, validate_selector
from routeguard.core.services.requirement_selector import requirement_matches_route, select_requirement
from routeguard.core.services.requirement_validator import validate_requirement

__all__ = [
    "HSTSEvaluator",
    "hsts_config_from_route",
    "matches_domain",
    "matches_namespace_selector",
    "parse_hsts_annotation",
    "requirement_matches_route",
    "select_requirement",
    "validate_requirement",
    "validate_selector",
]
