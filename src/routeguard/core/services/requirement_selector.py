"""Pick the required HSTS policy that governs a route."""

from routeguard.core.models import IngressPolicy, Namespace, RequiredHSTSPolicy, Route
from routeguard.core.services.domain_matcher import matches_domain
from routeguard.core.services.namespace_matcher import matches_namespace_selector


def requirement_matches_route(requirement: RequiredHSTSPolicy, route: Route, namespace: Namespace) -> tuple[bool, bool]:
    """Return whether the namespace selector and the domain patterns match, in that order."""
    matches_namespace = matches_namespace_selector(requirement.namespace_selector, namespace)
    matches_domains = matches_domain(requirement.domain_patterns, route.domains())
    return matches_namespace, matches_domains


def select_requirement(policy: IngressPolicy, route: Route, namespace: Namespace) -> RequiredHSTSPolicy | None:
    """
    Find the first requirement whose namespace selector and domain patterns both match.

    Returns None when no requirement applies to the route. Order in the
    policy list decides, not specificity.

    Raises:
        SelectorError: if a requirement checked before the match is malformed.
    """
    for requirement in policy.required_hsts_policies:
        matches_namespace, matches_domains = requirement_matches_route(requirement, route, namespace)
        if matches_namespace and matches_domains:
            return requirement
    return None
