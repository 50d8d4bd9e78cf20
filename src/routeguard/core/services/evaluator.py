"""Decide whether a route's HSTS annotation satisfies the cluster's required HSTS policies."""

import logging

from routeguard.core.models import (
    AdmissionDecision,
    AdmissionError,
    ConfigError,
    IngressPolicy,
    Namespace,
    Route,
    SelectorError,
    TLSTermination,
)
from routeguard.core.services.annotation_parser import hsts_config_from_route
from routeguard.core.services.requirement_selector import select_requirement
from routeguard.core.services.requirement_validator import validate_requirement

logger = logging.getLogger(__name__)


class HSTSEvaluator:
    """Evaluate routes against required HSTS policies.

    Stateless: one instance can serve concurrent evaluations.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def evaluate(self, policy: IngressPolicy, route: Route, namespace: Namespace) -> AdmissionDecision:
        """Return the admission decision for a route in a namespace."""
        try:
            return self._evaluate(policy, route, namespace)
        except SelectorError as e:
            self.log.error(
                "Required HSTS policy in ingress %s is misconfigured, denying route %s: %s",
                policy.name,
                route.get_full_name(),
                e,
            )
            return AdmissionDecision.deny(e)
        except AdmissionError as e:
            self.log.debug("Route %s denied: %s", route.get_full_name(), e)
            return AdmissionDecision.deny(e)

    def _evaluate(self, policy: IngressPolicy, route: Route, namespace: Namespace) -> AdmissionDecision:
        termination = route.tls_termination
        if termination is None:
            raise ConfigError(
                f"termination type is empty, must be {TLSTermination.EDGE.value} or {TLSTermination.REENCRYPT.value}"
            )
        if not termination.supports_hsts():
            # Non-TLS-terminating routes never get HSTS headers but are still valid
            self.log.info(
                "HSTS policy not applied to route %s, termination type: %r",
                route.get_full_name(),
                termination.value,
            )
            return AdmissionDecision.allow(f"termination type {termination.value!r} does not carry HSTS")

        requirement = select_requirement(policy, route, namespace)
        if requirement is None:
            return AdmissionDecision.allow("no required HSTS policy applies")

        config = hsts_config_from_route(route)
        validate_requirement(config, requirement)

        self.log.debug("Route %s satisfies required HSTS policy for %s", route.get_full_name(), requirement.describe())
        return AdmissionDecision.allow(f"satisfies required HSTS policy for {requirement.describe()}")
