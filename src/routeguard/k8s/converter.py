"""Convert raw Kubernetes objects into routeguard models."""

import logging
from typing import Any

from routeguard.core.models import (
    IncludeSubDomainsPolicy,
    IngressPolicy,
    LabelSelector,
    LabelSelectorRequirement,
    MaxAgePolicy,
    Namespace,
    PreloadPolicy,
    RequiredHSTSPolicy,
    Route,
    TLSTermination,
)

logger = logging.getLogger(__name__)


class RouteConverter:
    """Convert OpenShift config/route objects and namespaces, as plain dicts, to models."""

    def convert_ingress(self, k8s_object: dict[str, Any]) -> IngressPolicy:
        """Convert a config.openshift.io/v1 Ingress to an IngressPolicy."""
        metadata = k8s_object.get("metadata") or {}
        spec = k8s_object.get("spec") or {}

        requirements = [
            self._parse_required_hsts_policy(raw) for raw in spec.get("requiredHSTSPolicies") or []
        ]
        return IngressPolicy(name=metadata.get("name", "cluster"), required_hsts_policies=requirements)

    def convert_route(self, k8s_object: dict[str, Any]) -> Route:
        """Convert a route.openshift.io/v1 Route to a Route."""
        metadata = k8s_object.get("metadata") or {}
        spec = k8s_object.get("spec") or {}
        status = k8s_object.get("status") or {}

        ingress_hosts = [
            ingress["host"] for ingress in status.get("ingress") or [] if ingress.get("host")
        ]

        return Route(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", ""),
            host=spec.get("host") or "",
            status_ingress_hosts=ingress_hosts,
            annotations=metadata.get("annotations") or {},
            tls_termination=self._parse_tls_termination(spec.get("tls")),
        )

    def convert_namespace(self, k8s_object: dict[str, Any]) -> Namespace:
        """Convert a core/v1 Namespace to a Namespace."""
        metadata = k8s_object.get("metadata") or {}
        return Namespace(name=metadata.get("name", ""), labels=metadata.get("labels") or {})

    def convert_label_selector(self, selector: dict[str, Any] | None) -> LabelSelector | None:
        """Convert a metav1 LabelSelector. None stays None (selects everything)."""
        if selector is None:
            return None

        expressions = [
            LabelSelectorRequirement(
                key=expr.get("key", ""),
                operator=expr.get("operator", ""),
                values=list(expr.get("values") or []),
            )
            for expr in selector.get("matchExpressions") or []
        ]
        return LabelSelector(match_labels=dict(selector.get("matchLabels") or {}), match_expressions=expressions)

    def _parse_required_hsts_policy(self, raw: dict[str, Any]) -> RequiredHSTSPolicy:
        max_age = raw.get("maxAge") or {}
        return RequiredHSTSPolicy(
            namespace_selector=self.convert_label_selector(raw.get("namespaceSelector")),
            domain_patterns=list(raw.get("domainPatterns") or []),
            max_age=MaxAgePolicy(
                smallest_max_age=self._parse_max_age_bound(max_age, "smallestMaxAge"),
                largest_max_age=self._parse_max_age_bound(max_age, "largestMaxAge"),
            ),
            preload_policy=PreloadPolicy.from_value(raw.get("preloadPolicy")),
            include_subdomains_policy=IncludeSubDomainsPolicy.from_value(raw.get("includeSubDomainsPolicy")),
        )

    def _parse_max_age_bound(self, max_age: dict[str, Any], key: str) -> int | None:
        """Read an optional integer bound from spec.requiredHSTSPolicies[].maxAge."""
        value = max_age.get(key)
        # bool is an int subclass but never a valid bound
        if value is None or (isinstance(value, int) and not isinstance(value, bool)):
            return value
        raise ValueError(f"maxAge.{key} must be an integer, got {value!r}")

    def _parse_tls_termination(self, tls: dict[str, Any] | None) -> TLSTermination | None:
        """Parse spec.tls. No TLS block means no termination."""
        if tls is None:
            return None

        termination = (tls.get("termination") or "").lower()
        try:
            return TLSTermination(termination)
        except ValueError:
            logger.warning(f"Unrecognised TLS termination type: {termination}")
            return TLSTermination.UNSPECIFIED
