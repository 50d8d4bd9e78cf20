"""Unit tests for requirement selection and validation."""

import pytest

from routeguard.core.models import (
    HSTSConfig,
    IncludeSubDomainsPolicy,
    IngressPolicy,
    LabelSelector,
    LabelSelectorRequirement,
    MaxAgePolicy,
    Namespace,
    PolicyViolation,
    PreloadPolicy,
    RequiredHSTSPolicy,
    Route,
    SelectorError,
)
from routeguard.core.services import requirement_matches_route, select_requirement, validate_requirement


class TestSelectRequirement:
    """Test select_requirement."""

    def setup_method(self):
        """Set up a route and namespace."""
        self.route = Route(
            name="web",
            namespace="shop",
            host="web.example.com",
            status_ingress_hosts=["web.apps.internal"],
        )
        self.namespace = Namespace(name="shop", labels={"env": "prod"})

    def test_no_requirements(self):
        """Test an empty policy list selects nothing."""
        assert select_requirement(IngressPolicy(), self.route, self.namespace) is None

    def test_first_match_wins(self):
        """Test the earliest matching requirement is returned regardless of specificity."""
        broad = RequiredHSTSPolicy(domain_patterns=[".*"])
        specific = RequiredHSTSPolicy(domain_patterns=[r"web\.example\.com"])
        policy = IngressPolicy(required_hsts_policies=[broad, specific])

        assert select_requirement(policy, self.route, self.namespace) is broad

    def test_domain_mismatch_skipped(self):
        """Test requirements for other domains are skipped."""
        other = RequiredHSTSPolicy(domain_patterns=[r".*\.other\.org"])
        ours = RequiredHSTSPolicy(domain_patterns=[r".*\.example\.com"])
        policy = IngressPolicy(required_hsts_policies=[other, ours])

        assert select_requirement(policy, self.route, self.namespace) is ours

    def test_namespace_mismatch_skipped(self):
        """Test a domain match alone is not enough."""
        staging_only = RequiredHSTSPolicy(
            domain_patterns=[".*"],
            namespace_selector=LabelSelector(match_labels={"env": "staging"}),
        )
        policy = IngressPolicy(required_hsts_policies=[staging_only])

        assert select_requirement(policy, self.route, self.namespace) is None

    def test_status_host_matches(self):
        """Test requirements can match on status ingress hosts."""
        internal = RequiredHSTSPolicy(domain_patterns=[r".*\.apps\.internal"])
        policy = IngressPolicy(required_hsts_policies=[internal])

        assert select_requirement(policy, self.route, self.namespace) is internal

    def test_matches_reports_both_predicates(self):
        """Test namespace and domain results are reported independently."""
        requirement = RequiredHSTSPolicy(
            domain_patterns=[r".*\.other\.org"],
            namespace_selector=LabelSelector(match_labels={"env": "prod"}),
        )

        assert requirement_matches_route(requirement, self.route, self.namespace) == (True, False)

    def test_malformed_selector_propagates(self):
        """Test selector errors are not treated as a non-match."""
        broken = RequiredHSTSPolicy(
            domain_patterns=[".*"],
            namespace_selector=LabelSelector(
                match_expressions=[LabelSelectorRequirement(key="env", operator="Like", values=["prod"])]
            ),
        )
        policy = IngressPolicy(required_hsts_policies=[broken])

        with pytest.raises(SelectorError):
            select_requirement(policy, self.route, self.namespace)

    def test_later_malformed_selector_not_reached(self):
        """Test evaluation stops at the first match."""
        ours = RequiredHSTSPolicy(domain_patterns=[".*"])
        broken = RequiredHSTSPolicy(
            domain_patterns=[".*"],
            namespace_selector=LabelSelector(match_expressions=[LabelSelectorRequirement(key="env", operator="Like")]),
        )
        policy = IngressPolicy(required_hsts_policies=[ours, broken])

        assert select_requirement(policy, self.route, self.namespace) is ours


class TestValidateRequirement:
    """Test validate_requirement."""

    def bounded(self, smallest=None, largest=None, **kwargs):
        return RequiredHSTSPolicy(
            domain_patterns=[".*"],
            max_age=MaxAgePolicy(smallest_max_age=smallest, largest_max_age=largest),
            **kwargs,
        )

    def test_max_age_boundaries(self):
        """Test inclusive minimum and maximum age bounds."""
        requirement = self.bounded(smallest=100, largest=200)

        validate_requirement(HSTSConfig(max_age=100), requirement)
        validate_requirement(HSTSConfig(max_age=200), requirement)

        with pytest.raises(PolicyViolation, match="below minimum age 100"):
            validate_requirement(HSTSConfig(max_age=99), requirement)
        with pytest.raises(PolicyViolation, match="exceeds maximum age 200"):
            validate_requirement(HSTSConfig(max_age=201), requirement)

    def test_negative_bounds_ignored(self):
        """Test negative bounds disable the check."""
        requirement = self.bounded(smallest=-1, largest=-1)

        validate_requirement(HSTSConfig(max_age=0), requirement)
        validate_requirement(HSTSConfig(max_age=2147483647), requirement)

    def test_no_bounds(self):
        """Test unset bounds allow any age."""
        validate_requirement(HSTSConfig(max_age=0), self.bounded())

    def test_preload_required(self):
        """Test RequirePreload."""
        requirement = self.bounded(preload_policy=PreloadPolicy.REQUIRE)

        validate_requirement(HSTSConfig(max_age=1, preload=True), requirement)
        with pytest.raises(PolicyViolation, match="preload must be specified"):
            validate_requirement(HSTSConfig(max_age=1, preload=False), requirement)

    def test_preload_forbidden(self):
        """Test RequireNoPreload."""
        requirement = self.bounded(preload_policy=PreloadPolicy.REQUIRE_NOT)

        validate_requirement(HSTSConfig(max_age=1, preload=False), requirement)
        with pytest.raises(PolicyViolation, match="preload must not be specified"):
            validate_requirement(HSTSConfig(max_age=1, preload=True), requirement)

    def test_preload_no_opinion(self):
        """Test NoOpinion accepts either preload value."""
        requirement = self.bounded(preload_policy=PreloadPolicy.NO_OPINION)

        validate_requirement(HSTSConfig(max_age=1, preload=True), requirement)
        validate_requirement(HSTSConfig(max_age=1, preload=False), requirement)

    def test_include_subdomains_policies(self):
        """Test the includeSubDomains policies."""
        required = self.bounded(include_subdomains_policy=IncludeSubDomainsPolicy.REQUIRE)
        forbidden = self.bounded(include_subdomains_policy=IncludeSubDomainsPolicy.REQUIRE_NOT)
        no_opinion = self.bounded(include_subdomains_policy=IncludeSubDomainsPolicy.NO_OPINION)

        with pytest.raises(PolicyViolation, match="includeSubDomains must be specified"):
            validate_requirement(HSTSConfig(max_age=1), required)
        with pytest.raises(PolicyViolation, match="includeSubDomains must not be specified"):
            validate_requirement(HSTSConfig(max_age=1, include_subdomains=True), forbidden)

        validate_requirement(HSTSConfig(max_age=1, include_subdomains=True), required)
        validate_requirement(HSTSConfig(max_age=1), forbidden)
        validate_requirement(HSTSConfig(max_age=1, include_subdomains=True), no_opinion)
        validate_requirement(HSTSConfig(max_age=1), no_opinion)

    def test_first_failure_reported(self):
        """Test checks run in order and stop at the first failure."""
        requirement = self.bounded(
            largest=10,
            smallest=5,
            preload_policy=PreloadPolicy.REQUIRE,
            include_subdomains_policy=IncludeSubDomainsPolicy.REQUIRE,
        )

        with pytest.raises(PolicyViolation, match="exceeds maximum age"):
            validate_requirement(HSTSConfig(max_age=11), requirement)
        with pytest.raises(PolicyViolation, match="preload must be specified"):
            validate_requirement(HSTSConfig(max_age=7), requirement)
        with pytest.raises(PolicyViolation, match="includeSubDomains must be specified"):
            validate_requirement(HSTSConfig(max_age=7, preload=True), requirement)
