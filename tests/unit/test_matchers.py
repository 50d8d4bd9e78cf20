"""Unit tests for domain and namespace matching."""

import pytest

from routeguard.core.models import LabelSelector, LabelSelectorRequirement, Namespace, SelectorError
from routeguard.core.services import matches_domain, matches_namespace_selector, validate_selector


def expr(key, operator, *values):
    return LabelSelectorRequirement(key=key, operator=operator, values=list(values))


class TestMatchesDomain:
    """Test matches_domain."""

    def test_wildcard_pattern(self):
        """Test a regex wildcard pattern matches subdomains."""
        assert matches_domain([r".*\.example\.com"], ["app.example.com"]) is True

    def test_pattern_is_fully_anchored(self):
        """Test a pattern must cover the whole hostname."""
        assert matches_domain([r"example\.com"], ["app.example.com"]) is False
        assert matches_domain([r".*\.example\.com"], ["app.example.com.evil.org"]) is False
        assert matches_domain([r"app"], ["app.example.com"]) is False

    def test_alternation_is_fully_anchored(self):
        """Test anchoring applies to the whole pattern, not just its ends."""
        assert matches_domain([r"a\.com|b\.com"], ["xb.com"]) is False
        assert matches_domain([r"a\.com|b\.com"], ["b.com"]) is True

    def test_any_candidate_matches(self):
        """Test status ingress hosts are considered too."""
        assert matches_domain([r".*\.internal"], ["app.example.com", "app.internal"]) is True

    def test_any_pattern_matches(self):
        """Test later patterns are tried when earlier ones miss."""
        assert matches_domain([r"nope\.org", r".*\.example\.com"], ["app.example.com"]) is True

    def test_no_patterns(self):
        """Test an empty pattern list matches nothing."""
        assert matches_domain([], ["app.example.com"]) is False

    def test_no_candidates(self):
        """Test an empty candidate list matches nothing."""
        assert matches_domain([".*"], []) is False

    def test_invalid_pattern(self):
        """Test a broken pattern is reported as a configuration error."""
        with pytest.raises(SelectorError, match="invalid domain pattern"):
            matches_domain(["*.example.com"], ["app.example.com"])


class TestMatchesNamespaceSelector:
    """Test matches_namespace_selector."""

    def setup_method(self):
        """Set up a labelled namespace."""
        self.namespace = Namespace(name="shop", labels={"env": "prod", "team": "payments"})

    def test_missing_selector_matches_everything(self):
        """Test that no selector selects every namespace."""
        assert matches_namespace_selector(None, self.namespace) is True
        assert matches_namespace_selector(None, Namespace(name="bare")) is True

    def test_empty_selector_matches_everything(self):
        """Test that a selector without terms selects every namespace."""
        assert matches_namespace_selector(LabelSelector(), self.namespace) is True

    def test_match_labels(self):
        """Test matchLabels requires every pair."""
        assert matches_namespace_selector(LabelSelector(match_labels={"env": "prod"}), self.namespace) is True
        assert matches_namespace_selector(
            LabelSelector(match_labels={"env": "prod", "team": "search"}), self.namespace
        ) is False
        assert matches_namespace_selector(LabelSelector(match_labels={"region": "eu"}), self.namespace) is False

    def test_in_operator(self):
        """Test In requires the key with one of the values."""
        assert matches_namespace_selector(
            LabelSelector(match_expressions=[expr("env", "In", "prod", "staging")]), self.namespace
        ) is True
        assert matches_namespace_selector(
            LabelSelector(match_expressions=[expr("env", "In", "dev")]), self.namespace
        ) is False
        assert matches_namespace_selector(
            LabelSelector(match_expressions=[expr("region", "In", "eu")]), self.namespace
        ) is False

    def test_not_in_operator(self):
        """Test NotIn matches absent keys and other values."""
        assert matches_namespace_selector(
            LabelSelector(match_expressions=[expr("env", "NotIn", "dev")]), self.namespace
        ) is True
        assert matches_namespace_selector(
            LabelSelector(match_expressions=[expr("region", "NotIn", "eu")]), self.namespace
        ) is True
        assert matches_namespace_selector(
            LabelSelector(match_expressions=[expr("env", "NotIn", "prod")]), self.namespace
        ) is False

    def test_exists_operators(self):
        """Test Exists and DoesNotExist."""
        assert matches_namespace_selector(LabelSelector(match_expressions=[expr("team", "Exists")]), self.namespace) is True
        assert matches_namespace_selector(LabelSelector(match_expressions=[expr("team", "DoesNotExist")]), self.namespace) is False
        assert matches_namespace_selector(LabelSelector(match_expressions=[expr("region", "DoesNotExist")]), self.namespace) is True

    def test_terms_are_anded(self):
        """Test all labels and expressions must hold."""
        selector = LabelSelector(
            match_labels={"env": "prod"},
            match_expressions=[expr("team", "In", "search")],
        )

        assert matches_namespace_selector(selector, self.namespace) is False

    def test_unknown_operator(self):
        """Test a malformed operator is a selector error."""
        selector = LabelSelector(match_expressions=[expr("env", "Equals", "prod")])

        with pytest.raises(SelectorError, match="not a valid label selector operator"):
            matches_namespace_selector(selector, self.namespace)

    def test_in_without_values(self):
        """Test In and NotIn need values."""
        with pytest.raises(SelectorError, match="must be non-empty"):
            matches_namespace_selector(LabelSelector(match_expressions=[expr("env", "In")]), self.namespace)

    def test_exists_with_values(self):
        """Test Exists and DoesNotExist take no values."""
        with pytest.raises(SelectorError, match="must be empty"):
            matches_namespace_selector(LabelSelector(match_expressions=[expr("env", "Exists", "prod")]), self.namespace)

    def test_invalid_label_key(self):
        """Test label keys must be qualified names."""
        with pytest.raises(SelectorError, match="invalid label key"):
            matches_namespace_selector(LabelSelector(match_labels={"bad key": "x"}), self.namespace)
        with pytest.raises(SelectorError, match="invalid label key"):
            matches_namespace_selector(LabelSelector(match_labels={"Bad_Prefix/name": "x"}), self.namespace)

    def test_invalid_label_value(self):
        """Test label values must be valid."""
        with pytest.raises(SelectorError, match="invalid label value"):
            matches_namespace_selector(LabelSelector(match_labels={"env": "-prod"}), self.namespace)

    def test_non_string_label_value(self):
        """Test label values read from YAML as numbers are rejected."""
        with pytest.raises(SelectorError, match="must be a string"):
            matches_namespace_selector(LabelSelector(match_labels={"version": 2}), self.namespace)
        with pytest.raises(SelectorError, match="must be a string"):
            matches_namespace_selector(LabelSelector(match_expressions=[expr("version", "In", 2)]), self.namespace)

    def test_non_string_label_key(self):
        """Test label keys must be strings."""
        with pytest.raises(SelectorError, match="invalid label key"):
            matches_namespace_selector(LabelSelector(match_expressions=[expr(None, "Exists")]), self.namespace)

    def test_prefixed_key(self):
        """Test DNS prefixed keys are accepted."""
        namespace = Namespace(name="shop", labels={"kubernetes.io/metadata.name": "shop"})
        selector = LabelSelector(match_labels={"kubernetes.io/metadata.name": "shop"})

        assert matches_namespace_selector(selector, namespace) is True

    def test_errors_raised_even_when_labels_do_not_match(self):
        """Test a malformed selector is reported regardless of the namespace."""
        selector = LabelSelector(
            match_labels={"region": "eu"},
            match_expressions=[expr("env", "Bogus")],
        )

        with pytest.raises(SelectorError):
            matches_namespace_selector(selector, self.namespace)


class TestValidateSelector:
    """Test validate_selector."""

    def test_valid_selector(self):
        """Test a valid selector returns its parsed expressions."""
        selector = LabelSelector(match_expressions=[expr("env", "In", "prod"), expr("team", "Exists")])

        parsed = validate_selector(selector)

        assert [operator.value for operator, _ in parsed] == ["In", "Exists"]

    def test_empty_label_value_allowed(self):
        """Test that an empty label value is valid."""
        assert validate_selector(LabelSelector(match_labels={"env": ""})) == []
