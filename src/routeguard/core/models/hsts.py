"""HSTS header and required HSTS policy models."""

from dataclasses import dataclass, field
from enum import Enum

from routeguard.core.models.selectors import LabelSelector

HSTS_ANNOTATION = "haproxy.router.openshift.io/hsts_header"


class PreloadPolicy(Enum):
    """What a requirement says about the `preload` directive."""

    NO_OPINION = "NoOpinion"
    REQUIRE = "RequirePreload"
    REQUIRE_NOT = "RequireNoPreload"

    @classmethod
    def from_value(cls, value: str | None) -> "PreloadPolicy":
        """Map a wire value to a policy; empty or unknown means no opinion."""
        for policy in cls:
            if policy.value == value:
                return policy
        return cls.NO_OPINION


class IncludeSubDomainsPolicy(Enum):
    """What a requirement says about the `includeSubDomains` directive."""

    NO_OPINION = "NoOpinion"
    REQUIRE = "RequireIncludeSubDomains"
    REQUIRE_NOT = "RequireNoIncludeSubDomains"

    @classmethod
    def from_value(cls, value: str | None) -> "IncludeSubDomainsPolicy":
        """Map a wire value to a policy; empty or unknown means no opinion."""
        for policy in cls:
            if policy.value == value:
                return policy
        return cls.NO_OPINION


@dataclass(frozen=True)
class HSTSConfig:
    """HSTS settings parsed from a route annotation."""

    max_age: int
    preload: bool = False
    include_subdomains: bool = False

    def to_header(self) -> str:
        """Render the config back into header syntax."""
        parts = [f"max-age={self.max_age}"]
        if self.include_subdomains:
            parts.append("includeSubDomains")
        if self.preload:
            parts.append("preload")
        return ";".join(parts)


@dataclass
class MaxAgePolicy:
    """Bounds on the HSTS max-age, in seconds. Negative bounds are ignored."""

    smallest_max_age: int | None = None
    largest_max_age: int | None = None


@dataclass
class RequiredHSTSPolicy:
    """A cluster-wide HSTS requirement scoped by namespace and domain."""

    domain_patterns: list[str] = field(default_factory=list)
    namespace_selector: LabelSelector | None = None
    max_age: MaxAgePolicy = field(default_factory=MaxAgePolicy)
    preload_policy: PreloadPolicy = PreloadPolicy.NO_OPINION
    include_subdomains_policy: IncludeSubDomainsPolicy = IncludeSubDomainsPolicy.NO_OPINION

    def describe(self) -> str:
        """Short human readable summary of the requirement scope."""
        domains = ", ".join(self.domain_patterns) or "<no domains>"
        scope = "all namespaces" if self.namespace_selector is None else str(self.namespace_selector)
        return f"domains [{domains}] in {scope}"


@dataclass
class IngressPolicy:
    """Cluster ingress configuration holding the ordered HSTS requirements."""

    name: str = "cluster"
    # Evaluation order, first match wins
    required_hsts_policies: list[RequiredHSTSPolicy] = field(default_factory=list)
