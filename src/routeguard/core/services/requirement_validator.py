"""Check a parsed HSTS config against a required HSTS policy."""

from routeguard.core.models import (
    HSTSConfig,
    IncludeSubDomainsPolicy,
    PolicyViolation,
    PreloadPolicy,
    RequiredHSTSPolicy,
)


def _check_max_age(config: HSTSConfig, requirement: RequiredHSTSPolicy) -> None:
    largest = requirement.max_age.largest_max_age
    if largest is not None and largest >= 0 and config.max_age > largest:
        raise PolicyViolation(f"max-age {config.max_age} exceeds maximum age {largest}")

    smallest = requirement.max_age.smallest_max_age
    if smallest is not None and smallest >= 0 and config.max_age < smallest:
        raise PolicyViolation(f"max-age {config.max_age} is below minimum age {smallest}")


def _check_preload(config: HSTSConfig, policy: PreloadPolicy) -> None:
    if policy == PreloadPolicy.REQUIRE and not config.preload:
        raise PolicyViolation("preload must be specified")
    if policy == PreloadPolicy.REQUIRE_NOT and config.preload:
        raise PolicyViolation("preload must not be specified")


def _check_include_subdomains(config: HSTSConfig, policy: IncludeSubDomainsPolicy) -> None:
    if policy == IncludeSubDomainsPolicy.REQUIRE and not config.include_subdomains:
        raise PolicyViolation("includeSubDomains must be specified")
    if policy == IncludeSubDomainsPolicy.REQUIRE_NOT and config.include_subdomains:
        raise PolicyViolation("includeSubDomains must not be specified")


def validate_requirement(config: HSTSConfig, requirement: RequiredHSTSPolicy) -> None:
    """
    Validate a config against a requirement.

    Checks run in order (maximum age, minimum age, preload,
    includeSubDomains) and only the first failure is reported.

    Raises:
        PolicyViolation: naming the constraint that failed.
    """
    _check_max_age(config, requirement)
    _check_preload(config, requirement.preload_policy)
    _check_include_subdomains(config, requirement.include_subdomains_policy)
