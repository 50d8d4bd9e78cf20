"""Parse the HSTS route annotation into an HSTSConfig."""

import re

from routeguard.core.models import HSTS_ANNOTATION, HSTSConfig, ParseError, Route

MAX_AGE_PATTERN = re.compile(r"max-age=(\d+)", re.ASCII)
MAX_AGE_LIMIT = 2**31 - 1


def parse_hsts_annotation(value: str | None) -> HSTSConfig:
    """
    Parse a raw `hsts_header` annotation value.

    Tokens are separated by `;` and compared case-insensitively. Only
    `includeSubDomains` and `preload` are recognised, anything else is
    ignored. `max-age=<digits>` is searched for anywhere in the value and
    only its first occurrence counts.

    Raises:
        ParseError: if max-age is missing or does not fit in 32 bits.
    """
    trimmed = (value or "").replace(" ", "").lower()

    include_subdomains = False
    preload = False
    for token in trimmed.split(";"):
        if token == "includesubdomains":
            include_subdomains = True
        elif token == "preload":
            preload = True

    match = MAX_AGE_PATTERN.search(trimmed)
    if match is None:
        raise ParseError("max-age must be set in HSTS annotation")

    max_age = int(match.group(1))
    if max_age > MAX_AGE_LIMIT:
        raise ParseError(f"max-age {match.group(1)} is out of range, must be at most {MAX_AGE_LIMIT}")

    return HSTSConfig(max_age=max_age, preload=preload, include_subdomains=include_subdomains)


def hsts_config_from_route(route: Route) -> HSTSConfig:
    """Parse the HSTS annotation of a route."""
    return parse_hsts_annotation(route.annotations.get(HSTS_ANNOTATION))
