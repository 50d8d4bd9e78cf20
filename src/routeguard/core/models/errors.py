"""Errors raised while evaluating routes against required HSTS policies."""


class AdmissionError(Exception):
    """Base class for every reason a route can be denied."""

    kind = "AdmissionError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigError(AdmissionError):
    """The route's TLS setup cannot carry an HSTS header at all."""

    kind = "ConfigError"


class ParseError(AdmissionError):
    """The HSTS annotation is missing a mandatory field or holds a bad value."""

    kind = "ParseError"


class SelectorError(AdmissionError):
    """A cluster-authored namespace selector or domain pattern is malformed.

    This is an operator configuration defect, not a problem with the route.
    """

    kind = "SelectorError"


class PolicyViolation(AdmissionError):
    """The parsed HSTS config does not meet the matched requirement."""

    kind = "PolicyViolation"


class SnapshotError(AdmissionError):
    """The host could not provide a namespace, route or ingress snapshot."""

    kind = "SnapshotError"
