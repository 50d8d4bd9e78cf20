"""Route and namespace models."""

from dataclasses import dataclass, field
from enum import Enum


class TLSTermination(Enum):
    """Where TLS is terminated for a route."""

    EDGE = "edge"
    REENCRYPT = "reencrypt"
    PASSTHROUGH = "passthrough"
    # TLS block present but termination empty or unrecognised
    UNSPECIFIED = ""

    def supports_hsts(self) -> bool:
        """Check if the router can add an HSTS header for this termination."""
        return self in (TLSTermination.EDGE, TLSTermination.REENCRYPT)


@dataclass
class Route:
    """The subset of a route that HSTS admission looks at."""

    name: str
    namespace: str
    host: str = ""
    status_ingress_hosts: list[str] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)
    # None when the route has no TLS block at all
    tls_termination: TLSTermination | None = None

    def get_full_name(self) -> str:
        """Get fully qualified route name."""
        return f"{self.namespace}/{self.name}"

    def domains(self) -> list[str]:
        """All hostnames the route answers on, primary host first."""
        return [self.host, *self.status_ingress_hosts]


@dataclass
class Namespace:
    """A namespace and its labels."""

    name: str
    labels: dict[str, str] = field(default_factory=dict)
