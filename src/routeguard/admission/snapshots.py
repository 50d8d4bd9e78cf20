"""In-memory snapshot provider for offline checks."""

from dataclasses import dataclass, field

from routeguard.core.interfaces import SnapshotProvider
from routeguard.core.models import IngressPolicy, Namespace, Route, SnapshotError


@dataclass
class StaticSnapshotProvider(SnapshotProvider):
    """Serve snapshots from objects loaded up front, e.g. from manifest files."""

    ingress: IngressPolicy | None = None
    namespaces: dict[str, Namespace] = field(default_factory=dict)
    routes: dict[str, Route] = field(default_factory=dict)

    def add_namespace(self, namespace: Namespace) -> None:
        self.namespaces[namespace.name] = namespace

    def add_route(self, route: Route) -> None:
        self.routes[route.get_full_name()] = route

    async def get_ingress_policy(self, name: str = "cluster") -> IngressPolicy:
        if self.ingress is None or self.ingress.name != name:
            raise SnapshotError(f"ingresses.config.openshift.io {name!r} not found")
        return self.ingress

    async def get_namespace(self, name: str) -> Namespace:
        try:
            return self.namespaces[name]
        except KeyError:
            raise SnapshotError(f"namespace {name!r} not found") from None

    async def get_route(self, name: str, namespace: str) -> Route:
        try:
            return self.routes[f"{namespace}/{name}"]
        except KeyError:
            raise SnapshotError(f"routes.route.openshift.io '{namespace}/{name}' not found") from None
