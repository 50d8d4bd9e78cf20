"""Core interfaces for routeguard."""

from abc import ABC, abstractmethod

from .models import IngressPolicy, Namespace, Route


class SnapshotProvider(ABC):
    """Interface for the host that supplies cluster objects to admission.

    Implementations return already synchronized, point-in-time snapshots
    and raise SnapshotError when an object cannot be provided.
    """

    @abstractmethod
    async def get_ingress_policy(self, name: str = "cluster") -> IngressPolicy:
        """Get the cluster ingress configuration holding the required HSTS policies."""
        pass

    @abstractmethod
    async def get_namespace(self, name: str) -> Namespace:
        """Get a namespace and its labels."""
        pass

    @abstractmethod
    async def get_route(self, name: str, namespace: str) -> Route:
        """Get a route by name."""
        pass
