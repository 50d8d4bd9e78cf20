"""Kubernetes client implementation."""

import asyncio
from typing import Any

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException

from routeguard.core.interfaces import SnapshotProvider
from routeguard.core.models import IngressPolicy, Namespace, Route, SnapshotError
from routeguard.k8s.converter import RouteConverter

CONFIG_GROUP = "config.openshift.io"
ROUTE_GROUP = "route.openshift.io"


class K8sClient(SnapshotProvider):
    """Kubernetes backed snapshot provider."""

    def __init__(self, kubeconfig_path: str | None = None):
        """Initialize Kubernetes client."""
        self.kubeconfig_path = kubeconfig_path
        self.converter = RouteConverter()
        self._api_client: client.ApiClient | None = None
        self._core_v1: client.CoreV1Api | None = None
        self._custom_objects: client.CustomObjectsApi | None = None

    async def _ensure_connected(self) -> None:
        """Ensure client is connected."""
        if self._api_client is None:
            try:
                if self.kubeconfig_path:
                    config.load_kube_config(config_file=self.kubeconfig_path)
                else:
                    # Try in-cluster config first, then default kubeconfig
                    try:
                        config.load_incluster_config()
                    except config.ConfigException:
                        config.load_kube_config()

                self._api_client = client.ApiClient()
                self._core_v1 = client.CoreV1Api(self._api_client)
                self._custom_objects = client.CustomObjectsApi(self._api_client)

            except Exception as e:
                raise SnapshotError(f"Failed to connect to Kubernetes cluster: {e}") from e

    def is_connected(self) -> bool:
        """Check if client is connected to cluster."""
        return self._api_client is not None

    async def get_ingress_policy(self, name: str = "cluster") -> IngressPolicy:
        """Get the cluster scoped config.openshift.io/v1 Ingress."""
        raw = await self._get_custom_object(CONFIG_GROUP, "ingresses", name)
        try:
            return self.converter.convert_ingress(raw)
        except ValueError as e:
            raise SnapshotError(f"Invalid ingresses.{CONFIG_GROUP} {name!r}: {e}") from e

    async def get_namespace(self, name: str) -> Namespace:
        """Get a namespace and its labels."""
        await self._ensure_connected()

        try:
            assert self._core_v1 is not None
            loop = asyncio.get_event_loop()
            ns = await loop.run_in_executor(None, self._core_v1.read_namespace, name)
            return Namespace(name=ns.metadata.name, labels=ns.metadata.labels or {})

        except ApiException as e:
            raise self._snapshot_error("namespace", name, e) from e
        except Exception as e:
            raise SnapshotError(f"Failed to get namespace {name!r}: {e}") from e

    async def get_route(self, name: str, namespace: str) -> Route:
        """Get a route.openshift.io/v1 Route."""
        raw = await self._get_custom_object(ROUTE_GROUP, "routes", name, namespace)
        return self.converter.convert_route(raw)

    async def _get_custom_object(
        self,
        group: str,
        plural: str,
        name: str,
        namespace: str | None = None
    ) -> dict[str, Any]:
        """Read a single custom object, namespaced or cluster scoped."""
        await self._ensure_connected()

        try:
            assert self._custom_objects is not None
            loop = asyncio.get_event_loop()

            def get_object() -> dict[str, Any]:
                if namespace:
                    return self._custom_objects.get_namespaced_custom_object(
                        group=group,
                        version="v1",
                        namespace=namespace,
                        plural=plural,
                        name=name
                    )
                return self._custom_objects.get_cluster_custom_object(
                    group=group,
                    version="v1",
                    plural=plural,
                    name=name
                )

            return await loop.run_in_executor(None, get_object)

        except ApiException as e:
            full_name = f"{namespace}/{name}" if namespace else name
            raise self._snapshot_error(f"{plural}.{group}", full_name, e) from e
        except Exception as e:
            full_name = f"{namespace}/{name}" if namespace else name
            raise SnapshotError(f"Failed to get {plural}.{group} {full_name!r}: {e}") from e

    @staticmethod
    def _snapshot_error(kind: str, name: str, e: ApiException) -> SnapshotError:
        if e.status == 404:
            return SnapshotError(f"{kind} {name!r} not found")
        return SnapshotError(f"Failed to get {kind} {name!r}: {e.reason}")

    async def close(self) -> None:
        """Close the client connection."""
        if self.is_connected() and hasattr(self._api_client, 'close'):
            self._api_client.close()
        self._api_client = None
        self._core_v1 = None
        self._custom_objects = None
