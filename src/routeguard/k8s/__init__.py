"""Kubernetes integration: snapshot provider and object converters."""

from routeguard.k8s.client import K8sClient
from routeguard.k8s.converter import RouteConverter

__all__ = ["K8sClient", "RouteConverter"]
