"""Route admission plugin enforcing the cluster's required HSTS policies."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from routeguard.core.interfaces import SnapshotProvider
from routeguard.core.models import AdmissionDecision, SnapshotError
from routeguard.core.services import HSTSEvaluator
from routeguard.k8s.converter import RouteConverter

PLUGIN_NAME = "route.openshift.io/RequiredRouteAnnotations"
ROUTE_GROUP = "route.openshift.io"
ROUTE_RESOURCE = "routes"

logger = logging.getLogger(__name__)


class Operation(Enum):
    """Admission operations."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    CONNECT = "CONNECT"


@dataclass
class AdmissionRequest:
    """The parts of an admission.k8s.io/v1 AdmissionRequest the plugin uses."""

    uid: str
    operation: str
    group: str = ""
    resource: str = ""
    namespace: str = ""
    name: str = ""
    object: dict[str, Any] | None = None

    @classmethod
    def from_review(cls, review: dict[str, Any]) -> "AdmissionRequest":
        """Parse an AdmissionReview document.

        Raises:
            ValueError: if the document has no request.
        """
        request = review.get("request")
        if not isinstance(request, dict):
            raise ValueError("Invalid admission review format: missing request")

        resource = request.get("resource") or {}
        obj = request.get("object")
        metadata = (obj or {}).get("metadata") or {}
        return cls(
            uid=request.get("uid", ""),
            operation=request.get("operation", ""),
            group=resource.get("group", ""),
            resource=resource.get("resource", ""),
            namespace=request.get("namespace") or metadata.get("namespace", ""),
            name=request.get("name") or metadata.get("name", ""),
            object=obj,
        )

    def is_route(self) -> bool:
        return self.group == ROUTE_GROUP and self.resource == ROUTE_RESOURCE


@dataclass
class RequiredRouteAnnotations:
    """Validating admission plugin for route HSTS annotations.

    All collaborators are passed in explicitly; the provider is expected to
    hand out synchronized snapshots.
    """

    provider: SnapshotProvider
    evaluator: HSTSEvaluator = field(default_factory=HSTSEvaluator)
    ingress_name: str = "cluster"
    converter: RouteConverter = field(default_factory=RouteConverter)

    def handles(self, operation: str) -> bool:
        """Check if the plugin acts on an operation."""
        return operation in (Operation.CREATE.value, Operation.UPDATE.value)

    async def validate(self, request: AdmissionRequest) -> AdmissionDecision:
        """Validate one admission request and return the decision."""
        if not self.handles(request.operation) or not request.is_route():
            return AdmissionDecision.allow(f"{PLUGIN_NAME} does not apply")

        try:
            if request.object is None:
                # No object in the request, evaluate the stored route instead
                route = await self.provider.get_route(request.name, request.namespace)
            else:
                route = self.converter.convert_route(request.object)
                if not route.namespace:
                    route.namespace = request.namespace
                if not route.name:
                    route.name = request.name

            ingress = await self.provider.get_ingress_policy(self.ingress_name)
            namespace = await self.provider.get_namespace(route.namespace)
        except SnapshotError as e:
            logger.error(f"{PLUGIN_NAME}: could not load snapshots for route {request.namespace}/{request.name}: {e}")
            return AdmissionDecision.deny(SnapshotError(f"{PLUGIN_NAME}: {e}"))

        decision = self.evaluator.evaluate(ingress, route, namespace)
        if not decision.allowed:
            logger.info(f"{PLUGIN_NAME}: denied route {route.get_full_name()}: {decision.reason}")
        return decision


def build_admission_review(uid: str, decision: AdmissionDecision) -> dict[str, Any]:
    """Build the AdmissionReview response document for a decision."""
    response: dict[str, Any] = {"uid": uid, "allowed": decision.allowed}
    if not decision.allowed:
        response["status"] = {
            "code": 403,
            "reason": "Forbidden",
            "message": decision.reason,
        }

    return {
        "apiVersion": "admission.k8s.io/v1",
        "kind": "AdmissionReview",
        "response": response,
    }
