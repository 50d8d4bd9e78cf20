"""CLI command implementations."""

import json
import sys
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from routeguard.admission import AdmissionRequest, RequiredRouteAnnotations, StaticSnapshotProvider, build_admission_review
from routeguard.core.interfaces import SnapshotProvider
from routeguard.core.models import AdmissionDecision, IngressPolicy, Namespace, ParseError, Route
from routeguard.core.services import HSTSEvaluator, parse_hsts_annotation
from routeguard.k8s.client import K8sClient
from routeguard.k8s.converter import RouteConverter
from routeguard.utils.config import RouteguardConfig

console = Console()
converter = RouteConverter()


def load_documents(path: str) -> list[dict[str, Any]]:
    """Load every YAML (or JSON) document from a file, `-` meaning stdin."""
    text = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    documents: list[dict[str, Any]] = []
    for doc in yaml.safe_load_all(text):
        if not doc:
            continue
        if not isinstance(doc, dict):
            raise ValueError(f"Unexpected document in {path}, expected a mapping")
        # Flatten `kind: List` wrappers as produced by `oc get -o yaml`
        if str(doc.get("kind") or "").endswith("List") and "items" in doc:
            documents.extend(doc["items"])
        else:
            documents.append(doc)
    return documents


def load_ingress(path: str) -> IngressPolicy:
    """Load the first Ingress object found in a manifest file."""
    for doc in load_documents(path):
        if doc.get("kind") == "Ingress":
            return converter.convert_ingress(doc)
    raise ValueError(f"No Ingress object found in {path}")


def parse_labels(labels: tuple[str, ...]) -> dict[str, str]:
    """Parse `key=value` pairs from the command line."""
    parsed: dict[str, str] = {}
    for label in labels:
        key, sep, value = label.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid label {label!r}, expected key=value")
        parsed[key] = value
    return parsed


def build_static_provider(
    ingress: IngressPolicy,
    namespace_file: str | None,
    labels: dict[str, str],
    namespace_names: list[str],
) -> StaticSnapshotProvider:
    """Assemble offline snapshots. Namespaces not in the file get the given labels."""
    provider = StaticSnapshotProvider(ingress=ingress)
    if namespace_file:
        for doc in load_documents(namespace_file):
            if doc.get("kind") == "Namespace":
                provider.add_namespace(converter.convert_namespace(doc))
    for name in namespace_names:
        if name not in provider.namespaces:
            provider.add_namespace(Namespace(name=name, labels=labels))
    return provider


def check_routes(
    route_file: str,
    ingress_file: str,
    namespace_file: str | None,
    labels: tuple[str, ...],
    output: str,
) -> int:
    """Evaluate route manifests offline. Returns the process exit code."""
    try:
        ingress = load_ingress(ingress_file)
        routes = [converter.convert_route(doc) for doc in load_documents(route_file) if doc.get("kind") == "Route"]
        if not routes:
            console.print(f"No Route objects found in {route_file}")
            return 1

        provider = build_static_provider(
            ingress, namespace_file, parse_labels(labels), [route.namespace for route in routes]
        )
        evaluator = HSTSEvaluator()
        results = [(route, evaluator.evaluate(ingress, route, provider.namespaces[route.namespace])) for route in routes]

    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"Error: {e}")
        return 2

    if output == "json":
        _output_json(results)
    else:
        _output_table(results)

    return 0 if all(decision.allowed for _, decision in results) else 1


def parse_annotation(annotation: str) -> int:
    """Print the parsed form of an HSTS annotation value."""
    try:
        config = parse_hsts_annotation(annotation)
    except ParseError as e:
        console.print(f"[red]ParseError:[/red] {e}")
        return 1

    table = Table(show_header=False)
    table.add_row("max-age", str(config.max_age))
    table.add_row("includeSubDomains", str(config.include_subdomains).lower())
    table.add_row("preload", str(config.preload).lower())
    table.add_row("normalized", config.to_header())
    console.print(table)
    return 0


async def review_async(
    review_file: str,
    settings: RouteguardConfig,
    ingress_file: str | None,
    labels: tuple[str, ...],
    route_file: str | None = None,
) -> int:
    """Answer an AdmissionReview. Offline when an ingress file is given, else against the cluster."""
    try:
        documents = load_documents(review_file)
        if not documents:
            raise ValueError(f"No admission review found in {review_file}")
        request = AdmissionRequest.from_review(documents[0])

        provider: SnapshotProvider
        if ingress_file:
            ingress = load_ingress(ingress_file)
            ingress.name = settings.ingress_name
            static = build_static_provider(ingress, None, parse_labels(labels), [request.namespace])
            if route_file:
                for doc in load_documents(route_file):
                    if doc.get("kind") == "Route":
                        static.add_route(converter.convert_route(doc))
            provider = static
        else:
            provider = K8sClient(settings.kubeconfig)

        plugin = RequiredRouteAnnotations(provider=provider, ingress_name=settings.ingress_name)
        try:
            decision = await plugin.validate(request)
        finally:
            if isinstance(provider, K8sClient):
                await provider.close()

    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"Error: {e}")
        return 2

    print(json.dumps(build_admission_review(request.uid, decision), indent=2))
    return 0 if decision.allowed else 1


def _output_table(results: list[tuple[Route, AdmissionDecision]]) -> None:
    """Output decisions as a table."""
    table = Table()
    table.add_column("NAMESPACE")
    table.add_column("NAME")
    table.add_column("HOST")
    table.add_column("DECISION")
    table.add_column("REASON")

    for route, decision in results:
        verdict = "[green]ALLOW[/green]" if decision.allowed else "[red]DENY[/red]"
        reason = decision.reason
        if decision.is_configuration_error:
            reason = f"cluster policy error: {reason}"
        table.add_row(route.namespace, route.name, route.host, verdict, escape(reason))

    console.print(table)


def _output_json(results: list[tuple[Route, AdmissionDecision]]) -> None:
    """Output decisions as JSON."""
    data = []
    for route, decision in results:
        data.append(
            {
                "name": route.name,
                "namespace": route.namespace,
                "host": route.host,
                "allowed": decision.allowed,
                "reason": decision.reason,
                "error": decision.error_kind,
            }
        )

    print(json.dumps(data, indent=2))
