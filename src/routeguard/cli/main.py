"""Main CLI entry point."""

import asyncio

import click

from routeguard.cli.commands import check_routes, parse_annotation, review_async
from routeguard.utils.config import load_config
from routeguard.utils.logging import setup_logging


@click.group()
@click.version_option(package_name="routeguard")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to a routeguard YAML config file")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--log-file", help="Write logs to this file instead of stderr")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool, log_file: str | None) -> None:
    """routeguard - Required HSTS policy admission for routes."""
    try:
        settings = load_config(config_path)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    settings = settings.merged(log_level="DEBUG" if verbose else None, log_file=log_file)
    setup_logging(settings.log_level, settings.log_file)
    ctx.obj = settings


@cli.command("check")
@click.argument("route_file")
@click.option("--ingress", "ingress_file", required=True, help="Manifest holding the cluster Ingress config")
@click.option("--namespace-file", help="Manifest holding the route namespaces")
@click.option("--label", "-l", "labels", multiple=True, help="Namespace label key=value, for namespaces not in --namespace-file")
@click.option("--output", "-o", type=click.Choice(["table", "json"]), help="Output format")
@click.pass_context
def check(
    ctx: click.Context,
    route_file: str,
    ingress_file: str,
    namespace_file: str | None,
    labels: tuple[str, ...],
    output: str | None,
) -> None:
    """Check route manifests against the required HSTS policies."""
    ctx.exit(check_routes(route_file, ingress_file, namespace_file, labels, output or ctx.obj.output))


@cli.command("parse")
@click.argument("annotation")
@click.pass_context
def parse(ctx: click.Context, annotation: str) -> None:
    """Parse an HSTS annotation value and show the result."""
    ctx.exit(parse_annotation(annotation))


@cli.command("review")
@click.argument("review_file")
@click.option("--ingress", "ingress_file", help="Use this Ingress manifest instead of the cluster")
@click.option("--label", "-l", "labels", multiple=True, help="Namespace label key=value, used with --ingress")
@click.option("--route-file", help="Route manifests for requests without an object, used with --ingress")
@click.option("--kubeconfig", help="Path to kubeconfig")
@click.option("--ingress-name", help="Name of the cluster Ingress config")
@click.pass_context
def review(
    ctx: click.Context,
    review_file: str,
    ingress_file: str | None,
    labels: tuple[str, ...],
    route_file: str | None,
    kubeconfig: str | None,
    ingress_name: str | None,
) -> None:
    """Answer an AdmissionReview for a route (`-` reads stdin)."""
    settings = ctx.obj.merged(kubeconfig=kubeconfig, ingress_name=ingress_name)
    ctx.exit(asyncio.run(review_async(review_file, settings, ingress_file, labels, route_file)))


if __name__ == "__main__":
    cli()
