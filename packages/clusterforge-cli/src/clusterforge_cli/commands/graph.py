"""clusterforge graph command - Print the asset dependency graph."""

from __future__ import annotations

import click


def to_dot(name: str, edges: list[tuple[str, str]]) -> str:
    """Render dependency edges as a Graphviz digraph.

    Example:
        >>> print(to_dot("manifests", [("Common Manifests", "Install Config")]))
        digraph "manifests" {
          "Common Manifests" -> "Install Config";
        }
    """
    lines = [f'digraph "{name}" {{']
    lines.extend(f'  "{dependent}" -> "{dependency}";' for dependent, dependency in edges)
    lines.append("}")
    return "\n".join(lines)


@click.command()
@click.option(
    "-t",
    "--target",
    type=click.Choice(["install-config", "manifests"]),
    default="manifests",
    show_default=True,
    help="Target whose dependency graph is printed.",
)
def graph(target: str) -> None:
    """Print the asset dependency graph in DOT format.

    Only dependency declarations are inspected; nothing is loaded,
    generated or written.

    Examples:

        clusterforge graph

        clusterforge graph --target install-config | dot -Tsvg > graph.svg
    """
    # Import here to avoid heavy imports at CLI startup
    from clusterforge_core.asset import dependency_graph
    from clusterforge_core.asset.targets import target_assets

    edges = dependency_graph(target_assets(target))
    click.echo(to_dot(target, edges))
