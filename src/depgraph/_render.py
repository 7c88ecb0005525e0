"""Rich rendering utilities for inspecting dependency graphs."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from depgraph._errors import CircularDependencyError, DependencyError, SelfReferenceError

if TYPE_CHECKING:
    from rich.console import Console

    from depgraph._graph import AcyclicDependencyGraph


@dataclass(slots=True, frozen=True)
class RenderOptions:
    """Options controlling how graphs are displayed.

    Layers are unordered sets; ``sort_key`` only affects how their members
    are listed on screen.
    """

    sort_key: Callable[[Any], Any] = str
    max_depth: int | None = None
    show_counts: bool = True

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 0:
            msg = f"max_depth must be non-negative, got {self.max_depth}"
            raise ValueError(msg)


DEFAULT_OPTIONS = RenderOptions()


def _label(node: Hashable) -> str:
    return escape(str(node))


def render_layers(
    layers: Sequence[frozenset[Any]],
    console: Console,
    *,
    title: str | None = None,
    options: RenderOptions = DEFAULT_OPTIONS,
) -> None:
    """Render topological layers as a Rich table.

    Args:
        layers: Layers as returned by the graph's layering methods.
        console: Rich Console to output to.
        title: Optional table title.
        options: Display options.

    """
    if not layers:
        console.print("[dim]Empty graph: no layers[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Layer", justify="right", style="bold")
    if options.show_counts:
        table.add_column("Count", justify="right")
    table.add_column("Nodes")

    for index, layer in enumerate(layers):
        members = ", ".join(_label(node) for node in sorted(layer, key=options.sort_key))
        if options.show_counts:
            table.add_row(str(index), str(len(layer)), members)
        else:
            table.add_row(str(index), members)

    console.print(table)
    if options.show_counts:
        total = sum(len(layer) for layer in layers)
        console.print(f"\n[dim]Total: {total} nodes in {len(layers)} layers[/dim]")


def render_dependency_tree[T: Hashable](
    graph: AcyclicDependencyGraph[T],
    node: T,
    console: Console,
    *,
    options: RenderOptions = DEFAULT_OPTIONS,
) -> None:
    """Render the dependencies of a node as a Rich tree.

    Shared dependencies appear under every node that depends on them.

    Args:
        graph: The graph to read from.
        node: Root of the rendered tree.
        console: Rich Console to output to.
        options: Display options; ``max_depth`` limits how far the tree expands.

    """
    rich_tree = Tree(f"[bold]{_label(node)}[/bold]")
    _add_tree_children(rich_tree, graph, node, 1, options)
    console.print(rich_tree)


def _add_tree_children[T: Hashable](
    parent: Tree,
    graph: AcyclicDependencyGraph[T],
    node: T,
    depth: int,
    options: RenderOptions,
) -> None:
    """Recursively add the direct dependencies of ``node`` under ``parent``."""
    dependencies = sorted(graph.direct_dependencies(node), key=options.sort_key)
    if not dependencies:
        return
    if options.max_depth is not None and depth > options.max_depth:
        parent.add("[dim]...[/dim]")
        return
    for dependency in dependencies:
        child = parent.add(_label(dependency))
        _add_tree_children(child, graph, dependency, depth + 1, options)


def render_dependency_error(error: DependencyError, console: Console) -> None:
    """Render a rejected dependency as a red panel.

    Args:
        error: The error raised by ``depend_on``.
        console: Rich Console to output to.

    """
    match error:
        case SelfReferenceError():
            title = "Self reference"
            body = f"{_label(error.node)} cannot depend on itself"
        case CircularDependencyError():
            title = "Circular dependency"
            chain = " -> ".join(_label(node) for node in error.cycle)
            body = (
                f"{_label(error.source)} cannot depend on {_label(error.target)}\n"
                f"[dim]Cycle:[/dim] {chain}"
            )
        case _:
            title = "Dependency error"
            body = escape(str(error))

    console.print(Panel(body, title=f"[bold]{title}[/bold]", border_style="red", expand=False))
