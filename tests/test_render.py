"""Tests for Rich rendering of graphs and errors."""

import pytest
from rich.console import Console

from depgraph import (
    AcyclicDependencyGraph,
    CircularDependencyError,
    DependencyError,
    RenderOptions,
    SelfReferenceError,
    render_dependency_error,
    render_dependency_tree,
    render_layers,
)


@pytest.fixture
def console() -> Console:
    return Console(record=True, width=100, color_system=None)


@pytest.fixture
def chain() -> AcyclicDependencyGraph[str]:
    # app -> web -> http -> socket, app -> log
    return AcyclicDependencyGraph.from_edges(
        [("app", "web"), ("web", "http"), ("http", "socket"), ("app", "log")],
    )


class TestRenderOptions:
    def test_defaults(self) -> None:
        options = RenderOptions()
        assert options.max_depth is None
        assert options.show_counts is True

    def test_negative_depth_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            RenderOptions(max_depth=-1)


class TestRenderLayers:
    def test_layers_table(self, chain: AcyclicDependencyGraph[str], console: Console) -> None:
        render_layers(chain.get_forward_dependency_topological_layers(), console, title="Build order")
        output = console.export_text()
        assert "Build order" in output
        assert "log, socket" in output
        assert "Total: 5 nodes in 4 layers" in output

    def test_without_counts(self, chain: AcyclicDependencyGraph[str], console: Console) -> None:
        render_layers(
            chain.get_forward_dependency_topological_layers(),
            console,
            options=RenderOptions(show_counts=False),
        )
        output = console.export_text()
        assert "Count" not in output
        assert "Total" not in output

    def test_custom_sort_key(self, console: Console) -> None:
        render_layers([frozenset({1, 10, 2})], console, options=RenderOptions(sort_key=lambda n: -n))
        assert "10, 2, 1" in console.export_text()

    def test_empty(self, console: Console) -> None:
        render_layers([], console)
        assert "Empty graph" in console.export_text()

    def test_markup_escaped(self, console: Console) -> None:
        render_layers([frozenset({"[bold]x"})], console)
        assert "[bold]x" in console.export_text()


class TestRenderDependencyTree:
    def test_full_tree(self, chain: AcyclicDependencyGraph[str], console: Console) -> None:
        render_dependency_tree(chain, "app", console)
        output = console.export_text()
        for name in ("app", "web", "http", "socket", "log"):
            assert name in output

    def test_max_depth_truncates(self, chain: AcyclicDependencyGraph[str], console: Console) -> None:
        render_dependency_tree(chain, "app", console, options=RenderOptions(max_depth=1))
        output = console.export_text()
        assert "web" in output
        assert "log" in output
        assert "http" not in output
        assert "..." in output

    def test_leaf_node(self, chain: AcyclicDependencyGraph[str], console: Console) -> None:
        render_dependency_tree(chain, "socket", console)
        assert console.export_text().strip() == "socket"


class TestRenderDependencyError:
    def test_self_reference(self, console: Console) -> None:
        render_dependency_error(SelfReferenceError("app"), console)
        output = console.export_text()
        assert "Self reference" in output
        assert "app cannot depend on itself" in output

    def test_circular_dependency(self, chain: AcyclicDependencyGraph[str], console: Console) -> None:
        with pytest.raises(CircularDependencyError) as exc_info:
            chain.depend_on("socket", "app")
        render_dependency_error(exc_info.value, console)
        output = console.export_text()
        assert "Circular dependency" in output
        assert "socket -> app -> web -> http -> socket" in output

    def test_generic_error(self, console: Console) -> None:
        render_dependency_error(DependencyError("something odd"), console)
        output = console.export_text()
        assert "Dependency error" in output
        assert "something odd" in output
