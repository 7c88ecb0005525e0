"""Mutable dependency graph that rejects cycles on insertion."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Iterator

from depgraph._errors import CircularDependencyError, SelfReferenceError

from ._algorithms import find_path, topological_layers, transitive_closure

logger = logging.getLogger(__name__)


class AcyclicDependencyGraph[T: Hashable]:
    """A directed acyclic graph of "depends on" relationships.

    Nodes are any hashable values. Edges are only ever added, through
    `depend_on`, which refuses any edge that would close a cycle.

    The graph keeps two indices over the same edges:
    - ``_forward[a] = {b}`` means "a depends on b"
    - ``_backward[b] = {a}`` means "b is depended on by a"

    A node without an entry in ``_forward`` is a leaf, one without an entry
    in ``_backward`` is a root. Empty sets are never stored.

    Example:
        >>> graph = AcyclicDependencyGraph()
        >>> graph.depend_on("app", "lib")
        >>> graph.depends_on("app", "lib")
        True

    """

    __slots__ = ("_backward", "_forward", "_nodes")

    def __init__(self) -> None:
        self._nodes: set[T] = set()
        self._forward: dict[T, set[T]] = {}
        self._backward: dict[T, set[T]] = {}

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[T, T]]) -> AcyclicDependencyGraph[T]:
        """Build a graph from ``(from_, to)`` pairs, meaning "from_ depends on to".

        Args:
            edges: Dependencies to add, in order.

        Returns:
            A new graph holding every edge.

        Raises:
            SelfReferenceError: If a pair names the same node twice.
            CircularDependencyError: If a pair would close a cycle.

        """
        graph: AcyclicDependencyGraph[T] = cls()
        for from_, to in edges:
            graph.depend_on(from_, to)
        return graph

    # --- Mutation ---

    def depend_on(self, from_: T, to: T) -> None:
        """Declare that ``from_`` directly depends on ``to``.

        Both nodes are added to the graph if needed. Adding an edge that
        already exists has no effect. A rejected edge leaves the graph
        unchanged.

        Args:
            from_: The dependent node.
            to: The node depended on.

        Raises:
            SelfReferenceError: If ``from_`` and ``to`` are the same node.
            CircularDependencyError: If ``to`` already depends on ``from_``.

        """
        if from_ == to:
            logger.debug(f"Rejected {from_!r} -> {to!r}: self reference")
            raise SelfReferenceError(from_)
        if self.depends_on(to, from_):
            path = find_path(self._forward, to, from_) or [to, from_]
            logger.debug(f"Rejected {from_!r} -> {to!r}: circular dependency")
            raise CircularDependencyError(from_, to, [from_, *path])

        self._nodes.add(from_)
        self._nodes.add(to)
        self._forward.setdefault(from_, set()).add(to)
        self._backward.setdefault(to, set()).add(from_)
        logger.debug(f"Added dependency {from_!r} -> {to!r}")

    # --- Queries ---

    @property
    def nodes(self) -> frozenset[T]:
        """All nodes in the graph."""
        return frozenset(self._nodes)

    def edges(self) -> Iterator[tuple[T, T]]:
        """Iterate over every ``(from_, to)`` dependency."""
        for from_, dependencies in self._forward.items():
            for to in dependencies:
                yield from_, to

    def direct_dependencies(self, node: T) -> frozenset[T]:
        """Get the nodes that ``node`` depends on directly."""
        return frozenset(self._forward.get(node, ()))

    def direct_dependents(self, node: T) -> frozenset[T]:
        """Get the nodes that depend on ``node`` directly."""
        return frozenset(self._backward.get(node, ()))

    def depends_on(self, source: T, target: T) -> bool:
        """Check whether ``source`` depends on ``target``, directly or transitively."""
        return target in self.get_forward_dependencies(source)

    def get_forward_dependencies(self, node: T) -> frozenset[T]:
        """Get all transitive dependencies of a node.

        Args:
            node: The node to query. Unknown nodes have no dependencies.

        Returns:
            Set of all nodes that ``node`` transitively depends on.

        """
        return transitive_closure(self._forward, node)

    def get_backward_dependencies(self, node: T) -> frozenset[T]:
        """Get all transitive dependents of a node.

        Args:
            node: The node to query. Unknown nodes have no dependents.

        Returns:
            Set of all nodes that transitively depend on ``node``.

        """
        return transitive_closure(self._backward, node)

    def dependency_path(self, source: T, target: T) -> list[T] | None:
        """Get a shortest chain of direct dependencies from ``source`` to ``target``.

        Returns:
            The chain including both ends, or None if ``source`` does not
            depend on ``target``.

        """
        if source == target:
            return None
        return find_path(self._forward, source, target)

    def get_leaves(self) -> frozenset[T]:
        """Get nodes that have no dependencies."""
        return frozenset(n for n in self._nodes if n not in self._forward)

    def get_roots(self) -> frozenset[T]:
        """Get nodes that nothing depends on."""
        return frozenset(n for n in self._nodes if n not in self._backward)

    # --- Ordering ---

    def get_forward_dependency_topological_layers(self) -> list[frozenset[T]]:
        """Partition the nodes into layers, dependencies first.

        The first layer is `get_leaves`. Each following layer holds the nodes
        whose direct dependencies all sit in earlier layers, so processing
        the layers in order always handles a node after its dependencies.

        Returns:
            List of layers covering every node exactly once. The order of
            nodes inside a layer is not guaranteed.

        """
        layers = topological_layers(self._nodes, self._forward, self._backward)
        logger.debug(f"Computed {len(layers)} forward layers for {len(self._nodes)} nodes")
        return layers

    def get_backward_dependency_topological_layers(self) -> list[frozenset[T]]:
        """Partition the nodes into layers, dependents first.

        The first layer is `get_roots`. Each following layer holds the nodes
        whose direct dependents all sit in earlier layers. This is the reverse
        processing order.

        Returns:
            List of layers covering every node exactly once. The order of
            nodes inside a layer is not guaranteed.

        """
        layers = topological_layers(self._nodes, self._backward, self._forward)
        logger.debug(f"Computed {len(layers)} backward layers for {len(self._nodes)} nodes")
        return layers

    def topological_order(self) -> list[T]:
        """Return nodes in an order where every node follows its dependencies."""
        return [node for layer in self.get_forward_dependency_topological_layers() for node in layer]

    # --- Consistency ---

    def validate(self) -> list[str]:
        """Check the internal indices and return a list of error messages.

        Checks for:
        - Edges missing from one of the two indices
        - Nodes referenced by an edge but not registered
        - Empty dependency sets
        - Cycles

        Returns:
            List of error messages. Empty list if the graph is consistent.

        """
        errors: list[str] = []

        for from_, dependencies in self._forward.items():
            for to in dependencies:
                if from_ not in self._backward.get(to, ()):
                    errors.append(f"Edge {from_!r} -> {to!r} is missing from the dependents index")
        for to, dependents in self._backward.items():
            for from_ in dependents:
                if to not in self._forward.get(from_, ()):
                    errors.append(f"Edge {from_!r} -> {to!r} is missing from the dependencies index")

        for index in (self._forward, self._backward):
            for node, neighbours in index.items():
                missing = ({node} | neighbours) - self._nodes
                if missing:
                    errors.append(f"Node {node!r} references unknown nodes: {missing}")
                if not neighbours:
                    errors.append(f"Node {node!r} has an empty adjacency set")

        try:
            topological_layers(self._nodes, self._forward, self._backward)
        except ValueError:
            errors.append("Graph contains a cycle")

        return errors

    # --- Copying and dunder helpers ---

    def copy(self) -> AcyclicDependencyGraph[T]:
        """Return an independent graph with the same nodes and edges."""
        clone: AcyclicDependencyGraph[T] = type(self)()
        clone._nodes = set(self._nodes)
        clone._forward = {node: set(deps) for node, deps in self._forward.items()}
        clone._backward = {node: set(deps) for node, deps in self._backward.items()}
        return clone

    __copy__ = copy

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._nodes

    def __iter__(self) -> Iterator[T]:
        """Iterate over the nodes in no particular order."""
        return iter(self._nodes)

    def __repr__(self) -> str:
        edge_count = sum(len(deps) for deps in self._forward.values())
        return f"{type(self).__name__}(nodes={len(self._nodes)}, edges={edge_count})"
