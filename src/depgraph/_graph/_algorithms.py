"""Graph algorithms over adjacency mappings."""

from collections import deque
from collections.abc import Collection, Hashable, Iterable, Mapping


def transitive_closure[T: Hashable](adjacency: Mapping[T, Collection[T]], start: T) -> frozenset[T]:
    """Collect every node reachable from ``start`` by following ``adjacency``.

    The expansion proceeds in rounds: each round visits the neighbours of the
    nodes discovered in the previous round and keeps only the ones not seen
    before. It stops once a round discovers nothing new.

    Args:
        adjacency: Mapping from node to its direct neighbours.
            A missing key means the node has no neighbours.
        start: The node to expand from. It is not part of the result
            unless it can reach itself.

    Returns:
        Set of reachable nodes.

    Example:
        >>> sorted(transitive_closure({"a": ["b"], "b": ["c"]}, "a"))
        ['b', 'c']

    """
    reached: set[T] = set()
    frontier = [start]
    while frontier:
        discoveries: list[T] = []
        for node in frontier:
            for neighbour in adjacency.get(node, ()):
                if neighbour not in reached:
                    reached.add(neighbour)
                    discoveries.append(neighbour)
        frontier = discoveries
    return frozenset(reached)


def find_path[T: Hashable](adjacency: Mapping[T, Collection[T]], source: T, target: T) -> list[T] | None:
    """Find a shortest path from ``source`` to ``target``.

    Args:
        adjacency: Mapping from node to its direct neighbours.
        source: First node of the path.
        target: Last node of the path.

    Returns:
        The path including both ends, or None if ``target`` is unreachable.
        A path from a node to itself needs at least one edge.

    """
    parents: dict[T, T] = {}
    queue = deque([source])
    while queue:
        node = queue.popleft()
        for neighbour in adjacency.get(node, ()):
            if neighbour in parents or (neighbour == source and source != target):
                continue
            parents[neighbour] = node
            if neighbour == target:
                path = [target]
                current = node
                while current != source:
                    path.append(current)
                    current = parents[current]
                path.append(source)
                path.reverse()
                return path
            queue.append(neighbour)
    return None


def topological_layers[T: Hashable](
    nodes: Iterable[T],
    waits_on: Mapping[T, Collection[T]],
    releases: Mapping[T, Collection[T]],
) -> list[frozenset[T]]:
    """Partition nodes into layers so that each node follows what it waits on.

    A node is placed in the earliest layer after every node it waits on has
    been placed. The first layer holds the nodes that wait on nothing.

    Args:
        nodes: Every node to place.
        waits_on: Mapping from node to the nodes that must be placed first.
        releases: The inverse of ``waits_on``: mapping from node to the
            nodes waiting on it.

    Returns:
        List of layers. The order inside a layer is unspecified.

    Raises:
        ValueError: If the graph contains a cycle.

    Example:
        >>> topological_layers(["a", "b"], {"b": ["a"]}, {"a": ["b"]})
        [frozenset({'a'}), frozenset({'b'})]

    """
    # Number of not-yet-placed nodes each node still waits on
    remaining = {node: len(waits_on.get(node, ())) for node in nodes}

    layer = [node for node, count in remaining.items() if count == 0]
    layers: list[frozenset[T]] = []
    placed = 0

    while layer:
        layers.append(frozenset(layer))
        placed += len(layer)
        next_layer: list[T] = []
        for node in layer:
            for waiter in releases.get(node, ()):
                remaining[waiter] -= 1
                if remaining[waiter] == 0:
                    next_layer.append(waiter)
        layer = next_layer

    if placed != len(remaining):
        msg = "Cycle detected in graph"
        raise ValueError(msg)

    return layers
