"""Errors raised when a dependency cannot be added to the graph."""

from collections.abc import Hashable, Sequence


class DependencyError(Exception):
    """Base class for rejected dependencies."""


class SelfReferenceError(DependencyError):
    """Raised when a node is declared to depend on itself."""

    def __init__(self, node: Hashable) -> None:
        self.node = node
        super().__init__(f"{node!r} cannot depend on itself")


class CircularDependencyError(DependencyError):
    """Raised when a new dependency would close a cycle.

    Attributes:
        source: The node that was declared to depend on ``target``.
        target: The node that already depends on ``source``.
        cycle: The chain ``source -> target -> ... -> source`` that the
            rejected dependency would have created.

    """

    def __init__(self, source: Hashable, target: Hashable, cycle: Sequence[Hashable]) -> None:
        self.source = source
        self.target = target
        self.cycle = tuple(cycle)
        chain = " -> ".join(repr(node) for node in self.cycle)
        super().__init__(f"Adding {source!r} -> {target!r} would create a cycle: {chain}")
