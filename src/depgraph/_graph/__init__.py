"""Graph module providing the acyclic dependency graph.

This module contains:
- AcyclicDependencyGraph[T]: A generic, append-only directed acyclic graph
- transitive_closure, find_path, topological_layers: the traversals it is built on
"""

from ._acyclic_graph import AcyclicDependencyGraph
from ._algorithms import find_path, topological_layers, transitive_closure

__all__ = ["AcyclicDependencyGraph", "find_path", "topological_layers", "transitive_closure"]
