"""In-memory acyclic dependency graph."""

__all__ = [
    "AcyclicDependencyGraph",
    "CircularDependencyError",
    "DependencyError",
    "RenderOptions",
    "SelfReferenceError",
    "render_dependency_error",
    "render_dependency_tree",
    "render_layers",
]

from ._errors import CircularDependencyError, DependencyError, SelfReferenceError
from ._graph import AcyclicDependencyGraph
from ._render import RenderOptions, render_dependency_error, render_dependency_tree, render_layers
