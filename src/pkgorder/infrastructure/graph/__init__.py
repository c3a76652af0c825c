from pkgorder.infrastructure.graph.engine import DependencyGraph

__all__ = ["DependencyGraph"]
