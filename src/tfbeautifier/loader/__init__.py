"""Loading of `terraform graph` DOT output into a graph model."""

from .dot_reader import read_dot
from .filters import compile_patterns, exclude_nodes, remove_junk
from .hierarchy import HierarchyBuilder

__all__ = ["HierarchyBuilder", "compile_patterns", "exclude_nodes", "read_dot", "remove_junk"]
