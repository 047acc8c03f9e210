"""Terraform Graph Beautifier - readable views of `terraform graph` output.

Converts the Graphviz DOT graph printed by `terraform graph` into an
interactive Cytoscape.js page, its JSON elements, or a cleaned-up DOT file.
"""

from .core.beautifier import GraphBeautifier
from .core.models import LoadOptions, OutputType, RenderingOptions

__version__ = "1.0.0"
__all__ = ["GraphBeautifier", "LoadOptions", "OutputType", "RenderingOptions"]
