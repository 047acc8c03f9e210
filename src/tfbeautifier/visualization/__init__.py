"""Visualization module for graph rendering."""

from .base import BaseRenderer
from .cytoscape import CytoscapeHTMLRenderer, CytoscapeJSONRenderer
from .dot_generator import DOTGenerator
from .renderer import RENDERERS, get_renderer

__all__ = [
    "RENDERERS",
    "BaseRenderer",
    "CytoscapeHTMLRenderer",
    "CytoscapeJSONRenderer",
    "DOTGenerator",
    "get_renderer",
]
