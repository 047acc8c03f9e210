"""Core graph beautifier module."""

from .beautifier import GraphBeautifier
from .errors import (
    BeautifierError,
    ConfigError,
    GraphIOError,
    ParseError,
    PatternError,
    RenderError,
    TemplateError,
)
from .models import (
    DEFAULT_JUNK_PATTERNS,
    GraphEdge,
    GraphModel,
    GraphNode,
    LoadOptions,
    Module,
    ModuleTree,
    NodeCategory,
    NodeKind,
    OutputType,
    RenderingOptions,
)

__all__ = [
    "DEFAULT_JUNK_PATTERNS",
    "BeautifierError",
    "ConfigError",
    "GraphBeautifier",
    "GraphEdge",
    "GraphIOError",
    "GraphModel",
    "GraphNode",
    "LoadOptions",
    "Module",
    "ModuleTree",
    "NodeCategory",
    "NodeKind",
    "OutputType",
    "ParseError",
    "PatternError",
    "RenderError",
    "RenderingOptions",
    "TemplateError",
]
