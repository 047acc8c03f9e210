"""Renderer selection."""

from __future__ import annotations

import logging

from ..core.errors import ConfigError
from ..core.models import OutputType
from .base import BaseRenderer
from .cytoscape import CytoscapeHTMLRenderer, CytoscapeJSONRenderer
from .dot_generator import DOTGenerator

RENDERERS: dict[OutputType, type[BaseRenderer]] = {
    OutputType.CYTOSCAPE_JSON: CytoscapeJSONRenderer,
    OutputType.CYTOSCAPE_HTML: CytoscapeHTMLRenderer,
    OutputType.GRAPHVIZ: DOTGenerator,
}


def get_renderer(output_type: OutputType | str, log: logging.Logger | None = None) -> BaseRenderer:
    """Return the renderer for an output type.

    Raises:
        ConfigError: If the output type is not supported.
    """
    try:
        output_type = OutputType(output_type)
    except ValueError as e:
        supported = ", ".join(item.value for item in OutputType)
        raise ConfigError(f"Invalid output type: {output_type} (supported: {supported})") from e
    return RENDERERS[output_type](log)
