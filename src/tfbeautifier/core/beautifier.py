"""Main GraphBeautifier class chaining the loading and rendering stages."""

from __future__ import annotations

import logging

from ..loader import HierarchyBuilder, compile_patterns, exclude_nodes, read_dot, remove_junk
from ..loader.dot_reader import DotSource
from ..visualization import get_renderer
from .models import GraphModel, LoadOptions, OutputType, RenderingOptions

logger = logging.getLogger(__name__)


class GraphBeautifier:
    """Turns `terraform graph` output into readable graphs."""

    def __init__(self, log: logging.Logger | None = None):
        """Initialize the beautifier.

        Args:
            log: Logger handed to every stage. Defaults to this module's logger.
        """
        self.log = log or logger

    def load(
        self,
        source: DotSource,
        load_options: LoadOptions | None = None,
        embed_modules: bool = True,
    ) -> GraphModel:
        """Read, filter and structure a DOT graph.

        Args:
            source: DOT text, bytes or readable stream.
            load_options: Junk and exclusion filtering options.
            embed_modules: Module embedding mode the hierarchy is built for.

        Returns:
            Graph model with its module hierarchy.
        """
        load_options = load_options or LoadOptions()

        # Fail on bad patterns before reading anything
        exclude_patterns = compile_patterns(load_options.exclude_patterns)

        model = read_dot(source, load_options.junk_patterns, self.log)
        remove_junk(model, load_options.keep_tf_junk, self.log)
        exclude_nodes(model, exclude_patterns, self.log)
        HierarchyBuilder(embed_modules, self.log).build(model)

        self.log.info(
            "Loaded graph with %d nodes and %d edges",
            model.number_of_nodes(),
            model.number_of_edges(),
        )
        return model

    def render(
        self,
        model: GraphModel,
        output_type: OutputType | str,
        rendering_options: RenderingOptions | None = None,
    ) -> bytes:
        """Render a graph model with the renderer of the output type."""
        rendering_options = rendering_options or RenderingOptions()
        renderer = get_renderer(output_type, self.log)
        self.log.debug("Rendering graph with %s", type(renderer).__name__)
        return renderer.render(model, rendering_options)

    def convert(
        self,
        source: DotSource,
        output_type: OutputType | str,
        load_options: LoadOptions | None = None,
        rendering_options: RenderingOptions | None = None,
    ) -> bytes:
        """Load a DOT graph and render it in one go."""
        rendering_options = rendering_options or RenderingOptions()
        # Validate the output type before doing any work
        get_renderer(output_type, self.log)
        model = self.load(source, load_options, rendering_options.embed_modules)
        return self.render(model, output_type, rendering_options)
