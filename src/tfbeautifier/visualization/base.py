"""Common renderer interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..core.models import GraphModel, ModuleTree, RenderingOptions
from ..loader.hierarchy import HierarchyBuilder


class BaseRenderer(ABC):
    """Renders a graph model to bytes without modifying it."""

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logging.getLogger(type(self).__module__)

    @abstractmethod
    def render(self, model: GraphModel, options: RenderingOptions) -> bytes:
        """Render the model.

        Raises:
            RenderError: If the output cannot be produced.
        """

    def hierarchy_for(self, model: GraphModel, options: RenderingOptions) -> ModuleTree:
        """Module tree matching the requested embedding mode.

        The model's own tree is reused when it was built in the same mode,
        otherwise a new one is built and left detached from the model.
        """
        tree = model.hierarchy
        if tree is None or tree.embed_modules != options.embed_modules:
            tree = HierarchyBuilder(options.embed_modules, self.log).build_tree(model)
        return tree
