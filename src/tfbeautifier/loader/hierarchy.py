"""Module hierarchy inference from Terraform node addresses."""

from __future__ import annotations

import logging

from ..core.models import GraphModel, Module, ModulePath, ModuleTree, NodeKind
from .address import parse_module_path

logger = logging.getLogger(__name__)


def common_ancestor(first: ModulePath, second: ModulePath) -> ModulePath:
    """Longest module path both paths start with."""
    length = 0
    for left, right in zip(first, second):
        if left != right:
            break
        length += 1
    return first[:length]


class HierarchyBuilder:
    """Builds the module tree of a filtered flat graph."""

    def __init__(self, embed_modules: bool = True, log: logging.Logger | None = None):
        """Initialize the builder.

        Args:
            embed_modules: Nest modules inside their parent (edges go to the
                nearest common ancestor) when True; otherwise modules are
                siblings linked parent to child and edges stay at the root.
            log: Logger for diagnostics.
        """
        self.embed_modules = embed_modules
        self.log = log or logger

    def build(self, model: GraphModel) -> GraphModel:
        """Attach a freshly built module tree to the model."""
        model.hierarchy = self.build_tree(model)
        return model

    def build_tree(self, model: GraphModel) -> ModuleTree:
        """Build the module tree without modifying the model."""
        tree = ModuleTree(embed_modules=self.embed_modules)

        for node in model.nodes():
            parsed = parse_module_path(node.address)
            if parsed is None:
                self.log.debug("Cannot split address of %r, attaching it to the root", node.id)
                path: ModulePath = ()
            else:
                path = parsed[0]

            module = self._ensure_module(tree, path)
            tree.node_modules[node.id] = path
            if node.kind == NodeKind.MODULE:
                module.bound_nodes.append(node.id)
            else:
                module.members.append(node.id)

        for edge in model.edges():
            source_path = tree.node_modules[edge.source]
            target_path = tree.node_modules[edge.target]
            if self.embed_modules:
                owner = common_ancestor(source_path, target_path)
            else:
                owner = ()
            tree.modules[owner].edges.append(edge.key)

        self.log.debug(
            "Built %d modules (%s mode)",
            len(tree.modules) - 1,
            "embedded" if self.embed_modules else "sibling",
        )
        return tree

    def _ensure_module(self, tree: ModuleTree, path: ModulePath) -> Module:
        if path in tree.modules:
            return tree.modules[path]

        parent_path = path[:-1]
        parent = self._ensure_module(tree, parent_path)
        module = Module(path=path)
        tree.modules[path] = module
        tree.parents[path] = parent_path
        parent.children.append(path)
        if not self.embed_modules and parent_path:
            tree.module_links.append((parent_path, path))
        return module
