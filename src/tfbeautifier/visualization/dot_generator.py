"""DOT language generation for cleaned-up Graphviz output."""

from __future__ import annotations

import graphviz
from graphviz import quoting

from ..core.models import GraphEdge, GraphModel, Module, ModuleTree, RenderingOptions
from .base import BaseRenderer

# Suffix of the node standing for a module in sibling mode. It reads back as a
# module node since trailing parenthesized markers are not part of addresses.
MODULE_ANCHOR_SUFFIX = " (module)"


def cluster_name(module: Module) -> str:
    return f"cluster_{module.id}"


class DOTGenerator(BaseRenderer):
    """Generates DOT source from the flat node and edge tables.

    Module members are grouped in `cluster_` subgraphs: nested in embedded
    mode, side by side with a parent to child edge otherwise.
    """

    GRAPH_ATTRIBUTES = {"compound": "true", "newrank": "true"}

    def render(self, model: GraphModel, options: RenderingOptions) -> bytes:
        return self.generate_dot(model, options).encode("utf-8")

    def generate_dot(self, model: GraphModel, options: RenderingOptions) -> str:
        """Generate DOT source for the model.

        Args:
            model: Graph model to render.
            options: Rendering options.

        Returns:
            DOT language string.
        """
        self.log.info("Generating DOT language from graph")
        tree = self.hierarchy_for(model, options)
        dot = graphviz.Digraph(name=options.graph_name, graph_attr=self.GRAPH_ATTRIBUTES)

        if tree.embed_modules:
            self._add_embedded_module(dot, model, tree, tree.root)
        else:
            self._add_sibling_modules(dot, model, tree)

        return dot.source

    def _add_embedded_module(
        self,
        graph: graphviz.Digraph,
        model: GraphModel,
        tree: ModuleTree,
        module: Module,
    ) -> None:
        self._add_nodes(graph, model, module)
        for child_path in module.children:
            child = tree.modules[child_path]
            with graph.subgraph(name=cluster_name(child)) as cluster:
                cluster.attr(label=child.name)
                self._add_embedded_module(cluster, model, tree, child)
        for key in module.edges:
            self._add_edge(graph, model.graph.edges[key]["edge"])

    def _add_sibling_modules(
        self,
        graph: graphviz.Digraph,
        model: GraphModel,
        tree: ModuleTree,
    ) -> None:
        self._add_nodes(graph, model, tree.root)
        for module in tree.walk():
            if module.is_root:
                continue
            with graph.subgraph(name=cluster_name(module)) as cluster:
                cluster.attr(label=module.name)
                cluster.node(self.anchor_id(module), label=module.name, shape="folder")
                self._add_nodes(cluster, model, module)

        for key in tree.root.edges:
            self._add_edge(graph, model.graph.edges[key]["edge"])

        for parent_path, child_path in tree.module_links:
            parent = tree.modules[parent_path]
            child = tree.modules[child_path]
            graph.edge(
                self.anchor_id(parent),
                self.anchor_id(child),
                ltail=cluster_name(parent),
                lhead=cluster_name(child),
            )

    @staticmethod
    def anchor_id(module: Module) -> str:
        return f"{module.id}{MODULE_ANCHOR_SUFFIX}"

    @staticmethod
    def _add_nodes(graph: graphviz.Digraph, model: GraphModel, module: Module) -> None:
        for node_id in module.members + module.bound_nodes:
            node = model.node(node_id)
            graph.node(node.id, _attributes=node.attributes)

    @staticmethod
    def _add_edge(graph: graphviz.Digraph, edge: GraphEdge) -> None:
        if ":" in edge.source or ":" in edge.target:
            # Digraph.edge() would read the colon as a port separator
            graph.body.append(
                f"\t{quoting.quote(edge.source)} -> {quoting.quote(edge.target)}"
                f"{quoting.attr_list(attributes=edge.attributes)}\n",
            )
        else:
            graph.edge(edge.source, edge.target, _attributes=edge.attributes)
