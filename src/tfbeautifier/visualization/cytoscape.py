"""Cytoscape.js element generation and HTML page rendering."""

from __future__ import annotations

import html
import json
from importlib import resources
from pathlib import Path
from string import Template
from typing import Literal

from pydantic import BaseModel

from ..core.errors import GraphIOError, TemplateError
from ..core.models import GraphModel, GraphNode, Module, ModuleTree, NodeKind, RenderingOptions
from ..loader.address import parse_module_path
from .base import BaseRenderer

GRAPH_NAME_PLACEHOLDER = "graph_name"
GRAPH_ELEMENTS_PLACEHOLDER = "graph_elements"


class ElementData(BaseModel):
    """The `data` field of a Cytoscape.js element."""

    id: str
    label: str | None = None
    type: str | None = None
    parent: str | None = None
    source: str | None = None
    target: str | None = None


class CytoscapeElement(BaseModel):
    """Node or edge element of a Cytoscape.js graph."""

    group: Literal["nodes", "edges"]
    data: ElementData
    classes: str = ""


class CytoscapeJSONRenderer(BaseRenderer):
    """Renders the module tree as a list of Cytoscape.js elements.

    Modules come first (parents before children), each followed by its
    member nodes, then the dependency edges and, in sibling mode, the
    parent to child module links.
    """

    def render(self, model: GraphModel, options: RenderingOptions) -> bytes:
        return self.generate_json(model, options).encode("utf-8")

    def generate_json(self, model: GraphModel, options: RenderingOptions) -> str:
        elements = self.build_elements(model, options)
        return json.dumps(
            [element.model_dump(exclude_none=True) for element in elements],
            indent=2,
        )

    def build_elements(self, model: GraphModel, options: RenderingOptions) -> list[CytoscapeElement]:
        """Build the ordered element list for the model."""
        self.log.info("Building Cytoscape.js elements")
        tree = self.hierarchy_for(model, options)
        embed = tree.embed_modules
        elements: list[CytoscapeElement] = []

        for module in tree.walk():
            if not module.is_root:
                parent = tree.parent_of(module.path)
                elements.append(
                    CytoscapeElement(
                        group="nodes",
                        data=ElementData(
                            id=module.id,
                            label=module.name,
                            type=NodeKind.MODULE.value,
                            parent=parent.id if embed and not parent.is_root else None,
                        ),
                        classes=NodeKind.MODULE.value,
                    ),
                )
            for node_id in module.members:
                elements.append(self._node_element(model.node(node_id), module, embed))

        for edge in model.edges():
            elements.append(
                CytoscapeElement(
                    group="edges",
                    data=ElementData(
                        id=f"{edge.source}->{edge.target}",
                        source=self._element_id(model, tree, edge.source),
                        target=self._element_id(model, tree, edge.target),
                    ),
                    classes="dependency",
                ),
            )

        for parent_path, child_path in tree.module_links:
            parent = tree.modules[parent_path]
            child = tree.modules[child_path]
            elements.append(
                CytoscapeElement(
                    group="edges",
                    data=ElementData(id=f"{parent.id}->{child.id}", source=parent.id, target=child.id),
                    classes="module-link",
                ),
            )

        self.log.debug("Built %d elements", len(elements))
        return elements

    @staticmethod
    def _node_element(node: GraphNode, module: Module, embed: bool) -> CytoscapeElement:
        label = node.label
        if embed and not module.is_root and node.label == node.address:
            # The enclosing module boxes already show the module path
            parsed = parse_module_path(node.address)
            if parsed is not None and parsed[1]:
                label = ".".join(parsed[1])
        return CytoscapeElement(
            group="nodes",
            data=ElementData(
                id=node.id,
                label=label,
                type=node.kind.value,
                parent=module.id if embed and not module.is_root else None,
            ),
            classes=f"{node.kind.value} {node.category.value}",
        )

    @staticmethod
    def _element_id(model: GraphModel, tree: ModuleTree, node_id: str) -> str:
        # Module nodes are drawn as their module element
        if model.node(node_id).kind == NodeKind.MODULE:
            return tree.module_of(node_id).id
        return node_id


class CytoscapeHTMLRenderer(BaseRenderer):
    """Embeds the Cytoscape.js elements in an HTML page template.

    Templates are `string.Template` pages with a `$graph_elements`
    placeholder (JSON array) and an optional `$graph_name` one.
    """

    def render(self, model: GraphModel, options: RenderingOptions) -> bytes:
        template = self.load_template(options.html_template)
        elements = CytoscapeJSONRenderer(self.log).generate_json(model, options)
        return self.fill_template(template, options.graph_name, elements).encode("utf-8")

    def load_template(self, template_path: str | None = None) -> str:
        """Read a template file, or the packaged default one."""
        if template_path is None:
            self.log.debug("Using the default HTML template")
            return (resources.files("tfbeautifier") / "templates" / "index.html").read_text(encoding="utf-8")

        self.log.debug("Using HTML template %s", template_path)
        try:
            return Path(template_path).read_text(encoding="utf-8")
        except OSError as e:
            raise GraphIOError("read HTML template", template_path, e) from e
        except UnicodeDecodeError as e:
            raise TemplateError(f"HTML template {template_path} is not valid UTF-8: {e.reason}") from e

    @staticmethod
    def fill_template(text: str, graph_name: str, elements_json: str) -> str:
        """Substitute the graph name and elements into a page template.

        Raises:
            TemplateError: If a placeholder is malformed, unknown or the
                elements placeholder is missing.
        """
        template = Template(text)
        if not template.is_valid():
            raise TemplateError("HTML template contains a malformed placeholder (use $$ for a literal $)")

        identifiers = set(template.get_identifiers())
        if GRAPH_ELEMENTS_PLACEHOLDER not in identifiers:
            raise TemplateError(f"HTML template has no ${GRAPH_ELEMENTS_PLACEHOLDER} placeholder")
        unknown = identifiers - {GRAPH_NAME_PLACEHOLDER, GRAPH_ELEMENTS_PLACEHOLDER}
        if unknown:
            raise TemplateError(f"HTML template has unknown placeholders: {', '.join(sorted(unknown))}")

        return template.substitute(
            {
                GRAPH_NAME_PLACEHOLDER: html.escape(graph_name),
                # Keep "</script>" inside the data from closing the script element
                GRAPH_ELEMENTS_PLACEHOLDER: elements_json.replace("</", "<\\/"),
            },
        )
