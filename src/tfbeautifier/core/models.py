"""Data models and enums for the graph beautifier."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

import networkx as nx
from pydantic import BaseModel, Field

# Identifiers of the bookkeeping nodes printed by `terraform graph`.
DEFAULT_JUNK_PATTERNS: tuple[str, ...] = (
    r"^\[root\]$",
    r"^(\[root\] )?root$",
    r"^(\[root\] )?meta\.",
    r"\(close\)$",
    r"\(prepare state\)$",
)

ModulePath = tuple[str, ...]


class OutputType(str, Enum):
    """Supported output types."""

    CYTOSCAPE_JSON = "cyto-json"
    CYTOSCAPE_HTML = "cyto-html"
    GRAPHVIZ = "graphviz"


class NodeKind(str, Enum):
    """Structural kind of a graph node."""

    RESOURCE = "resource"
    MODULE = "module"
    JUNK = "junk"


class NodeCategory(str, Enum):
    """Terraform configuration element a node stands for, used for styling."""

    RESOURCE = "resource"
    DATA = "data"
    MODULE = "module"
    VAR = "var"
    LOCAL = "local"
    OUTPUT = "output"
    PROVIDER = "provider"
    OTHER = "other"


def module_id(path: ModulePath) -> str:
    """Return the Terraform address of a module path, '' for the root."""
    return ".".join(f"module.{name}" for name in path)


def default_graph_name() -> str:
    """Name graphs after the current working directory."""
    return Path.cwd().name


@dataclass(frozen=True)
class GraphNode:
    """Graph node read from DOT."""

    id: str
    label: str
    kind: NodeKind
    address: str
    category: NodeCategory = NodeCategory.OTHER
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class GraphEdge:
    """Directed edge between two graph nodes."""

    source: str
    target: str
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.target)


@dataclass
class Module:
    """One level of module nesting, inferred from node addresses."""

    path: ModulePath
    children: list[ModulePath] = field(default_factory=list)
    members: list[str] = field(default_factory=list)
    bound_nodes: list[str] = field(default_factory=list)
    edges: list[tuple[str, str]] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.path[-1] if self.path else ""

    @property
    def id(self) -> str:
        return module_id(self.path)

    @property
    def is_root(self) -> bool:
        return not self.path


@dataclass
class ModuleTree:
    """Module arena keyed by path, with a child to parent index."""

    embed_modules: bool
    modules: dict[ModulePath, Module] = field(default_factory=dict)
    parents: dict[ModulePath, ModulePath] = field(default_factory=dict)
    node_modules: dict[str, ModulePath] = field(default_factory=dict)
    module_links: list[tuple[ModulePath, ModulePath]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.modules.setdefault((), Module(path=()))

    @property
    def root(self) -> Module:
        return self.modules[()]

    def module_of(self, node_id: str) -> Module:
        """Module a node is a member of (or bound to)."""
        return self.modules[self.node_modules[node_id]]

    def parent_of(self, path: ModulePath) -> Module | None:
        if not path:
            return None
        return self.modules[self.parents[path]]

    def walk(self, path: ModulePath = ()) -> Iterator[Module]:
        """Yield modules depth-first, parents before children."""
        module = self.modules[path]
        yield module
        for child in module.children:
            yield from self.walk(child)


class GraphModel:
    """Flat node and edge tables plus the module hierarchy built over them."""

    def __init__(self, name: str | None = None):
        self.name = name
        self.graph: nx.DiGraph = nx.DiGraph()
        self.hierarchy: ModuleTree | None = None

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.graph

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def add_node(self, node: GraphNode) -> GraphNode:
        """Add a node, merging attributes into an existing one with the same id.

        The kind of an existing node is kept.
        """
        existing = self.graph.nodes[node.id]["node"] if node.id in self.graph else None
        if existing is not None:
            attributes = {**existing.attributes, **node.attributes}
            node = replace(
                existing,
                label=attributes.get("label", existing.label),
                attributes=attributes,
            )
        self.graph.add_node(node.id, node=node)
        self.hierarchy = None
        return node

    def add_edge(self, edge: GraphEdge) -> GraphEdge:
        """Add an edge between two existing nodes."""
        for endpoint in edge.key:
            if endpoint not in self.graph:
                raise KeyError(f"Edge {edge.source!r} -> {edge.target!r} references unknown node {endpoint!r}")
        if self.graph.has_edge(*edge.key):
            previous = self.graph.edges[edge.key]["edge"]
            edge = replace(previous, attributes={**previous.attributes, **edge.attributes})
        self.graph.add_edge(edge.source, edge.target, edge=edge)
        self.hierarchy = None
        return edge

    def remove_node(self, node_id: str) -> int:
        """Remove a node and every edge touching it.

        Returns:
            Number of edges removed along with the node.
        """
        removed_edges = self.graph.in_degree(node_id) + self.graph.out_degree(node_id)
        if self.graph.has_edge(node_id, node_id):
            removed_edges -= 1
        self.graph.remove_node(node_id)
        self.hierarchy = None
        return removed_edges

    def node(self, node_id: str) -> GraphNode:
        return self.graph.nodes[node_id]["node"]

    def nodes(self) -> list[GraphNode]:
        return [data["node"] for _, data in self.graph.nodes(data=True)]

    def edges(self) -> list[GraphEdge]:
        return [data["edge"] for _, _, data in self.graph.edges(data=True)]

    def number_of_nodes(self) -> int:
        return self.graph.number_of_nodes()

    def number_of_edges(self) -> int:
        return self.graph.number_of_edges()


class LoadOptions(BaseModel):
    """Options controlling how the input graph is read and filtered."""

    keep_tf_junk: bool = False
    exclude_patterns: list[str] = Field(default_factory=list)
    junk_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_JUNK_PATTERNS))


class RenderingOptions(BaseModel):
    """Options controlling how the graph model is rendered."""

    graph_name: str = Field(default_factory=default_graph_name)
    embed_modules: bool = True
    html_template: str | None = None
