"""Reader for the DOT dialect printed by `terraform graph`.

Only the subset of the DOT language needed for Terraform graphs (and for the
graphs written back by this package) is understood: nested subgraphs, node
and edge statements with attribute lists, graph attribute statements and
comments. Subgraphs used as edge endpoints and ports are not supported.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import IO, Union

from ..core.errors import GraphIOError, ParseError
from ..core.models import DEFAULT_JUNK_PATTERNS, GraphEdge, GraphModel, GraphNode, NodeKind
from .address import categorize, is_module_address, terraform_address
from .filters import compile_patterns

logger = logging.getLogger(__name__)

DotSource = Union[str, bytes, IO[str], IO[bytes]]

KEYWORDS = {"strict", "graph", "digraph", "node", "edge", "subgraph"}

# Token kinds
ID = "ID"
EDGE_OP = "EDGE_OP"
PUNCT = "PUNCT"
EOF = "EOF"

_TOKEN_RE = re.compile(
    r"""
    (?P<newline>\n)
  | (?P<space>[ \t\r\f\v]+)
  | (?P<line_comment>(?://|\#)[^\n]*)
  | (?P<block_comment>/\*.*?\*/)
  | (?P<quoted>"(?:[^"\\]|\\.)*")
  | (?P<edge_op>->|--)
  | (?P<numeral>-?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?))
  | (?P<name>[A-Za-z_\u0080-\uffff][A-Za-z_0-9\u0080-\uffff]*)
  | (?P<punct>[{}\[\]=;,:])
    """,
    re.VERBOSE | re.DOTALL,
)
_QUOTED_ESCAPE_RE = re.compile(r'\\(\r?\n|")')


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    line: int
    column: int
    quoted: bool = False


class _Tokenizer:
    """Splits DOT text into tokens, keeping line and column positions."""

    def __init__(self, text: str):
        self.text = text
        self.lines = text.splitlines()

    def error(self, message: str, line: int, column: int) -> ParseError:
        context = self.lines[line - 1] if 0 < line <= len(self.lines) else ""
        return ParseError(message, line, column, context)

    def tokens(self) -> list[Token]:
        result = []
        pos = 0
        line = 1
        line_start = 0
        text = self.text
        while pos < len(text):
            column = pos - line_start + 1
            if text[pos] == "<":
                end = self._html_end(pos, line, column)
                value = text[pos:end]
                result.append(Token(ID, value, line, column, quoted=True))
                line, line_start = self._advance_lines(value, pos, line, line_start)
                pos = end
                continue

            match = _TOKEN_RE.match(text, pos)
            if match is None:
                if text[pos] == '"':
                    raise self.error("unterminated quoted string", line, column)
                raise self.error(f"unexpected character {text[pos]!r}", line, column)

            kind = match.lastgroup
            value = match.group()
            if kind == "quoted":
                unquoted = _QUOTED_ESCAPE_RE.sub(lambda m: "" if m.group(1) != '"' else '"', value[1:-1])
                result.append(Token(ID, unquoted, line, column, quoted=True))
            elif kind in ("numeral", "name"):
                result.append(Token(ID, value, line, column))
            elif kind == "edge_op":
                result.append(Token(EDGE_OP, value, line, column))
            elif kind == "punct":
                result.append(Token(PUNCT, value, line, column))

            line, line_start = self._advance_lines(value, pos, line, line_start)
            pos = match.end()

        result.append(Token(EOF, "", line, pos - line_start + 1))
        return result

    @staticmethod
    def _advance_lines(value: str, pos: int, line: int, line_start: int) -> tuple[int, int]:
        newlines = value.count("\n")
        if newlines:
            line += newlines
            line_start = pos + value.rindex("\n") + 1
        return line, line_start

    def _html_end(self, start: int, line: int, column: int) -> int:
        depth = 0
        for index in range(start, len(self.text)):
            char = self.text[index]
            if char == "<":
                depth += 1
            elif char == ">":
                depth -= 1
                if depth == 0:
                    return index + 1
        raise self.error("unterminated HTML string", line, column)


class _DotParser:
    """Recursive descent parser populating a flat GraphModel."""

    def __init__(self, text: str, junk_patterns: list[re.Pattern]):
        self.tokenizer = _Tokenizer(text)
        self.tokens = self.tokenizer.tokens()
        self.index = 0
        self.junk_patterns = junk_patterns
        self.model = GraphModel()

    # Token helpers

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def peek(self, offset: int = 1) -> Token:
        return self.tokens[min(self.index + offset, len(self.tokens) - 1)]

    def advance(self) -> Token:
        token = self.current
        if token.kind != EOF:
            self.index += 1
        return token

    def error(self, message: str, token: Token | None = None) -> ParseError:
        token = token or self.current
        found = "end of input" if token.kind == EOF else repr(token.value)
        return self.tokenizer.error(f"{message}, found {found}", token.line, token.column)

    def is_punct(self, value: str, token: Token | None = None) -> bool:
        token = token or self.current
        return token.kind == PUNCT and token.value == value

    def is_keyword(self, *names: str, token: Token | None = None) -> bool:
        token = token or self.current
        return token.kind == ID and not token.quoted and token.value.lower() in names

    def expect_punct(self, value: str) -> Token:
        if not self.is_punct(value):
            raise self.error(f"expected {value!r}")
        return self.advance()

    def expect_id(self, what: str = "identifier") -> str:
        token = self.current
        if token.kind != ID or self.is_keyword(*KEYWORDS):
            raise self.error(f"expected {what}")
        self.advance()
        return token.value

    def skip_separator(self) -> None:
        while self.is_punct(";") or self.is_punct(","):
            self.advance()

    # Grammar

    def parse(self) -> GraphModel:
        if self.is_keyword("strict"):
            self.advance()
        if not self.is_keyword("digraph", "graph"):
            raise self.error("expected 'digraph' or 'graph'")
        self.advance()

        if self.current.kind == ID and not self.is_keyword(*KEYWORDS):
            self.model.name = self.advance().value
        self.parse_block()

        if self.current.kind != EOF:
            raise self.error("expected end of input")
        return self.model

    def parse_block(self) -> None:
        self.expect_punct("{")
        while not self.is_punct("}"):
            if self.current.kind == EOF:
                raise self.error("expected '}'")
            self.parse_statement()
            self.skip_separator()
        self.advance()

    def parse_statement(self) -> None:
        if self.is_keyword("graph", "node", "edge"):
            # Default attribute statements do not describe graph content
            self.advance()
            self.parse_attributes()
            return

        if self.is_keyword("subgraph") or self.is_punct("{"):
            self.parse_subgraph()
            if self.current.kind == EDGE_OP:
                raise self.error("subgraphs as edge endpoints are not supported")
            return

        if self.current.kind == ID and self.is_punct("=", self.peek()):
            self.advance()
            self.advance()
            self.expect_id("attribute value")
            return

        node_id = self.parse_node_id()
        if self.current.kind == EDGE_OP:
            chain = [node_id]
            while self.current.kind == EDGE_OP:
                self.advance()
                chain.append(self.parse_node_id())
            attributes = self.parse_attributes()
            for node in chain:
                self.declare_node(node, {})
            for source, target in zip(chain, chain[1:]):
                self.model.add_edge(GraphEdge(source, target, dict(attributes)))
        else:
            self.declare_node(node_id, self.parse_attributes())

    def parse_subgraph(self) -> None:
        if self.is_keyword("subgraph"):
            self.advance()
            if self.current.kind == ID and not self.is_keyword(*KEYWORDS):
                self.advance()
        self.parse_block()

    def parse_node_id(self) -> str:
        node_id = self.expect_id("node identifier")
        if self.is_punct(":"):
            # Ports only position edge ends; they don't identify nodes
            self.advance()
            self.expect_id("port")
            if self.is_punct(":"):
                self.advance()
                self.expect_id("compass point")
        return node_id

    def parse_attributes(self) -> dict[str, str]:
        attributes: dict[str, str] = {}
        while self.is_punct("["):
            self.advance()
            while not self.is_punct("]"):
                name = self.expect_id("attribute name")
                self.expect_punct("=")
                attributes[name] = self.expect_id("attribute value")
                self.skip_separator()
            self.advance()
        return attributes

    def declare_node(self, node_id: str, attributes: dict[str, str]) -> None:
        if node_id in self.model and not attributes:
            return
        self.model.add_node(self.build_node(node_id, attributes))

    def build_node(self, node_id: str, attributes: dict[str, str]) -> GraphNode:
        address = terraform_address(node_id)
        return GraphNode(
            id=node_id,
            label=attributes.get("label", address),
            kind=self.classify(node_id, address),
            address=address,
            category=categorize(address),
            attributes=dict(attributes),
        )

    def classify(self, node_id: str, address: str) -> NodeKind:
        if any(pattern.search(node_id) for pattern in self.junk_patterns):
            return NodeKind.JUNK
        if is_module_address(address):
            return NodeKind.MODULE
        return NodeKind.RESOURCE


def read_source(source: DotSource) -> str:
    """Read DOT text from a string, bytes or a (binary or text) stream."""
    if hasattr(source, "read"):
        try:
            source = source.read()
        except OSError as e:
            raise GraphIOError("read", getattr(source, "name", "input stream"), e) from e
    if isinstance(source, bytes):
        try:
            return source.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"input is not valid UTF-8 ({e.reason})", 1, 1) from e
    return source.removeprefix("\ufeff")


def read_dot(
    source: DotSource,
    junk_patterns: Iterable[str] | None = None,
    log: logging.Logger | None = None,
) -> GraphModel:
    """Parse DOT source into a flat graph model.

    Args:
        source: DOT text, raw bytes or a readable stream.
        junk_patterns: Regular expressions marking generator bookkeeping nodes.
            Defaults to DEFAULT_JUNK_PATTERNS.
        log: Logger for diagnostics, defaults to the module logger.

    Returns:
        GraphModel with classified nodes and edges, without hierarchy.
    """
    log = log or logger
    if junk_patterns is None:
        junk_patterns = DEFAULT_JUNK_PATTERNS
    compiled = compile_patterns(junk_patterns)
    model = _DotParser(read_source(source), compiled).parse()

    kinds = {kind: 0 for kind in NodeKind}
    for node in model.nodes():
        kinds[node.kind] += 1
    log.debug(
        "Read %d nodes (%s) and %d edges",
        model.number_of_nodes(),
        ", ".join(f"{count} {kind.value}" for kind, count in kinds.items()),
        model.number_of_edges(),
    )
    return model
