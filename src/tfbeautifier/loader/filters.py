"""Node filters applied to the flat graph before the hierarchy is built."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from ..core.errors import PatternError
from ..core.models import GraphModel, NodeKind

logger = logging.getLogger(__name__)


def compile_patterns(patterns: Iterable[str | re.Pattern]) -> list[re.Pattern]:
    """Compile exclusion patterns, failing on the first invalid one.

    Raises:
        PatternError: If a pattern is not a valid regular expression.
    """
    compiled = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise PatternError(pattern, str(e)) from e
    return compiled


def _remove_nodes(model: GraphModel, node_ids: list[str]) -> int:
    removed_edges = 0
    for node_id in node_ids:
        removed_edges += model.remove_node(node_id)
    return removed_edges


def remove_junk(
    model: GraphModel,
    keep_junk: bool = False,
    log: logging.Logger | None = None,
) -> int:
    """Remove the generator bookkeeping nodes and their edges.

    Args:
        model: Flat graph model, modified in place.
        keep_junk: Leave the graph untouched when True.
        log: Logger for diagnostics.

    Returns:
        Number of nodes removed.
    """
    log = log or logger
    if keep_junk:
        log.debug("Keeping junk nodes")
        return 0

    junk = [node.id for node in model.nodes() if node.kind == NodeKind.JUNK]
    removed_edges = _remove_nodes(model, junk)
    log.debug("Removed %d junk nodes and %d edges", len(junk), removed_edges)
    return len(junk)


def exclude_nodes(
    model: GraphModel,
    patterns: Iterable[str | re.Pattern],
    log: logging.Logger | None = None,
) -> int:
    """Remove nodes whose identifier matches any of the patterns.

    All patterns are compiled before the graph is touched.

    Returns:
        Number of nodes removed.
    """
    log = log or logger
    compiled = compile_patterns(patterns)
    if not compiled:
        return 0

    excluded = [
        node.id
        for node in model.nodes()
        if any(pattern.search(node.id) for pattern in compiled)
    ]
    removed_edges = _remove_nodes(model, excluded)
    log.debug(
        "Excluded %d nodes and %d edges matching %d patterns",
        len(excluded),
        removed_edges,
        len(compiled),
    )
    return len(excluded)
