"""Terraform address helpers.

`terraform graph` names its nodes after Terraform addresses, decorated with
a `[root] ` prefix and operation markers such as ` (expand)` or ` (close)`:

    "[root] module.net.module.sub.aws_subnet.s1 (expand)"
    "[root] provider[\"registry.terraform.io/hashicorp/aws\"] (close)"

Module nesting is encoded by leading `module.<name>` segment pairs.
"""

from __future__ import annotations

import re

from ..core.models import ModulePath, NodeCategory

ROOT_PREFIX = "[root] "
_MARKER_SUFFIX = re.compile(r"\s+\([^()]*\)$")

_CATEGORY_PREFIXES = {
    "data": NodeCategory.DATA,
    "var": NodeCategory.VAR,
    "local": NodeCategory.LOCAL,
    "output": NodeCategory.OUTPUT,
    "provider": NodeCategory.PROVIDER,
}


def terraform_address(node_id: str) -> str:
    """Strip the `[root] ` prefix and trailing operation markers from a node id."""
    address = node_id.strip()
    if address.startswith(ROOT_PREFIX):
        address = address[len(ROOT_PREFIX):].strip()
    while True:
        stripped = _MARKER_SUFFIX.sub("", address)
        if stripped == address:
            return address
        address = stripped


def split_address(address: str) -> list[str] | None:
    """Split an address on dots that are outside brackets and quotes.

    Returns:
        The segments, or None when brackets or quotes are unbalanced.
    """
    segments = []
    current = []
    depth = 0
    in_quotes = False
    escaped = False
    for char in address:
        if in_quotes:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_quotes = False
            continue
        if char == '"':
            in_quotes = True
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth < 0:
                return None
        elif char == "." and depth == 0:
            segments.append("".join(current))
            current = []
            continue
        current.append(char)

    if in_quotes or depth:
        return None
    segments.append("".join(current))
    if any(not segment for segment in segments):
        return None
    return segments


def parse_module_path(address: str) -> tuple[ModulePath, list[str]] | None:
    """Split an address into its module path and the remaining segments.

    `module.a.module.b.aws_instance.x` gives `(("a", "b"), ["aws_instance", "x"])`.

    Returns:
        None when the address cannot be split.
    """
    segments = split_address(address)
    if segments is None:
        return None

    path = []
    index = 0
    while index + 1 < len(segments) and segments[index] == "module":
        path.append(segments[index + 1])
        index += 2
    return tuple(path), segments[index:]


def is_module_address(address: str) -> bool:
    """True when the address is made of `module.<name>` pairs only."""
    parsed = parse_module_path(address)
    return parsed is not None and bool(parsed[0]) and not parsed[1]


def categorize(address: str) -> NodeCategory:
    """Guess which configuration element an address refers to."""
    parsed = parse_module_path(address)
    if parsed is None:
        return NodeCategory.OTHER
    path, remainder = parsed
    if not remainder:
        return NodeCategory.MODULE if path else NodeCategory.OTHER

    head = remainder[0]
    if head.startswith("provider["):
        return NodeCategory.PROVIDER
    if head in _CATEGORY_PREFIXES:
        return _CATEGORY_PREFIXES[head]
    if len(remainder) >= 2 and "_" in head:
        return NodeCategory.RESOURCE
    return NodeCategory.OTHER
