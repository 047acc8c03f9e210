"""Tests for the junk and exclusion filters."""

import re

import pytest

from conftest import NET, PROVIDER, REGION, S0, S1, VPC
from tfbeautifier.core.errors import PatternError
from tfbeautifier.core.models import NodeKind
from tfbeautifier.loader import compile_patterns, exclude_nodes, read_dot, remove_junk


def _snapshot(model):
    return {node.id for node in model.nodes()}, {edge.key for edge in model.edges()}


def test_remove_junk(terraform_dot):
    """Test that junk nodes and every edge touching them are removed."""
    model = read_dot(terraform_dot)

    removed = remove_junk(model)

    assert removed == 3
    nodes, edges = _snapshot(model)
    assert nodes == {VPC, S0, S1, PROVIDER, REGION, NET}
    assert edges == {(VPC, PROVIDER), (S0, VPC), (S0, NET), (S1, S0), (PROVIDER, REGION)}
    assert all(node.kind != NodeKind.JUNK for node in model.nodes())


def test_remove_junk_is_idempotent(terraform_dot):
    """Test that filtering an already filtered graph changes nothing."""
    model = read_dot(terraform_dot)
    remove_junk(model)
    before = _snapshot(model)

    assert remove_junk(model) == 0
    assert _snapshot(model) == before


def test_keep_junk(terraform_dot):
    """Test that junk is kept on request."""
    model = read_dot(terraform_dot)
    before = _snapshot(model)

    assert remove_junk(model, keep_junk=True) == 0
    assert _snapshot(model) == before


def test_exclude_nodes(terraform_dot):
    """Test that exactly the matching nodes and their edges are removed."""
    model = read_dot(terraform_dot)
    remove_junk(model)
    nodes_before, edges_before = _snapshot(model)

    removed = exclude_nodes(model, [r"aws_vpc\.", r"\bvar\."])

    assert removed == 2
    nodes, edges = _snapshot(model)
    assert nodes == nodes_before - {VPC, REGION}
    assert edges == {
        edge for edge in edges_before if VPC not in edge and REGION not in edge
    }


def test_exclude_matches_identifier_not_label():
    """Test that patterns are matched against node identifiers only."""
    model = read_dot('digraph { "x" [label = "secret"]; "secret_y" [label = "y"] }')

    exclude_nodes(model, ["secret"])

    assert [node.id for node in model.nodes()] == ["x"]


def test_exclude_with_empty_pattern_list(terraform_dot):
    """Test that no patterns means no change."""
    model = read_dot(terraform_dot)
    before = _snapshot(model)

    assert exclude_nodes(model, []) == 0
    assert _snapshot(model) == before


def test_invalid_pattern_fails_before_filtering(terraform_dot):
    """Test that a bad pattern aborts without removing anything."""
    model = read_dot(terraform_dot)
    before = _snapshot(model)

    with pytest.raises(PatternError) as exc_info:
        exclude_nodes(model, [r"aws_vpc\.", "module.(net"])

    assert exc_info.value.pattern == "module.(net"
    assert _snapshot(model) == before


def test_compile_patterns_accepts_compiled():
    """Test that precompiled patterns are passed through."""
    compiled = re.compile("a")

    assert compile_patterns([compiled, "b"]) == [compiled, re.compile("b")]


def test_invalid_junk_pattern():
    """Test that junk patterns are validated too."""
    with pytest.raises(PatternError):
        read_dot("digraph { a }", junk_patterns=["[unclosed"])
