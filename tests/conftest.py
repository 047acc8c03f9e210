"""Shared fixtures: DOT graphs as printed by `terraform graph`."""

import pytest

TERRAFORM_DOT = r"""digraph {
	compound = "true"
	newrank = "true"
	subgraph "root" {
		"[root] aws_vpc.v1 (expand)" [label = "aws_vpc.v1", shape = "box"]
		"[root] module.net.aws_subnet.s0 (expand)" [label = "module.net.aws_subnet.s0", shape = "box"]
		"[root] module.net.module.sub.aws_subnet.s1 (expand)" [label = "module.net.module.sub.aws_subnet.s1", shape = "box"]
		"[root] provider[\"registry.terraform.io/hashicorp/aws\"]" [label = "provider[\"registry.terraform.io/hashicorp/aws\"]", shape = "diamond"]
		"[root] var.region" [label = "var.region", shape = "note"]
		"[root] module.net (expand)" [label = "module.net", shape = "box"]
		"[root] aws_vpc.v1 (expand)" -> "[root] provider[\"registry.terraform.io/hashicorp/aws\"]"
		"[root] module.net.aws_subnet.s0 (expand)" -> "[root] aws_vpc.v1 (expand)"
		"[root] module.net.aws_subnet.s0 (expand)" -> "[root] module.net (expand)"
		"[root] module.net.module.sub.aws_subnet.s1 (expand)" -> "[root] module.net.aws_subnet.s0 (expand)"
		"[root] provider[\"registry.terraform.io/hashicorp/aws\"]" -> "[root] var.region"
		"[root] meta.count-boundary (EachMode fixup)" -> "[root] module.net.module.sub.aws_subnet.s1 (expand)"
		"[root] provider[\"registry.terraform.io/hashicorp/aws\"] (close)" -> "[root] module.net.module.sub.aws_subnet.s1 (expand)"
		"[root] root" -> "[root] meta.count-boundary (EachMode fixup)"
		"[root] root" -> "[root] provider[\"registry.terraform.io/hashicorp/aws\"] (close)"
	}
}
"""

SIMPLE_DOT = """digraph {
	"A" [label = "A"]
	"B" [label = "B"]
	"[root]" [label = "[root]"]
	"[root]" -> "A"
	"A" -> "B"
}
"""

MODULE_DOT = """digraph {
	"module.m.aws_instance.i1" [label = "module.m.aws_instance.i1", shape = "box"]
	"aws_instance.i2" [label = "aws_instance.i2", shape = "box"]
	"module.m.aws_instance.i1" -> "aws_instance.i2"
}
"""

VPC = "[root] aws_vpc.v1 (expand)"
S0 = "[root] module.net.aws_subnet.s0 (expand)"
S1 = "[root] module.net.module.sub.aws_subnet.s1 (expand)"
PROVIDER = '[root] provider["registry.terraform.io/hashicorp/aws"]'
REGION = "[root] var.region"
NET = "[root] module.net (expand)"


@pytest.fixture
def terraform_dot():
    return TERRAFORM_DOT


@pytest.fixture
def simple_dot():
    return SIMPLE_DOT


@pytest.fixture
def module_dot():
    return MODULE_DOT
