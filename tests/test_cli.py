"""End-to-end tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from tfbeautifier import __version__
from tfbeautifier.cli import cli
from tfbeautifier.loader import read_dot


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def input_file(tmp_path, simple_dot):
    path = tmp_path / "graph.dot"
    path.write_text(simple_dot, encoding="utf-8")
    return path


def test_version(runner):
    """Test that the version is printed without processing."""
    result = runner.invoke(cli, ["-v"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_graphviz_output(runner, input_file, tmp_path):
    """Test the default junk removal on graphviz output."""
    output = tmp_path / "clean.dot"

    result = runner.invoke(
        cli,
        ["--input", str(input_file), "--output", str(output), "--output-type", "graphviz"],
    )

    assert result.exit_code == 0, result.output
    model = read_dot(output.read_bytes())
    assert {node.id for node in model.nodes()} == {"A", "B"}
    assert [edge.key for edge in model.edges()] == [("A", "B")]


def test_keep_tf_junk(runner, input_file, tmp_path):
    """Test that junk is kept with --keep-tf-junk."""
    output = tmp_path / "clean.dot"

    result = runner.invoke(
        cli,
        [
            "--input", str(input_file),
            "--output", str(output),
            "--output-type", "graphviz",
            "--keep-tf-junk",
        ],
    )

    assert result.exit_code == 0, result.output
    model = read_dot(output.read_bytes())
    assert {node.id for node in model.nodes()} == {"A", "B", "[root]"}
    assert model.number_of_edges() == 2


def test_cyto_json_from_stdin(runner, module_dot, tmp_path):
    """Test reading stdin and writing Cytoscape.js elements."""
    output = tmp_path / "graph.json"

    result = runner.invoke(
        cli,
        ["--output", str(output), "--output-type", "cyto-json"],
        input=module_dot,
    )

    assert result.exit_code == 0, result.output
    elements = {element["data"]["id"]: element for element in json.loads(output.read_text())}
    assert elements["module.m"]["data"]["label"] == "m"
    assert elements["module.m.aws_instance.i1"]["data"]["parent"] == "module.m"
    assert "parent" not in elements["aws_instance.i2"]["data"]


def test_cyto_json_without_embedding(runner, module_dot, tmp_path):
    """Test --no-embed-modules output."""
    output = tmp_path / "graph.json"

    result = runner.invoke(
        cli,
        ["--output", str(output), "--output-type", "cyto-json", "--no-embed-modules"],
        input=module_dot,
    )

    assert result.exit_code == 0, result.output
    assert all("parent" not in element["data"] for element in json.loads(output.read_text()))


def test_exclude(runner, module_dot, tmp_path):
    """Test that --exclude removes matching resources."""
    output = tmp_path / "graph.json"

    result = runner.invoke(
        cli,
        ["--output", str(output), "--output-type", "cyto-json", "--exclude", "i2$", "--exclude", "^nothing"],
        input=module_dot,
    )

    assert result.exit_code == 0, result.output
    ids = {element["data"]["id"] for element in json.loads(output.read_text())}
    assert ids == {"module.m", "module.m.aws_instance.i1"}


def test_default_html_output(runner, input_file, tmp_path):
    """Test the default output type and graph name."""
    output = tmp_path / "graph.html"

    result = runner.invoke(
        cli,
        ["--input", str(input_file), "--output", str(output), "--graph-name", "staging"],
    )

    assert result.exit_code == 0, result.output
    page = output.read_text(encoding="utf-8")
    assert "<title>staging</title>" in page
    assert "cytoscape" in page


def test_custom_html_template(runner, input_file, tmp_path):
    """Test --cyto-html-template."""
    template = tmp_path / "template.html"
    template.write_text("<h1>$graph_name</h1><script>$graph_elements</script>", encoding="utf-8")
    output = tmp_path / "graph.html"

    result = runner.invoke(
        cli,
        [
            "--input", str(input_file),
            "--output", str(output),
            "--graph-name", "prod",
            "--cyto-html-template", str(template),
        ],
    )

    assert result.exit_code == 0, result.output
    assert output.read_text(encoding="utf-8").startswith("<h1>prod</h1><script>[")


@pytest.mark.parametrize("output_type", ["cyto-json", "cyto-html", "graphviz"])
def test_invalid_pattern_produces_no_output(runner, input_file, tmp_path, output_type):
    """Test that a bad exclusion pattern fails before writing anything."""
    output = tmp_path / "out"

    result = runner.invoke(
        cli,
        [
            "--input", str(input_file),
            "--output", str(output),
            "--output-type", output_type,
            "--exclude", "(",
        ],
    )

    assert result.exit_code == 1
    assert "Invalid pattern" in result.output
    assert not output.exists()


def test_parse_error(runner, tmp_path):
    """Test that malformed DOT is reported with its position."""
    output = tmp_path / "out"

    result = runner.invoke(cli, ["--output", str(output)], input="digraph {\n  a -> \n}")

    assert result.exit_code == 1
    assert "line 3" in result.output
    assert not output.exists()


def test_missing_input_file(runner, tmp_path):
    """Test that an unreadable input is an I/O error."""
    result = runner.invoke(cli, ["--input", str(tmp_path / "missing.dot")])

    assert result.exit_code == 1
    assert "Cannot read" in result.output


def test_bad_template(runner, input_file, tmp_path):
    """Test that a template without the elements placeholder fails."""
    template = tmp_path / "template.html"
    template.write_text("<h1>$graph_name</h1>", encoding="utf-8")
    output = tmp_path / "graph.html"

    result = runner.invoke(
        cli,
        ["--input", str(input_file), "--output", str(output), "--cyto-html-template", str(template)],
    )

    assert result.exit_code == 1
    assert "placeholder" in result.output
    assert not output.exists()


def test_unknown_output_type(runner, input_file):
    """Test that unknown output types are rejected."""
    result = runner.invoke(cli, ["--input", str(input_file), "--output-type", "svg"])

    assert result.exit_code == 2
