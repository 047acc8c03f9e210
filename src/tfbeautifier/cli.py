"""Command-line interface for the Terraform graph beautifier."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .core import BeautifierError, GraphBeautifier, GraphIOError, LoadOptions, OutputType, RenderingOptions
from .core.models import default_graph_name

# Standard output may carry the rendered graph, diagnostics go to stderr
console = Console(stderr=True)

logger = logging.getLogger("tfbeautifier")


def setup_logging(debug: bool = False) -> None:
    """Setup logging with rich handler."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    logger.setLevel(level)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--input",
    "input_path",
    type=click.Path(dir_okay=False, allow_dash=True),
    default="-",
    help="Path of the input Graphviz file to read (default: stdin)",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, allow_dash=True),
    default="-",
    help="Path of the output file to write (default: stdout)",
)
@click.option(
    "--output-type",
    type=click.Choice([item.value for item in OutputType]),
    default=OutputType.CYTOSCAPE_HTML.value,
    help="Type of output (default: cyto-html)",
)
@click.option(
    "--exclude",
    multiple=True,
    help="Pattern (regexp) of the resources to filter out. Can be specified multiple times.",
)
@click.option(
    "--keep-tf-junk",
    is_flag=True,
    help="Do not remove the \"junk\" nodes and edges generated by 'terraform graph'",
)
@click.option(
    "--graph-name",
    default=None,
    help="Name of the output graph (default: working directory name)",
)
@click.option(
    "--embed-modules/--no-embed-modules",
    default=True,
    help="Embed a module sub-graph inside its parent; otherwise modules are siblings "
    "and an edge is drawn from the parent to the child (default: embedded)",
)
@click.option(
    "--cyto-html-template",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path of the HTML template used for the cyto-html output (default: built-in template)",
)
@click.option("--debug", is_flag=True, help="Print debugging information to stderr")
@click.version_option(__version__, "-v", "--version", prog_name="terraform-graph-beautifier")
def cli(
    input_path: str,
    output_path: str,
    output_type: str,
    exclude: tuple,
    keep_tf_junk: bool,
    graph_name: str | None,
    embed_modules: bool,
    cyto_html_template: str | None,
    debug: bool,
) -> None:
    """Terraform Graph Beautifier - make `terraform graph` output readable.

    Reads the Graphviz graph printed by `terraform graph`, removes the
    Terraform bookkeeping nodes, rebuilds the module hierarchy and writes it
    as a Cytoscape.js page, Cytoscape.js JSON elements or a cleaned-up DOT file.

    \b
    Examples:
      terraform graph | terraform-graph-beautifier > graph.html
      terraform-graph-beautifier --input graph.dot --output-type graphviz --output clean.dot
      terraform-graph-beautifier --input graph.dot --exclude '^\\[root\\] var\\.' --no-embed-modules
    """
    setup_logging(debug)

    try:
        load_options = LoadOptions(keep_tf_junk=keep_tf_junk, exclude_patterns=list(exclude))
        rendering_options = RenderingOptions(
            graph_name=graph_name or default_graph_name(),
            embed_modules=embed_modules,
            html_template=cyto_html_template,
        )
        beautifier = GraphBeautifier(logger)

        logger.debug("Reading graph from %s", "stdin" if input_path == "-" else input_path)
        try:
            with click.open_file(input_path, "rb") as input_file:
                model = beautifier.load(input_file, load_options, embed_modules)
        except OSError as e:
            raise GraphIOError("read", input_path, e) from e

        data = beautifier.render(model, output_type, rendering_options)

        logger.debug("Writing %d bytes to %s", len(data), "stdout" if output_path == "-" else output_path)
        try:
            with click.open_file(output_path, "wb") as output_file:
                output_file.write(data)
        except OSError as e:
            raise GraphIOError("write", output_path, e) from e

    except BeautifierError as e:
        console.print(f"Error: {e}", style="red", markup=False, highlight=False)
        if debug:
            console.print_exception()
        sys.exit(1)


def main() -> None:
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
