#!/usr/bin/env python3
"""Basic usage examples for the Terraform graph beautifier."""

import subprocess

from tfbeautifier import GraphBeautifier, LoadOptions, OutputType, RenderingOptions


def main():
    """Demonstrate basic GraphBeautifier usage."""

    beautifier = GraphBeautifier()

    # Example 1: Render the current Terraform configuration as an HTML page
    print("Generating HTML page from 'terraform graph'...")
    dot = subprocess.run(["terraform", "graph"], check=True, capture_output=True).stdout
    html = beautifier.convert(dot, OutputType.CYTOSCAPE_HTML)
    with open("graph.html", "wb") as f:
        f.write(html)

    # Example 2: Cleaned-up Graphviz file without variables and outputs
    print("Generating filtered Graphviz file...")
    clean_dot = beautifier.convert(
        dot,
        OutputType.GRAPHVIZ,
        load_options=LoadOptions(exclude_patterns=[r"\bvar\.", r"\boutput\."]),
        rendering_options=RenderingOptions(graph_name="infrastructure"),
    )
    with open("clean.dot", "wb") as f:
        f.write(clean_dot)

    # Example 3: Inspect the module hierarchy before rendering
    print("Module hierarchy:")
    model = beautifier.load(dot)
    for module in model.hierarchy.walk():
        if module.is_root:
            continue
        indent = "  " * (len(module.path) - 1)
        print(f"{indent}- {module.name} ({len(module.members)} resources)")

    # Example 4: Same model, modules drawn as siblings linked parent to child
    json_elements = beautifier.render(
        model,
        OutputType.CYTOSCAPE_JSON,
        RenderingOptions(graph_name="infrastructure", embed_modules=False),
    )
    print(f"Generated {len(json_elements)} bytes of Cytoscape.js elements")

    print("All examples completed!")


if __name__ == "__main__":
    main()
