#!/usr/bin/env python3
"""
Wrapper script to run the Terraform graph beautifier from the project directory.

This script allows you to run it without installing the package:
    terraform graph | python beautify.py > graph.html
    python beautify.py --input graph.dot --output-type graphviz
    python beautify.py --help
"""

import sys
from pathlib import Path

# Add src directory to Python path so we can import tfbeautifier
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

# Import and run the CLI
try:
    from tfbeautifier.cli import main

    if __name__ == "__main__":
        main()

except ImportError as e:
    print(f"Error importing tfbeautifier: {e}", file=sys.stderr)
    print("\nInstall the dependencies first:", file=sys.stderr)
    print("   pip install -e .", file=sys.stderr)
    sys.exit(1)
