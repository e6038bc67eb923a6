#!/usr/bin/env python3
"""
Example script showing which file a module request resolves to as
entries are removed from a node_modules tree.
"""
import sys
import logging
from pathlib import Path
from rich.console import Console
from rich.table import Table

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from modtree.core import Directory, File, PackageDescriptor


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
console = Console()


def main():
    """Main function for the example."""
    root = Directory("root")
    src = Directory("src")
    node_modules = Directory("node_modules")
    target_dir = Directory("target")
    requester = File("requester.js")

    root.add(
        src.add(requester),
        node_modules.add(
            File("target.js"),
            target_dir.add(File("main.js"), PackageDescriptor("main.js"), File("index.js")),
        ),
    )

    # (directory, entry name) removed before each request
    removals = [
        (None, None),
        (node_modules, "target.js"),
        (target_dir, "main.js"),
        (target_dir, "package.json"),
        (target_dir, "index.js"),
        (node_modules, "target"),
        (root, "node_modules"),
    ]

    table = Table(title="require('target') from root/src/requester.js")
    table.add_column("Removed", style="cyan")
    table.add_column("Resolved", style="green")
    table.add_column("Strategy", style="magenta")

    for directory, name in removals:
        removed = "-"
        if directory is not None:
            directory.remove(name)
            removed = f"{directory.path}/{name}"

        resolution = requester.resolve("target")
        if resolution is None:
            table.add_row(removed, "[red]not found[/red]", "")
        else:
            table.add_row(removed, resolution.path, resolution.strategy.value)

    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
