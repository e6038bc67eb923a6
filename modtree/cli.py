"""
Command-line interface for modtree.
"""
import sys
import logging
import json
from collections import Counter
import click
from rich.console import Console
from rich.table import Table
from rich.tree import Tree
from rich.logging import RichHandler

from modtree.core import Directory, EntryKind, ModuleTreeError, ResolutionNotFoundError
from modtree.loaders import load_directory
from modtree.resolution import RequestHandler, ResolverConfig


# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)]
)
logger = logging.getLogger("modtree")
console = Console()


def _make_config(modules_dir, extension, max_depth=None):
    return ResolverConfig(modules_dir=modules_dir, extension=extension, max_depth=max_depth)


def _render_tree(directory: Directory, branch: Tree) -> None:
    for entry in sorted(directory.children(), key=lambda e: (e.as_directory() is None, e.name)):
        child_dir = entry.as_directory()
        if child_dir is not None:
            _render_tree(child_dir, branch.add(f"[bold cyan]{entry.name}/[/bold cyan]"))
        elif entry.kind == EntryKind.PACKAGE_DESCRIPTOR:
            branch.add(f"[magenta]{entry.name}[/magenta] (main: {entry.main})")
        else:
            branch.add(entry.name)


@click.group()
@click.version_option("0.1.0")
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging for each resolution step')
def cli(verbose):
    """modtree - Resolve modules through a directory tree, node_modules style."""
    if verbose:
        logger.setLevel(logging.DEBUG)


@cli.command()
@click.argument('source_path', type=click.Path(exists=True, file_okay=False))
@click.option('--max-depth', default=None, type=int, help='Maximum directory depth to load')
@click.option('--modules-dir', default='node_modules', help='Name of the modules directory')
@click.option('--extension', default='.js', help='Source file extension')
def tree(source_path, max_depth, modules_dir, extension):
    """Show a directory as a module tree."""
    config = _make_config(modules_dir, extension)

    with console.status(f"Loading {source_path}...", spinner="dots"):
        root = load_directory(source_path, config=config, max_depth=max_depth)

    rendered = Tree(f"[bold cyan]{root.name}/[/bold cyan]")
    _render_tree(root, rendered)
    console.print(rendered)

    counts = Counter(entry.kind.value for entry in root.walk())
    entry_table = Table(title="Entry Statistics")
    entry_table.add_column("Entry Kind", style="cyan")
    entry_table.add_column("Count", style="green")

    for kind, count in sorted(counts.items()):
        entry_table.add_row(kind, str(count))

    console.print(entry_table)


@cli.command()
@click.argument('source_path', type=click.Path(exists=True, file_okay=False))
@click.argument('requester', type=str)
@click.argument('target', type=str)
@click.option('--modules-dir', default='node_modules', help='Name of the modules directory')
@click.option('--extension', default='.js', help='Source file extension')
@click.option('--max-depth', default=None, type=int, help='Maximum number of directories to search')
@click.option('--json', 'as_json', is_flag=True, help='Print the resolution as JSON')
def resolve(source_path, requester, target, modules_dir, extension, max_depth, as_json):
    """Resolve TARGET as requested by REQUESTER (a path relative to SOURCE_PATH)."""
    config = _make_config(modules_dir, extension, max_depth)
    root = load_directory(source_path, config=config)

    entry = root.find(requester)
    requesting_file = entry.as_file() if entry is not None else None
    if requesting_file is None:
        console.print(f"[red]Error: Requester '{requester}' is not a file under {source_path}[/red]")
        sys.exit(1)

    try:
        handler = RequestHandler(requesting_file.parent, config=config)
        resolution = handler.handle_request(target)
    except ResolutionNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    except ModuleTreeError as e:
        console.print(f"[red]Error resolving module: {e}[/red]")
        sys.exit(1)

    if as_json:
        result = resolution.model_dump(mode="json", exclude={"file"})
        result["path"] = resolution.path
        click.echo(json.dumps(result, indent=2))
        return

    console.print(f"[green]{target}[/green] -> [bold]{resolution.path}[/bold] ({resolution.strategy.value})")

    search_table = Table(title="Searched Directories")
    search_table.add_column("#", style="cyan")
    search_table.add_column("Directory", style="green")

    for i, path in enumerate(resolution.searched, start=1):
        search_table.add_row(str(i), path)

    console.print(search_table)


if __name__ == '__main__':
    cli()
