"""
Builders that create directory trees from mappings, JSON, or the local filesystem.
"""

from .mapping import build_tree, load_tree_json
from .filesystem import load_directory

__all__ = [
    "build_tree",
    "load_tree_json",
    "load_directory",
]
