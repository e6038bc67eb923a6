"""
Build directory trees from nested mappings or JSON documents.

A tree description maps entry names to values:

* a mapping is a directory holding the nested entries
* ``None`` or a string is a file
* the package file (``package.json``) becomes a PackageDescriptor whose value
  may be a mapping with a ``main`` key, the main file name, or ``None``
"""
from typing import Any, Mapping, Optional
import json
import logging
import os

from modtree.core.entries import Directory, Entry, File, PackageDescriptor
from modtree.resolution.config import ResolverConfig


logger = logging.getLogger(__name__)


def build_tree(mapping: Mapping[str, Any], name: str = "root",
               config: Optional[ResolverConfig] = None) -> Directory:
    """
    Build a directory tree from a nested mapping.

    Args:
        mapping: Tree description
        name: Name of the root directory
        config: Naming conventions; defaults to ResolverConfig()

    Returns:
        The root directory
    """
    if not isinstance(mapping, Mapping):
        raise ValueError(f"Tree description for {name} must be a mapping, got {type(mapping).__name__}")

    config = config or ResolverConfig()
    root = Directory(name)
    for entry_name, value in mapping.items():
        root.add(_build_entry(entry_name, value, config))
    return root


def _build_entry(name: str, value: Any, config: ResolverConfig) -> Entry:
    if name == config.package_file:
        return _build_package_descriptor(value, config)
    if isinstance(value, Mapping):
        return build_tree(value, name=name, config=config)
    if value is None or isinstance(value, str):
        return File(name)
    raise ValueError(f"Unsupported value for entry {name}: {value!r}")


def _build_package_descriptor(value: Any, config: ResolverConfig) -> PackageDescriptor:
    main = config.default_main
    if isinstance(value, Mapping):
        main = value.get("main") or config.default_main
    elif isinstance(value, str) and value:
        main = value
    elif value is not None:
        raise ValueError(f"Unsupported value for {config.package_file}: {value!r}")
    return PackageDescriptor(main, name=config.package_file)


def load_tree_json(source: str, name: str = "root",
                   config: Optional[ResolverConfig] = None) -> Directory:
    """
    Build a directory tree from a JSON document.

    Args:
        source: Path to a JSON file, or JSON text
        name: Name of the root directory
        config: Naming conventions; defaults to ResolverConfig()

    Returns:
        The root directory
    """
    if os.path.isfile(source):
        logger.debug(f"Reading tree description from {source}")
        with open(source, "r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        data = json.loads(source)
    return build_tree(data, name=name, config=config)
