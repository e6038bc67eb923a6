"""
Snapshot a local directory into an in-memory directory tree.
"""
from typing import Dict, Optional
import json
import logging
import os

from modtree.core.entries import Directory, File, PackageDescriptor
from modtree.resolution.config import ResolverConfig


logger = logging.getLogger(__name__)


def load_directory(directory_path: str, config: Optional[ResolverConfig] = None,
                   max_depth: Optional[int] = None) -> Directory:
    """
    Build a directory tree mirroring a directory on disk.

    Only names and package descriptors are captured; file contents are not read.

    Args:
        directory_path: Path to the directory to snapshot
        config: Naming conventions; defaults to ResolverConfig()
        max_depth: Optional maximum depth below the root to descend

    Returns:
        The root directory, named after the directory's basename
    """
    config = config or ResolverConfig()
    directory_path = os.path.abspath(directory_path)
    if not os.path.isdir(directory_path):
        raise FileNotFoundError(f"Directory not found: {directory_path}")

    root = Directory(os.path.basename(directory_path) or directory_path)
    nodes: Dict[str, Directory] = {directory_path: root}
    file_count = 0

    def on_error(error: OSError) -> None:
        logger.warning(f"Skipping {error.filename}: {error.strerror}")

    for current_path, dir_names, file_names in os.walk(directory_path, onerror=on_error):
        current = nodes[current_path]
        relative = os.path.relpath(current_path, directory_path)
        depth = 0 if relative == os.curdir else relative.count(os.sep) + 1

        dir_names.sort()
        for dir_name in dir_names:
            child = Directory(dir_name)
            current.add(child)
            nodes[os.path.join(current_path, dir_name)] = child

        if max_depth is not None and depth >= max_depth:
            # Keep the directory names but do not descend
            dir_names[:] = []

        for file_name in sorted(file_names):
            file_path = os.path.join(current_path, file_name)
            if file_name == config.package_file:
                current.add(read_package_descriptor(file_path, config))
            else:
                current.add(File(file_name))
            file_count += 1

    logger.info(f"Loaded {len(nodes)} directories and {file_count} files from {directory_path}")
    return root


def read_package_descriptor(file_path: str, config: Optional[ResolverConfig] = None) -> PackageDescriptor:
    """
    Read the main field from a package descriptor on disk.

    Args:
        file_path: Path to the package.json file
        config: Naming conventions; defaults to ResolverConfig()

    Returns:
        A PackageDescriptor; the default main is used when the file is
        malformed or does not name one
    """
    config = config or ResolverConfig()
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read {file_path}: {e}. Using default main '{config.default_main}'")
        return PackageDescriptor(config.default_main, name=config.package_file)

    main = data.get("main") if isinstance(data, dict) else None
    if not isinstance(main, str) or not main:
        logger.debug(f"{file_path} has no main field; using '{config.default_main}'")
        main = config.default_main
    return PackageDescriptor(main, name=config.package_file)
