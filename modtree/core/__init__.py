"""
Core module for modtree directory entries and errors.
"""

from .entries import (
    EntryKind,
    Entry,
    Directory,
    File,
    PackageDescriptor,
    SOURCE_EXTENSION,
    PACKAGE_FILE_NAME,
    DEFAULT_MAIN,
)
from .exceptions import (
    ModuleTreeError,
    StructuralError,
    ResolutionNotFoundError,
    ResolutionCycleError,
)

__all__ = [
    "EntryKind",
    "Entry",
    "Directory",
    "File",
    "PackageDescriptor",
    "SOURCE_EXTENSION",
    "PACKAGE_FILE_NAME",
    "DEFAULT_MAIN",
    "ModuleTreeError",
    "StructuralError",
    "ResolutionNotFoundError",
    "ResolutionCycleError",
]
