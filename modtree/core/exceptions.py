"""
Exceptions raised by the directory tree and the module resolver.
"""
from typing import Optional


class ModuleTreeError(Exception):
    """Base class for all modtree errors."""


class StructuralError(ModuleTreeError):
    """Raised when a structural change is not allowed (e.g. adding children to a file)."""


class ResolutionNotFoundError(ModuleTreeError, LookupError):
    """Raised when a requested module cannot be resolved from any ancestor directory."""

    def __init__(self, target: str, message: Optional[str] = None):
        self.target = target
        super().__init__(message or f"Cannot find module '{target}'.")


class ResolutionCycleError(ResolutionNotFoundError):
    """Raised when a resolution walk revisits a directory or exceeds its depth limit."""
