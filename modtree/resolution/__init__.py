"""
Module resolution over modtree directory trees.
"""

from .config import ResolverConfig
from .handler import RequestHandler, Resolution, ResolutionStrategy

__all__ = [
    "ResolverConfig",
    "RequestHandler",
    "Resolution",
    "ResolutionStrategy",
]
