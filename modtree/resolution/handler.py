"""
Module resolution over a directory tree.

A RequestHandler starts at the directory holding the requesting file and
passes the request up the chain of ancestor directories. Each level checks
its node_modules directory for, in order:

1. a file named after the target (``node_modules/<target>.js``)
2. a module directory named after the target, resolved through
   ``package.json`` ``main`` and then ``index.js``

The first level that produces a file wins. Reaching the tree root without a
match raises ResolutionNotFoundError.
"""
from enum import Enum
from typing import List, Optional, Set, Tuple
import logging

from pydantic import BaseModel, Field

from modtree.core.entries import Directory, File
from modtree.core.exceptions import ResolutionCycleError, ResolutionNotFoundError

from .config import ResolverConfig


class ResolutionStrategy(str, Enum):
    """How a module request was satisfied."""

    FILE = "file"
    PACKAGE_MAIN = "package_main"
    INDEX = "index"


class Resolution(BaseModel):
    """The outcome of a successful module request."""

    target: str
    file: File
    strategy: ResolutionStrategy
    directory: str  # path of the node_modules directory that matched
    searched: List[str] = Field(default_factory=list)

    @property
    def path(self) -> str:
        return self.file.path

    def __str__(self) -> str:
        return f"Resolution(target={self.target}, path={self.path}, strategy={self.strategy.value})"


class RequestHandler:
    """
    Resolves module requests by walking up from a starting directory.

    Each request starts at the constructor's directory. While a request is
    walking, `current` points at the directory being checked and only ever
    moves to its parent; afterwards it is left at the level where the walk
    stopped.
    """

    def __init__(self, directory: Directory, config: Optional[ResolverConfig] = None):
        """
        Initialize the handler.

        Args:
            directory: Directory to start resolving from
            config: Resolution conventions; defaults to ResolverConfig()
        """
        self.directory = directory
        self.current = directory
        self.config = config or ResolverConfig()
        self.logger = logging.getLogger(__name__)

    def handle_request(self, target: str) -> Resolution:
        """
        Resolve a target module, raising if it cannot be found.

        Args:
            target: Module name to resolve

        Returns:
            The resolution describing the matched file

        Raises:
            ResolutionNotFoundError: If no ancestor directory provides the target
            ResolutionCycleError: If the walk revisits a directory or exceeds max_depth
        """
        resolution = self.resolve(target)
        if resolution is None:
            raise ResolutionNotFoundError(target)
        return resolution

    def resolve(self, target: str) -> Optional[Resolution]:
        """
        Resolve a target module.

        Args:
            target: Module name to resolve

        Returns:
            The resolution, or None once the tree root is passed without a match
        """
        searched: List[Directory] = []
        visited: Set[int] = set()
        self.current = self.directory

        while True:
            if id(self.current) in visited:
                raise ResolutionCycleError(
                    target, f"Cannot find module '{target}': revisited {self.current.name} while resolving"
                )
            if self.config.max_depth is not None and len(searched) > self.config.max_depth:
                raise ResolutionCycleError(
                    target, f"Cannot find module '{target}': exceeded max depth {self.config.max_depth}"
                )
            visited.add(id(self.current))
            searched.append(self.current)

            match = self.handle_level(target)
            if match is not None:
                file, strategy, modules_dir = match
                self.logger.debug(f"Resolved '{target}' to {file.path} ({strategy.value})")
                return Resolution(
                    target=target,
                    file=file,
                    strategy=strategy,
                    directory=modules_dir.path,
                    searched=[directory.path for directory in searched],
                )

            if not self.try_next():
                self.logger.info(f"Cannot find module '{target}' after searching {len(searched)} directories")
                return None

    def handle_level(self, target: str) -> Optional[Tuple[File, ResolutionStrategy, Directory]]:
        """
        Check the current directory's node_modules for the target.

        Args:
            target: Module name to resolve

        Returns:
            (file, strategy, node_modules directory) if this level handles the request
        """
        entry = self.current.get(self.config.modules_dir)
        modules_dir = entry.as_directory() if entry is not None else None
        if modules_dir is None:
            self.logger.debug(f"No {self.config.modules_dir} in {self.current.path}")
            return None

        # A same-named file takes precedence over a module directory
        if modules_dir.has_file(target, self.config.extension):
            file = modules_dir.get(self.config.file_name(target)).as_file()
            return file, ResolutionStrategy.FILE, modules_dir

        if modules_dir.has_directory(target):
            resolved = self.resolve_as_module(modules_dir.get(target).as_directory())
            if resolved is not None:
                file, strategy = resolved
                return file, strategy, modules_dir

        self.logger.debug(f"'{target}' not provided by {modules_dir.path}")
        return None

    def resolve_as_module(self, module: Directory) -> Optional[Tuple[File, ResolutionStrategy]]:
        """
        Resolve a module directory to a single file.

        The package descriptor's main file is preferred, then the index file.

        Args:
            module: Module directory inside node_modules

        Returns:
            (file, strategy), or None if the directory has neither
        """
        if module.has_package_descriptor(self.config.package_file):
            package = module.get(self.config.package_file)
            main_path = self.config.file_name(self.config.strip_extension(package.main))
            main = module.find(main_path)
            if main is not None and main.as_file() is not None and self._is_inside(main, module):
                return main.as_file(), ResolutionStrategy.PACKAGE_MAIN
            self.logger.debug(f"{package.path} names no main file inside {module.path}: '{package.main}'")

        if module.has_file(self.config.index_name, self.config.extension):
            index = module.get(self.config.file_name(self.config.index_name))
            return index.as_file(), ResolutionStrategy.INDEX

        return None

    def try_next(self) -> bool:
        """
        Move to the parent directory.

        Returns:
            False if the current directory is the tree root
        """
        parent = self.current.parent
        if parent is None:
            return False
        self.current = parent
        return True

    @staticmethod
    def _is_inside(entry: File, module: Directory) -> bool:
        # main may use "..", but must not leave the module directory
        parent = entry.parent
        while parent is not None:
            if parent is module:
                return True
            parent = parent.parent
        return False
