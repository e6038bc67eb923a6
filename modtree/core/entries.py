"""
Directory tree entries: files, directories and package descriptors.

Directories own their children through a name -> entry mapping. Every entry
keeps a back-reference to the directory that holds it, which is only used to
walk upwards (paths, module resolution) and is cleared on removal.
"""
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Dict, Iterator, List, Mapping, Optional, Type, TYPE_CHECKING
import logging

from pydantic import BaseModel, Field, PrivateAttr

from .exceptions import ResolutionNotFoundError, StructuralError

if TYPE_CHECKING:
    from modtree.resolution import RequestHandler, Resolution, ResolverConfig


SOURCE_EXTENSION = ".js"
PACKAGE_FILE_NAME = "package.json"
DEFAULT_MAIN = "index.js"
PATH_SEPARATOR = "/"

logger = logging.getLogger(__name__)


class EntryKind(str, Enum):
    """Closed set of entry variants."""

    FILE = "file"
    DIRECTORY = "directory"
    PACKAGE_DESCRIPTOR = "package_descriptor"


class Entry(BaseModel):
    """Base class for all directory tree entries."""

    kind: ClassVar[EntryKind]

    name: str
    _parent: Optional["Directory"] = PrivateAttr(default=None)

    @property
    def parent(self) -> Optional["Directory"]:
        """The directory currently holding this entry, if any."""
        return self._parent

    @property
    def path(self) -> str:
        """Slash-separated path from the tree root to this entry."""
        names = []
        seen = set()
        entry: Optional[Entry] = self
        while entry is not None and id(entry) not in seen:
            seen.add(id(entry))
            names.append(entry.name)
            entry = entry._parent
        return PATH_SEPARATOR.join(reversed(names))

    def root(self) -> "Entry":
        """Return the top-most ancestor (or the entry itself when detached)."""
        entry = self
        while entry._parent is not None:
            entry = entry._parent
        return entry

    def as_directory(self) -> Optional["Directory"]:
        return None

    def as_file(self) -> Optional["File"]:
        return None

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name}, path={self.path})"

    # Entries are nodes in a mutable tree: two same-named files are still different files.
    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)


class Directory(Entry):
    """An entry that may contain other entries."""

    kind: ClassVar[EntryKind] = EntryKind.DIRECTORY

    _entries: Dict[str, Entry] = PrivateAttr(default_factory=dict)

    def __init__(self, name: str, **data):
        super().__init__(name=name, **data)

    @property
    def entries(self) -> Mapping[str, Entry]:
        """Read-only view of the children keyed by name."""
        return MappingProxyType(self._entries)

    def as_directory(self) -> "Directory":
        return self

    def add(self, *entries: Entry) -> "Directory":
        """
        Attach one or more entries to this directory.

        An entry that already belongs to another directory is detached from it
        first. A child with the same name is replaced and loses its parent.

        Args:
            *entries: Entries to attach

        Returns:
            This directory, for chaining
        """
        # Validate the whole batch before attaching anything
        for entry in entries:
            if not isinstance(entry, Entry):
                raise TypeError(f"Cannot add {entry!r} to {self.name}: not a directory entry")
            if self._is_within(entry):
                raise StructuralError(f"Cannot add {entry.name} to {self.name}: would create a cycle")

        for entry in entries:
            previous_parent = entry._parent
            if previous_parent is not None and previous_parent is not self:
                previous_parent._detach(entry)

            existing = self._entries.get(entry.name)
            if existing is not None and existing is not entry:
                logger.debug(f"Replacing {existing.name} in {self.path}")
                existing._parent = None

            entry._parent = self
            self._entries[entry.name] = entry
        return self

    def remove(self, name: str) -> bool:
        """
        Remove the child with the given name.

        Args:
            name: Name of the child to remove

        Returns:
            True if a child was removed, False if none had that name
        """
        entry = self._entries.pop(name, None)
        if entry is None:
            return False
        entry._parent = None
        return True

    def get(self, name: str) -> Optional[Entry]:
        return self._entries.get(name)

    def children(self) -> List[Entry]:
        return list(self._entries.values())

    def has_directory(self, name: str) -> bool:
        entry = self._entries.get(name)
        return entry is not None and entry.as_directory() is not None

    def has_file(self, name: str, extension: str = SOURCE_EXTENSION) -> bool:
        """Check for a file by its logical name (the source extension is appended)."""
        entry = self._entries.get(f"{name}{extension}")
        return entry is not None and entry.as_file() is not None

    def has_package_descriptor(self, file_name: str = PACKAGE_FILE_NAME) -> bool:
        entry = self._entries.get(file_name)
        return entry is not None and entry.kind == EntryKind.PACKAGE_DESCRIPTOR

    def walk(self) -> Iterator[Entry]:
        """
        Walk the subtree in depth-first order.

        Yields:
            This directory, then each descendant
        """
        yield self
        for entry in list(self._entries.values()):
            directory = entry.as_directory()
            if directory is not None:
                yield from directory.walk()
            else:
                yield entry

    def find(self, path: str) -> Optional[Entry]:
        """
        Look up an entry by a path relative to this directory.

        Args:
            path: Slash-separated path; "." and ".." are honoured

        Returns:
            The entry if found, None otherwise
        """
        current: Entry = self
        for part in path.split(PATH_SEPARATOR):
            if part in ("", "."):
                continue
            if part == "..":
                if current._parent is None:
                    return None
                current = current._parent
                continue
            directory = current.as_directory()
            if directory is None:
                return None
            current = directory._entries.get(part)
            if current is None:
                return None
        return current

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def _detach(self, entry: Entry) -> None:
        if self._entries.get(entry.name) is entry:
            del self._entries[entry.name]
        entry._parent = None

    def _is_within(self, entry: Entry) -> bool:
        # True when entry is this directory or one of its ancestors
        current: Optional[Entry] = self
        while current is not None:
            if current is entry:
                return True
            current = current._parent
        return False


class File(Entry):
    """The simplest entry: a leaf with no children."""

    kind: ClassVar[EntryKind] = EntryKind.FILE

    def __init__(self, name: str, **data):
        super().__init__(name=name, **data)

    def as_file(self) -> "File":
        return self

    def add(self, *entries: Entry) -> "File":
        names = ", ".join(entry.name for entry in entries)
        raise StructuralError(f"Cannot add {names} to {self.name}: {self.name} has no children")

    def remove(self, name: str) -> bool:
        raise StructuralError(f"Cannot remove {name}: {self.name} has no children")

    def request(self, target: str, config: Optional["ResolverConfig"] = None,
                handler_class: Optional[Type["RequestHandler"]] = None) -> "File":
        """
        Resolve a module from this file's location.

        Args:
            target: Module name to resolve
            config: Optional ResolverConfig
            handler_class: Handler to use instead of RequestHandler

        Returns:
            The resolved file

        Raises:
            ResolutionNotFoundError: If the file is detached or nothing matches
        """
        if self._parent is None:
            logger.info(f"{self.name} has no parent directory; cannot resolve '{target}'")
            raise ResolutionNotFoundError(target)
        handler = self._make_handler(config, handler_class)
        return handler.handle_request(target).file

    def resolve(self, target: str, config: Optional["ResolverConfig"] = None,
                handler_class: Optional[Type["RequestHandler"]] = None) -> Optional["Resolution"]:
        """
        Resolve a module from this file's location without raising.

        Returns:
            A Resolution, or None if the module cannot be found
        """
        if self._parent is None:
            return None
        return self._make_handler(config, handler_class).resolve(target)

    def _make_handler(self, config: Optional["ResolverConfig"],
                      handler_class: Optional[Type["RequestHandler"]]) -> "RequestHandler":
        # Imported here to avoid a circular import with the resolution package
        from modtree.resolution import RequestHandler

        handler_class = handler_class or RequestHandler
        return handler_class(self._parent, config=config)


class PackageDescriptor(File):
    """A package.json file naming the main file of the directory holding it."""

    kind: ClassVar[EntryKind] = EntryKind.PACKAGE_DESCRIPTOR

    main: str = Field(default=DEFAULT_MAIN)

    def __init__(self, main: str = DEFAULT_MAIN, name: str = PACKAGE_FILE_NAME, **data):
        super().__init__(name, main=main, **data)
