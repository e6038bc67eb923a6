"""
Configuration for module resolution.
"""
from typing import Optional
from pydantic import BaseModel, Field

from modtree.core.entries import DEFAULT_MAIN, PACKAGE_FILE_NAME, SOURCE_EXTENSION


class ResolverConfig(BaseModel):
    """Naming conventions and limits used while resolving a module."""

    modules_dir: str = "node_modules"
    extension: str = SOURCE_EXTENSION
    package_file: str = PACKAGE_FILE_NAME
    index_name: str = "index"
    default_main: str = DEFAULT_MAIN
    max_depth: Optional[int] = Field(default=None, ge=0)

    def file_name(self, logical_name: str) -> str:
        """Append the source extension to a logical file name."""
        return f"{logical_name}{self.extension}"

    def strip_extension(self, file_name: str) -> str:
        """Strip a trailing source extension from a file name, if present."""
        if self.extension and file_name.endswith(self.extension):
            return file_name[:-len(self.extension)]
        return file_name
