# pagesmith/resources.py
"""
Resource registry.

The registry maps a path (relative to the project root) to a caller-defined
resource. It is filled once by scanning directories before any processing
starts and is only read afterwards, so processors can share it freely.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol, TypeVar, Union

from .exceptions import DuplicateIdentifierError

logger = logging.getLogger(__name__)


class Resource(Protocol):
    """Contract for anything stored in a ResourceRegistry.

    Implementations must be hashable and immutable once registered.
    """

    def identifier(self) -> str:
        """Name used to reference this resource. Must be deterministic."""
        ...

    def output_path(self) -> Path:
        """Where the generated file goes, relative to the output root."""
        ...


R = TypeVar("R", bound=Resource)

Classifier = Callable[[Path], Optional[R]]


class ResourceRegistry:
    """Holds every registered resource keyed by its relative source path."""

    def __init__(self, project_root: Union[str, Path]):
        self.project_root = Path(project_root)
        self._resources: Dict[Path, Resource] = {}
        self._by_identifier: Dict[str, Path] = {}

    def __len__(self) -> int:
        return len(self._resources)

    def __contains__(self, path) -> bool:
        return Path(path) in self._resources

    def absolute_path(self, path_fragment: Union[str, Path]) -> Path:
        return self.project_root / path_fragment

    def register_directory(
        self,
        dir_path: Union[str, Path],
        classify: Classifier,
        recurse: bool = True,
    ) -> None:
        """
        Register every file under ``dir_path`` that ``classify`` accepts.

        Args:
            dir_path: Directory relative to the project root ("." for the root)
            classify: Called with each file's path relative to the project
                root; returns a resource, or None to skip the file
            recurse: Descend into subdirectories

        Raises:
            OSError: A directory or entry could not be read. Registration
                stops at the first failure.
            DuplicateIdentifierError: Two paths produced the same identifier
        """
        logger.debug("Adding files in %s", dir_path)
        self._register_directory(Path(dir_path), classify, recurse)

    def _register_directory(self, dir_path: Path, classify: Classifier, recurse: bool) -> None:
        entries = sorted(self.absolute_path(dir_path).iterdir(), key=lambda p: p.name)
        for entry in entries:
            if dir_path == Path("."):
                entry_path = Path(entry.name)
            else:
                entry_path = dir_path / entry.name

            if entry.is_dir():
                if recurse:
                    self._register_directory(entry_path, classify, recurse)
                continue

            resource = classify(entry_path)
            if resource is None:
                logger.debug("%s: Not adding", entry_path)
                continue

            self.register(entry_path, resource)

    def register(self, path: Union[str, Path], resource: Resource) -> None:
        """Register a single resource under ``path``."""
        path = Path(path)
        identifier = resource.identifier()
        owner = self._by_identifier.get(identifier)
        if owner is not None and owner != path:
            raise DuplicateIdentifierError(identifier, owner, path)

        previous = self._resources.get(path)
        if previous is not None:
            self._by_identifier.pop(previous.identifier(), None)

        logger.info("%s: Adding %r", path, identifier)
        self._resources[path] = resource
        self._by_identifier[identifier] = path

    def get(self, path: Union[str, Path]) -> Optional[Resource]:
        return self._resources.get(Path(path))

    def lookup_by_identifier(self, identifier: str) -> Optional[Resource]:
        """Return the resource whose identifier() equals ``identifier``, if any."""
        path = self._by_identifier.get(identifier)
        if path is None:
            return None
        return self._resources[path]

    def all_resources(self) -> Dict[Path, Resource]:
        """Snapshot of the path -> resource mapping, in registration order."""
        return dict(self._resources)
