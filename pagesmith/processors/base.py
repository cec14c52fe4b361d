# pagesmith/processors/base.py

from abc import ABC, abstractmethod
from pathlib import Path

from ..resources import Resource, ResourceRegistry


class ResourceProcessor(ABC):
    """Turns one registered resource into the bytes of its output file."""

    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def process_resource(
        self,
        source: Resource,
        source_path: Path,
        registry: ResourceRegistry,
    ) -> bytes:
        """
        Produce the contents of the output file.

        Args:
            source: Resource being processed
            source_path: Its path relative to the project root
            registry: Registry the resource was registered in
        """
        ...
