# pagesmith/processors/identity.py

import logging
from pathlib import Path

from ..resources import Resource, ResourceRegistry
from .base import ResourceProcessor

logger = logging.getLogger(__name__)


class IdentityProcessor(ResourceProcessor):
    """Copies the input to the output verbatim."""

    def process_resource(
        self,
        source: Resource,
        source_path: Path,
        registry: ResourceRegistry,
    ) -> bytes:
        logger.debug("Copying %s", source.identifier())
        return registry.absolute_path(source_path).read_bytes()
