# pagesmith/build.py
"""Write every registered resource to the output directory."""

import logging
from pathlib import Path
from typing import Any, Callable, List, Union

from .processors.base import ResourceProcessor
from .resources import Resource, ResourceRegistry

logger = logging.getLogger(__name__)

# (source path, resource, data) -> processor for that resource
ProcessorFactory = Callable[[Path, Resource, Any], ResourceProcessor]


def build(
    output_dir: Union[str, Path],
    registry: ResourceRegistry,
    processor_for: ProcessorFactory,
    data: Any = None,
) -> List[Path]:
    """
    Process all resources in ``registry`` and write the results.

    The first failing resource aborts the build; files already written stay
    on disk.

    Returns:
        Paths of the written files, in processing order
    """
    output_dir = Path(output_dir)
    written = []

    for path, resource in registry.all_resources().items():
        processor = processor_for(path, resource, data)

        logger.info("Processing %s @ %s w/ %s", resource.identifier(), path, processor.name())

        processed = processor.process_resource(resource, path, registry)

        output_path = output_dir / resource.output_path()
        output_parent = output_path.parent
        if not output_parent.exists():
            logger.debug("Creating output directory %s", output_parent)
            output_parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Writing %d bytes to %s", len(processed), output_path)
        output_path.write_bytes(processed)
        written.append(output_path)

    return written
