# pagesmith/site.py
"""
Stock resource type and wiring for building a site from a SiteConfig.

Files under the source directory become SiteFile resources:
    index.html          → identifier "index",       output index.html
    about/index.html    → identifier "about",       output about/index.html
    blog/post1.md       → identifier "blog/post1",  output blog/post1.html
    css/site.css        → identifier "css/site.css", copied as-is

Pages drop their suffix from the identifier; static files keep it so that
logo.png and logo.svg stay distinct.
"""

import fnmatch
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Callable, List, Literal, Optional

from .build import build
from .config import SiteConfig
from .processors import HTMLProcessor, IdentityProcessor, MarkdownProcessor, ResourceProcessor
from .resources import ResourceRegistry
from .transformers import default_transformers

logger = logging.getLogger(__name__)

HTML_EXTENSIONS = {".html", ".htm"}
MARKDOWN_EXTENSIONS = {".md", ".markdown"}

FileKind = Literal["html", "markdown", "static"]


@dataclass(frozen=True)
class SiteFile:
    """A file of the site, addressed by its path inside the source directory."""

    path: PurePosixPath
    kind: FileKind = "static"

    def identifier(self) -> str:
        if self.kind == "static":
            return self.path.as_posix()
        stem = self.path.with_suffix("").as_posix()
        if stem.endswith("/index"):
            stem = stem[: -len("/index")]
        return stem

    def output_path(self) -> Path:
        if self.kind == "markdown":
            return Path(self.path.with_suffix(".html"))
        return Path(self.path)


def make_classifier(config: SiteConfig) -> Callable[[Path], Optional[SiteFile]]:
    """Return a classifier for ResourceRegistry.register_directory()."""

    def classify(path: Path) -> Optional[SiteFile]:
        rel = PurePosixPath(path.as_posix())
        if any(part.startswith(".") for part in rel.parts):
            return None
        if any(fnmatch.fnmatch(rel.as_posix(), pattern) for pattern in config.exclude):
            return None

        suffix = rel.suffix.lower()
        if suffix in HTML_EXTENSIONS:
            return SiteFile(rel, "html")
        if suffix in MARKDOWN_EXTENSIONS and config.markdown.enabled:
            return SiteFile(rel, "markdown")
        return SiteFile(rel, "static")

    return classify


def load_registry(config: SiteConfig) -> ResourceRegistry:
    """Register every file of ``config.source_dir``."""
    registry = ResourceRegistry(config.source_dir)
    registry.register_directory(".", make_classifier(config), recurse=config.recurse)
    return registry


def make_processor_factory(config: SiteConfig):
    transformers = default_transformers(config)
    html = HTMLProcessor(transformers, trim=config.trim, data=config)
    markdown = MarkdownProcessor(
        transformers,
        trim=config.trim,
        data=config,
        extra_args=config.markdown.extra_args,
    )
    identity = IdentityProcessor()

    def processor_for(path: Path, resource: SiteFile, data) -> ResourceProcessor:
        if resource.kind == "html":
            return html
        if resource.kind == "markdown":
            return markdown
        return identity

    return processor_for


def build_site(config: SiteConfig) -> List[Path]:
    registry = load_registry(config)
    logger.info("Registered %d resources from %s", len(registry), config.source_dir)
    return build(config.output_dir, registry, make_processor_factory(config), data=config)
