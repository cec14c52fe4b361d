# pagesmith/exceptions.py
"""
Error types raised while registering, transforming and writing resources.

Every error derives from PagesmithError and can carry the source path and the
tag that were being processed when it was raised. The walker fills in the tag,
the document processor fills in the source path, so a message can be shown to
the user without further lookup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class PagesmithError(Exception):
    """Base class for all pagesmith errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.source_path: Optional[Path] = None
        self.tag: Optional[str] = None

    def annotate(self, source_path=None, tag=None) -> "PagesmithError":
        """Attach context without overwriting context set closer to the failure."""
        if source_path is not None and self.source_path is None:
            self.source_path = Path(source_path)
        if tag is not None and self.tag is None:
            self.tag = tag
        return self

    def __str__(self) -> str:
        parts = []
        if self.source_path is not None:
            parts.append(str(self.source_path))
        if self.tag is not None:
            parts.append(f"<{self.tag}>")
        parts.append(self.message)
        return ": ".join(parts)


class ConfigError(PagesmithError):
    """Invalid or unreadable configuration file."""


class MalformedAttributesError(PagesmithError):
    def __init__(self, key_name: str, msg: str):
        super().__init__(f"malformed attribute {key_name}=: {msg}")
        self.key_name = key_name


class MissingAttributeError(PagesmithError):
    def __init__(self, key_name: str, msg: str):
        super().__init__(msg)
        self.key_name = key_name


class MissingBodyError(PagesmithError):
    pass


class MarkupParseError(PagesmithError):
    def __init__(self, path, cause: BaseException):
        super().__init__(f"could not parse markup: {cause}")
        self.path = Path(path) if path is not None else None
        self.cause = cause
        if self.path is not None:
            self.source_path = self.path


class RenderError(PagesmithError):
    """A rendering engine (KaTeX, Pygments, pandoc) failed."""

    def __init__(self, engine: str, cause: BaseException):
        super().__init__(f"{engine} failed: {cause}")
        self.engine = engine
        self.cause = cause


class DuplicateIdentifierError(PagesmithError):
    def __init__(self, identifier: str, existing: Path, duplicate: Path):
        super().__init__(
            f"identifier {identifier!r} is used by both {existing} and {duplicate}"
        )
        self.identifier = identifier
        self.existing = existing
        self.duplicate = duplicate


class NestingTooDeepError(PagesmithError):
    def __init__(self, limit: int):
        super().__init__(f"document nesting exceeds {limit} levels")
        self.limit = limit


class TransformError(PagesmithError):
    """Catch-all for domain violations found by a transformer."""


class UnknownVariableError(TransformError):
    def __init__(self, reference: str):
        super().__init__(f"Unknown variable {reference}")
        self.reference = reference


class UnknownIdentifierError(TransformError):
    def __init__(self, reference: str):
        super().__init__(f"Unknown identifier: {reference}")
        self.reference = reference


class UnknownLanguageError(TransformError):
    def __init__(self, lang: str):
        super().__init__(f"Unknown language {lang}")
        self.lang = lang


class UnknownThemeError(TransformError):
    def __init__(self, theme: str):
        super().__init__(f"No such theme {theme}")
        self.theme = theme


class InvalidEngineOutputError(TransformError):
    def __init__(self, engine: str, html: str):
        super().__init__(f"Invalid html generated by {engine}: {html!r}")
        self.engine = engine
        self.html = html


class InvalidPathError(TransformError):
    def __init__(self, path: str, msg: str = "path is not valid UTF-8"):
        super().__init__(f"{msg}: {path!r}")
        self.path = path
