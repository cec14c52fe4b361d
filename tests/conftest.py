"""Shared test fixtures for pagesmith."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from pagesmith.resources import ResourceRegistry
from pagesmith.walker import Context


@dataclass(frozen=True)
class Page:
    """Minimal resource: a fixed identifier and output path."""

    ident: str
    out: str

    def identifier(self) -> str:
        return self.ident

    def output_path(self) -> Path:
        return Path(self.out)


@pytest.fixture
def site_root(tmp_path):
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def registry(site_root):
    """Registry with a blog post, an about page and the home page."""
    reg = ResourceRegistry(site_root)
    reg.register("index.html", Page("index", "index.html"))
    reg.register("blog/post1.html", Page("blog/post1", "blog/post1.html"))
    reg.register("about/index.html", Page("about", "about/index.html"))
    return reg


@pytest.fixture
def make_ctx(registry):
    def _make(source_path="blog/post1.html", data=None):
        source_path = Path(source_path)
        return Context(
            resource=registry.get(source_path),
            source_path=source_path,
            registry=registry,
            data=data,
        )

    return _make


@pytest.fixture
def ctx(make_ctx):
    return make_ctx()


@pytest.fixture
def fake_katex():
    """KaTeX stand-in that records calls and returns a marker span."""
    calls = []

    def render(tex, options):
        calls.append((tex, dict(options)))
        mode = "display" if options.get("display-mode") else "inline"
        return f'<span class="katex-{mode}">{tex}</span>'

    render.calls = calls
    return render
