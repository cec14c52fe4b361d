# pagesmith/config.py
"""YAML site configuration with env var expansion."""

import os
import re
from pathlib import Path
from typing import Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError
from .transformers.highlight import DEFAULT_THEME
from .transformers.katex import KATEX_VERSION

CONFIG_FILENAME = "pagesmith.yaml"


class HighlightConfig(BaseModel):
    theme: str = DEFAULT_THEME


class MathConfig(BaseModel):
    katex_version: str = KATEX_VERSION
    trust: bool = True


class MarkdownConfig(BaseModel):
    enabled: bool = True
    extra_args: List[str] = Field(default_factory=list)


class SiteConfig(BaseModel):
    source_dir: str = "site"
    output_dir: str = "dist"
    recurse: bool = True
    trim: bool = False
    exclude: List[str] = Field(default_factory=list)
    variables: Dict[str, str] = Field(default_factory=dict)
    highlight: HighlightConfig = Field(default_factory=HighlightConfig)
    math: MathConfig = Field(default_factory=MathConfig)
    markdown: MarkdownConfig = Field(default_factory=MarkdownConfig)
    log_level: Literal["debug", "info", "warning", "error"] = "info"


def load_config(cli_path: Optional[str] = None) -> SiteConfig:
    """Load config with resolution order: CLI > project-local > defaults."""
    if cli_path and not Path(cli_path).exists():
        raise ConfigError(f"Config file not found: {cli_path}")

    config_paths = [
        Path(cli_path) if cli_path else None,
        Path(".") / CONFIG_FILENAME,
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return SiteConfig(**raw)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ConfigError(f"Invalid config in {path}: {e}") from e

    return SiteConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `pagesmith config init`
DEFAULT_CONFIG_TEMPLATE = f"""\
# pagesmith.yaml

source_dir: "site"             # scanned for resources
output_dir: "dist"             # generated files land here
recurse: true
trim: false                    # drop whitespace-only text nodes
# exclude: ["drafts/*", "*.bak"]

# Values for <$name/> tags and "$name" attributes
variables:
  site_name: "My Site"

highlight:
  theme: "{DEFAULT_THEME}"          # any Pygments style name

math:
  katex_version: "{KATEX_VERSION}"  # version of the KaTeX stylesheet
  trust: true

markdown:
  enabled: true
  # extra_args: ["--shift-heading-level-by=1"]

# Logging
log_level: "info"              # debug | info | warning | error
"""
