"""Load ContentmapConfig from contentmap.yaml or contentmap.toml.

Merges file config with keyword overrides.  Overrides take precedence.

Example ``contentmap.yaml``::

    options:
      origin: https://example.com
      dynamicLocales: true
      dynamicLastmod: true
    contentful:
      space: abc123
    routes:
      - url: /
      - pattern: /:locale/posts/:slug
        query: {content_type: post, select: fields.slug}
        params: {slug: fields.slug}
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from contentmap._errors import ConfigError
from contentmap.config import ContentfulSettings, ContentmapConfig, RouteTemplate, SitemapOptions

CONFIG_NAMES = ("contentmap.yaml", "contentmap.yml", "contentmap.toml")


def find_config(root: Path) -> Path | None:
    """Return the first config file present in ``root``."""
    for name in CONFIG_NAMES:
        path = root / name
        if path.is_file():
            return path
    return None


def load_config(root: Path, **overrides: Any) -> ContentmapConfig:
    """Load ContentmapConfig from root, optionally merging a config file.

    ``overrides`` may hold any ``SitemapOptions`` field plus ``output``;
    values of *None* are ignored so CLI defaults never mask the file.

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values.

    """
    path = find_config(root)
    data = _read_config_file(path) if path is not None else {}

    option_data = dict(_section(data, "options"))
    contentmap = data.get("contentmap")
    if isinstance(contentmap, Mapping):
        option_data.update(contentmap)

    output = data.get("output", "sitemap.xml")
    for key, value in overrides.items():
        if value is None:
            continue
        if key == "output":
            output = value
        else:
            option_data[key] = value

    routes = data.get("routes") or []
    if not isinstance(routes, list):
        msg = "'routes' must be a list of route definitions"
        raise ConfigError(msg)

    contentful = dict(_section(data, "contentful"))
    try:
        settings = ContentfulSettings(**contentful)
    except TypeError as exc:
        msg = f"Invalid contentful settings: {exc}"
        raise ConfigError(msg) from exc

    return ContentmapConfig(
        options=SitemapOptions.from_mapping(option_data),
        routes=tuple(RouteTemplate.from_mapping(route) for route in routes),
        contentful=settings,
        output=str(output),
    )


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, Mapping):
        msg = f"'{name}' must be a mapping"
        raise ConfigError(msg)
    return section


def _read_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML or TOML config file into a dict."""
    try:
        text = path.read_text()
    except OSError as exc:
        msg = f"Could not read {path}: {exc}"
        raise ConfigError(msg) from exc

    try:
        if path.suffix == ".toml":
            data = tomllib.loads(text)
        else:
            data = yaml.safe_load(text) or {}
    except (yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
        msg = f"Could not parse {path.name}: {exc}"
        raise ConfigError(msg) from exc

    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping at the top level"
        raise ConfigError(msg)
    return data
