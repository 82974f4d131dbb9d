"""Contentmap entry points.

``build()`` runs one resolution pass against Contentful and writes the
sitemap file.  ``create_sitemap()`` wires the same objects without running
them, for callers that embed the pipeline (see ``contentmap.serve``).
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

from contentmap.config_loader import load_config
from contentmap.export.sitemap import write_sitemap
from contentmap.observability.collector import ResolutionCollector
from contentmap.resolve.pipeline import ContentSitemap
from contentmap.source.contentful import ContentfulSource

if TYPE_CHECKING:
    from contentmap.config import ContentmapConfig
    from contentmap.export.sitemap import WrittenSitemap
    from contentmap.source.base import ContentSource


def create_sitemap(
    config: ContentmapConfig,
    *,
    source: ContentSource | None = None,
    collector: ResolutionCollector | None = None,
) -> ContentSitemap:
    """Build a ContentSitemap from config, defaulting to a Contentful source."""
    if source is None:
        source = ContentfulSource(config.contentful)
    return ContentSitemap(source, config.routes, config.options, collector=collector)


def build(
    root: str | Path = ".",
    *,
    source: ContentSource | None = None,
    **kwargs: object,
) -> WrittenSitemap | None:
    """Resolve every route and write the sitemap.

    Args:
        root: Directory containing ``contentmap.yaml`` / ``.toml``.
        source: Content source to use instead of Contentful.
        **kwargs: Override option fields (``origin``, ``strict``, ...) or
            ``output``.

    Returns:
        The written sitemap record, or *None* when no origin is configured.

    """
    root = Path(root)
    config = load_config(root, **kwargs)
    collector = ResolutionCollector()
    sitemap = create_sitemap(config, source=source, collector=collector)

    t0 = time.perf_counter()
    routes = asyncio.run(sitemap.build_routes())
    resolve_ms = (time.perf_counter() - t0) * 1000

    output = Path(config.output)
    if not output.is_absolute():
        output = root / output
    written = write_sitemap(routes, config.options.origin, output)

    _print_build_summary(len(routes), resolve_ms, collector, written)
    return written


def _print_build_summary(
    route_count: int,
    resolve_ms: float,
    collector: ResolutionCollector,
    written: WrittenSitemap | None,
) -> None:
    """Print build completion summary to stderr."""
    skipped = collector.diagnostics()
    lines = [
        "",
        "─" * 41,
        f"  Resolved {route_count} route{'s' if route_count != 1 else ''}"
        f" in {resolve_ms:.0f}ms",
    ]
    if skipped:
        lines.append(f"  Skipped {len(skipped)} (route, item or locale)")
        lines.extend(f"    {type(event).__name__}: {event.source}" for event in skipped[:10])
    if written is not None:
        lines.append(f"  Output: {written.path} ({written.size_bytes} bytes)")

    print("\n".join(lines), file=sys.stderr)
