"""Export layer — serialize resolved routes as a sitemap document."""

from contentmap.export.sitemap import WrittenSitemap, generate_sitemap, write_sitemap

__all__ = ["WrittenSitemap", "generate_sitemap", "write_sitemap"]
