"""Contentmap CLI — contentmap build.

Entry point for the ``contentmap`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the contentmap CLI."""
    parser = argparse.ArgumentParser(
        prog="contentmap",
        description="Build localized sitemaps from route templates and CMS content.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # contentmap build
    build_parser = subparsers.add_parser(
        "build",
        help="Resolve routes and write sitemap.xml",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Config root directory")
    build_parser.add_argument("--output", default=None, help="Sitemap output path")
    build_parser.add_argument("--origin", default=None, help="Site origin for absolute URLs")
    build_parser.add_argument(
        "--lenient",
        action="store_true",
        help="Drop failing routes instead of aborting the build",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from contentmap import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from contentmap._errors import ContentmapError
    from contentmap.app import build

    if args.command == "build":
        try:
            build(
                root=args.root,
                output=args.output,
                origin=args.origin,
                strict=False if args.lenient else None,
            )
        except ContentmapError as exc:
            print(f"  Error: {exc}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
