import argparse
import sys

from framer_export.config.logger_config import logger
from framer_export.exporter.domain.errors import InvalidSiteUrlError
from framer_export.exporter.export import write_export


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m framer_export.exporter",
        description="Render every sitemap page of a site and package it as a static zip.",
    )
    parser.add_argument("url", help="site URL, e.g. https://example.framer.website")
    parser.add_argument("-o", "--output-dir", default=".", help="directory for the zip archive")
    parser.add_argument("--no-progress", action="store_true", help="hide the render progress bar")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        archive_path = write_export(args.url, args.output_dir, show_progress=not args.no_progress)
    except InvalidSiteUrlError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except Exception as exc:
        logger.error("Export of {} failed with error type {}: {}", args.url, type(exc).__name__, exc)
        return 1
    print(archive_path)
    return 0


# python -m framer_export.exporter https://example.framer.website
if __name__ == "__main__":
    sys.exit(main())
