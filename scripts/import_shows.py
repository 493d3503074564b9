"""
Import the reviewed-shows dataset from GitHub into the catalog file.

    python scripts/import_shows.py [--output data/shows.json] [--owner ...] [--repo ...]
"""

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

# Add project root to path to import the package
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from tvtantrum.core.config import settings  # noqa: E402
from tvtantrum.services.importer import CatalogImporter, CatalogImportError, GitHubCatalogClient  # noqa: E402
from tvtantrum.services.sensory import unrecognized_reporter  # noqa: E402
from tvtantrum.services.storage import ShowCatalog  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--output", default=settings.CATALOG_PATH, help="Catalog JSON file to update")
    parser.add_argument("--owner", default=None, help="GitHub owner (defaults to GITHUB_OWNER)")
    parser.add_argument("--repo", default=None, help="GitHub repository (defaults to GITHUB_REPO)")
    parser.add_argument("--replace", action="store_true", help="Start from an empty catalog instead of merging")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    catalog = ShowCatalog() if args.replace else ShowCatalog.from_file(args.output)
    importer = CatalogImporter(catalog, GitHubCatalogClient(owner=args.owner, repo=args.repo))
    try:
        report = await importer.run()
    except CatalogImportError as e:
        logger.error(str(e))
        return 1

    catalog.save(args.output)
    for entry in unrecognized_reporter.get_unrecognized():
        logger.warning(f"Review needed: '{entry.raw}' defaulted to Moderate {entry.count} time(s)")
    return 0 if report.imported else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(run(parse_args())))
