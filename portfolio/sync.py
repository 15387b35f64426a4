"""
Content Sync
============

Pulls the projects data source from Notion and writes projects.json.

Usage:
    python -m portfolio.sync [--output projects.json] [--no-content]

Reads NOTION_API_KEY and NOTION_DATASOURCE_ID from the environment or .env.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import Settings, settings as default_settings
from .services.notion_client import NotionClient, NotionError
from .services.project_store import ProjectStore

logger = logging.getLogger("portfolio.sync")

ERROR_HINTS = {
    "object_not_found": "Check NOTION_DATASOURCE_ID and that the integration is connected to the database.",
    "unauthorized": "Check NOTION_API_KEY.",
}


def check_credentials(settings: Settings) -> bool:
    """Log which credentials are missing. Returns True when both are set."""
    ok = True
    if not settings.NOTION_API_KEY:
        logger.error("[SYNC] NOTION_API_KEY is not set, check your .env file")
        ok = False
    if not settings.NOTION_DATASOURCE_ID:
        logger.error("[SYNC] NOTION_DATASOURCE_ID is not set, check your .env file")
        ok = False
    if ok:
        logger.info("[SYNC] Credentials loaded")
    return ok


async def sync_projects(
    settings: Settings,
    output: Path,
    fetch_content: bool = True,
    client: Optional[NotionClient] = None
) -> int:
    """
    Fetch all projects and write them to `output`.

    Returns:
        Process exit code (0 on success)
    """
    if client is None:
        if not check_credentials(settings):
            return 1
        client = NotionClient(
            api_key=settings.NOTION_API_KEY,
            data_source_id=settings.NOTION_DATASOURCE_ID,
            base_url=settings.NOTION_BASE_URL,
            notion_version=settings.NOTION_VERSION,
            timeout=settings.NOTION_TIMEOUT
        )

    logger.info("[SYNC] Fetching projects from Notion...")
    try:
        projects = await client.fetch_projects(fetch_content=fetch_content)
    except NotionError as e:
        logger.error(f"[SYNC] Notion API error: {e}")
        hint = ERROR_HINTS.get(e.code or "")
        if hint:
            logger.error(f"[SYNC] Hint: {hint}")
        return 1
    finally:
        await client.close()

    ProjectStore(output).save(projects)
    logger.info(f"[SYNC] Done: {len(projects)} projects saved to {output}")
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync portfolio projects from Notion.")
    parser.add_argument(
        "--output", type=Path, default=None,
        help="Where to write projects.json (default: PROJECTS_FILE setting)"
    )
    parser.add_argument(
        "--no-content", action="store_true",
        help="Skip fetching page bodies"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=default_settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    output = args.output or default_settings.PROJECTS_FILE
    return asyncio.run(sync_projects(default_settings, output, fetch_content=not args.no_content))


if __name__ == "__main__":
    sys.exit(main())
