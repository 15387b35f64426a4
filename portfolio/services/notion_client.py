"""
Notion Client for Portfolio
===========================

HTTP client for the Notion API, used by the content sync to read the
projects data source.

Expected data source properties:
- Name (title)
- Tags (multi-select)
- Description (rich text)
- Date (rich text or date)
- Github (url)
The page cover becomes the card image.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..models.project_models import DEFAULT_IMAGE, ProjectRecord

logger = logging.getLogger(__name__)

NOTION_BASE_URL = "https://api.notion.com"
NOTION_VERSION = "2025-09-03"
PAGE_SIZE = 100

# Block types whose rich text is kept as project content
TEXT_BLOCK_TYPES = (
    "paragraph", "heading_1", "heading_2", "heading_3",
    "bulleted_list_item", "numbered_list_item", "quote", "callout", "to_do"
)


class NotionError(Exception):
    """Error reported by the Notion API."""

    def __init__(self, message: str, status: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.code = code


def _plain_text(rich_text: Optional[List[Dict[str, Any]]]) -> str:
    if not rich_text:
        return ""
    return rich_text[0].get("plain_text") or ""


def page_to_project(page: Dict[str, Any]) -> ProjectRecord:
    """Map a Notion page of the projects data source to a ProjectRecord."""
    props = page.get("properties") or {}

    title = _plain_text((props.get("Name") or {}).get("title")) or "Untitled"

    tags = [t.get("name") for t in (props.get("Tags") or {}).get("multi_select") or [] if t.get("name")]

    description = _plain_text((props.get("Description") or {}).get("rich_text")) or "No description."

    date_prop = props.get("Date") or {}
    date = _plain_text(date_prop.get("rich_text"))
    if not date and isinstance(date_prop.get("date"), dict):
        date = date_prop["date"].get("start") or ""

    github = (props.get("Github") or {}).get("url") or "#"

    image = DEFAULT_IMAGE
    cover = page.get("cover")
    if isinstance(cover, dict):
        source = cover.get("external") if cover.get("type") == "external" else cover.get("file")
        if isinstance(source, dict) and source.get("url"):
            image = source["url"]

    return ProjectRecord(
        id=page["id"],
        title=title,
        tags=tags,
        description=description,
        date=date,
        github=github,
        image=image
    )


class NotionClient:
    """
    Client for the Notion REST API.

    Usage:
        client = NotionClient(api_key="secret_...", data_source_id="...")
        try:
            projects = await client.fetch_projects()
        finally:
            await client.close()
    """

    def __init__(
        self,
        api_key: str,
        data_source_id: str,
        base_url: Optional[str] = None,
        notion_version: str = NOTION_VERSION,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.data_source_id = data_source_id
        self.base_url = (base_url or NOTION_BASE_URL).rstrip("/")
        self.notion_version = notion_version
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        logger.info(f"[NOTION] Initialized with base URL: {self.base_url}")

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Notion-Version": self.notion_version,
                    "Content-Type": "application/json"
                }
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        client = await self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise NotionError(f"Request to {path} failed: {e}") from e

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            raise NotionError(
                body.get("message") or f"HTTP {response.status_code}",
                status=response.status_code,
                code=body.get("code")
            )
        return response.json()

    async def query_pages(self) -> List[Dict[str, Any]]:
        """All pages of the data source, sorted by Name ascending."""
        pages: List[Dict[str, Any]] = []
        payload: Dict[str, Any] = {
            "sorts": [{"property": "Name", "direction": "ascending"}],
            "page_size": PAGE_SIZE
        }

        while True:
            data = await self._request("POST", f"/v1/data_sources/{self.data_source_id}/query", json=payload)
            pages.extend(data.get("results") or [])
            if not data.get("has_more") or not data.get("next_cursor"):
                break
            payload["start_cursor"] = data["next_cursor"]

        logger.info(f"[NOTION] Fetched {len(pages)} pages")
        return pages

    async def fetch_page_content(self, page_id: str) -> str:
        """Plain text of a page's top-level text blocks, one line per block."""
        lines: List[str] = []
        params: Dict[str, Any] = {"page_size": PAGE_SIZE}

        while True:
            data = await self._request("GET", f"/v1/blocks/{page_id}/children", params=params)
            for block in data.get("results") or []:
                block_type = block.get("type")
                if block_type not in TEXT_BLOCK_TYPES:
                    continue
                rich_text = (block.get(block_type) or {}).get("rich_text") or []
                text = "".join(part.get("plain_text") or "" for part in rich_text)
                if text:
                    lines.append(text)
            if not data.get("has_more") or not data.get("next_cursor"):
                break
            params["start_cursor"] = data["next_cursor"]

        return "\n".join(lines)

    async def fetch_projects(self, fetch_content: bool = True) -> List[ProjectRecord]:
        """Query the data source and map every page to a ProjectRecord."""
        projects = []
        for page in await self.query_pages():
            record = page_to_project(page)
            if fetch_content:
                record.content = await self.fetch_page_content(record.id)
            projects.append(record)
        return projects
