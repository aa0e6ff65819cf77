"""
Quote Service

Fetches a random quote from the configured quote API.
Endpoint comes from QUOTE_ENDPOINT.
"""

import httpx
import structlog

from errors import UpstreamError
from models import Quote

log = structlog.get_logger(__name__)


def _extract_content(data) -> str | None:
    """Pull the quote text out of a quote API payload (a list of posts or a single post)."""
    if isinstance(data, list):
        if not data:
            return None
        data = data[0]
    if not isinstance(data, dict):
        return None
    content = data.get("content")
    if isinstance(content, dict):
        # WordPress style {"content": {"rendered": "..."}}
        content = content.get("rendered")
    return content if isinstance(content, str) else None


class QuoteService:
    def __init__(self, http_client: httpx.AsyncClient, endpoint: str):
        self.http_client = http_client
        self.endpoint = endpoint

    async def get(self) -> Quote:
        """Fetch one quote. Any failure is raised as UpstreamError."""
        log.debug("quote_request", url=self.endpoint)
        try:
            response = await self.http_client.get(self.endpoint)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.warning("quote_request_failed", error=str(e))
            raise UpstreamError(f"error getting quote: {e}") from e

        if response.status_code != 200:
            log.warning("quote_bad_status", status_code=response.status_code)
            raise UpstreamError(f"error getting quote: {response.status_code} - {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError("error getting quote: invalid JSON payload") from e

        content = _extract_content(data)
        if content is None:
            raise UpstreamError("error getting quote: no quote in response")

        return Quote(content=content)
