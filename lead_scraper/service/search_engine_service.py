from dataclasses import dataclass, field
from typing import Any, Optional

from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from lead_scraper.core.config import settings
from lead_scraper.core.exceptions import ExtractionError
from lead_scraper.models.lead_models import SearchResultEntry
from lead_scraper.service.chromium_service import StealthBrowserSession
from lead_scraper.utils.logging import setup_logger

# Configure logging
logger = setup_logger(__name__)

# =============================================================================
# Search Result Extractor
# =============================================================================


@dataclass
class ExtractionConfig:
    result_selector: str = "div.g"
    title_selector: str = "h3"
    link_selector: str = "a"
    snippet_selector: str = ".VwiC3b"
    results_wait_timeout_ms: int = field(default_factory=lambda: settings.RESULTS_WAIT_TIMEOUT_MS)
    container_selectors: list[str] = field(default_factory=lambda: [
        "#search",
        "#rso",
        "div#rcnt",
    ])


# Runs in the page; returns every result block in document order.
EXTRACT_RESULTS_SCRIPT = """
([resultSelector, titleSelector, linkSelector, snippetSelector]) => {
    const items = [];
    document.querySelectorAll(resultSelector).forEach((block) => {
        const titleEl = block.querySelector(titleSelector);
        const linkEl = block.querySelector(linkSelector);
        const snippetEl = block.querySelector(snippetSelector);
        items.push({
            title: titleEl ? titleEl.innerText : null,
            link: linkEl ? linkEl.href : null,
            snippet: snippetEl ? snippetEl.innerText : null,
        });
    });
    return items;
}
"""

HAS_CONTAINER_SCRIPT = """
(selectors) => selectors.some((selector) => document.querySelector(selector) !== null)
"""


class SearchResultExtractor:
    def __init__(self, config: Optional[ExtractionConfig] = None):
        self._config = config or ExtractionConfig()

    async def extract(
        self,
        session: StealthBrowserSession,
        search_url: str,
    ) -> list[SearchResultEntry]:
        logger.info("Starting result extraction", extra={"url": search_url})

        await session.navigate(search_url)
        await self._wait_for_results(session, search_url)

        page = session.page
        has_container = True
        try:
            raw_blocks = await page.evaluate(
                EXTRACT_RESULTS_SCRIPT,
                [
                    self._config.result_selector,
                    self._config.title_selector,
                    self._config.link_selector,
                    self._config.snippet_selector,
                ],
            )
            if not raw_blocks:
                has_container = await page.evaluate(
                    HAS_CONTAINER_SCRIPT, self._config.container_selectors
                )
        except PlaywrightError as e:
            raise ExtractionError(search_url, f"DOM evaluation failed: {e}") from e

        if not isinstance(raw_blocks, list):
            raise ExtractionError(
                search_url,
                f"expected a list of result blocks, got {type(raw_blocks).__name__}",
            )

        if not raw_blocks and not has_container:
            raise ExtractionError(
                search_url,
                "no result blocks matched "
                f"{self._config.result_selector!r} and none of the containers "
                f"{self._config.container_selectors} are present",
                page_title=await self._page_title(session),
            )

        entries = self.to_entries(raw_blocks)
        logger.info(
            "Result extraction completed",
            extra={
                "url": search_url,
                "blocks_found": len(raw_blocks),
                "entries_kept": len(entries),
            },
        )
        return entries

    @staticmethod
    def to_entries(raw_blocks: list[dict[str, Any]]) -> list[SearchResultEntry]:
        """Keep page order; drop blocks without both a title and a link."""
        entries = []
        for block in raw_blocks:
            title = (block.get("title") or "").strip()
            link = (block.get("link") or "").strip()
            if not title or not link:
                continue
            snippet = (block.get("snippet") or "").strip() or None
            entries.append(SearchResultEntry(title=title, link=link, snippet=snippet))
        return entries

    async def _wait_for_results(self, session: StealthBrowserSession, search_url: str) -> None:
        # DOMContentLoaded can fire before results render; wait briefly.
        try:
            await session.page.wait_for_selector(
                self._config.result_selector,
                state="attached",
                timeout=self._config.results_wait_timeout_ms,
            )
        except PlaywrightTimeoutError:
            logger.debug(
                "Result blocks not present after wait",
                extra={
                    "selector": self._config.result_selector,
                    "timeout_ms": self._config.results_wait_timeout_ms,
                },
            )
        except PlaywrightError as e:
            raise ExtractionError(search_url, f"waiting for results failed: {e}") from e

    async def _page_title(self, session: StealthBrowserSession) -> Optional[str]:
        try:
            return await session.page.title()
        except PlaywrightError:
            return None
