"""
Lead search pipeline: prompt parsing, query construction and the scoped
browser scrape that turns a parameter set into a LeadQueryResult.
"""

from typing import Awaitable, Callable, Optional

from lead_scraper.models.lead_models import LeadQueryResult, SearchParameters
from lead_scraper.service.chromium_service import StealthBrowserSession
from lead_scraper.service.prompt_parser_service import PromptParser, TokenPromptParser
from lead_scraper.service.query_builder_service import build_boolean_query, build_search_url
from lead_scraper.service.resource_manager_service import (
    BrowserSessionLimiter,
    browser_session_limiter,
)
from lead_scraper.service.result_aggregator_service import aggregate
from lead_scraper.service.search_engine_service import SearchResultExtractor
from lead_scraper.utils.logging import setup_logger

logger = setup_logger(__name__)

SessionFactory = Callable[[], Awaitable[StealthBrowserSession]]


class LeadSearchService:
    def __init__(
        self,
        parser: Optional[PromptParser] = None,
        extractor: Optional[SearchResultExtractor] = None,
        session_factory: Optional[SessionFactory] = None,
        limiter: Optional[BrowserSessionLimiter] = None,
    ):
        self.parser = parser or TokenPromptParser()
        self.extractor = extractor or SearchResultExtractor()
        self.session_factory = session_factory or StealthBrowserSession.open
        self.limiter = limiter or browser_session_limiter

    async def get_prompt_details(self, sentence: str) -> SearchParameters:
        return await self.parser.parse(sentence)

    async def get_leads(
        self,
        params: SearchParameters,
        url: Optional[str] = None,
    ) -> LeadQueryResult:
        """
        Scrape leads for a complete parameter set.

        Args:
            params: industry, position and place, all required
            url: optional search URL overriding the generated one

        Raises:
            MissingParameterError: a required field is absent
            BrowserLaunchError, NavigationError, ExtractionError: the scrape
                failed; the browser session is already closed
        """
        query = build_boolean_query(params)
        search_url = url or build_search_url(query)

        logger.info("Scraping leads", extra={"query": query, "url": search_url})

        async with self.limiter.slot():
            session = await self.session_factory()
            async with session:
                results = await self.extractor.extract(session, search_url)

        return aggregate(query, search_url, results)
