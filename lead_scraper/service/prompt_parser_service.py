from typing import Optional, Protocol

from lead_scraper.models.lead_models import SearchParameters
from lead_scraper.service.place_validator_service import PlaceValidator
from lead_scraper.service.vocabulary_service import VocabularyMatcher, default_matcher
from lead_scraper.utils.logging import setup_logger
from lead_scraper.utils.text_processor import TextProcessor

logger = setup_logger(__name__)


class PromptParser(Protocol):
    async def parse(self, sentence: str) -> SearchParameters:
        ...


class TokenPromptParser:
    """
    Extracts position, industry and place from a free-text lead request.

    Position and industry come from vocabulary lookups; when a token matches
    more than once the last occurrence in the sentence wins. The place is
    the token right after the first "from", kept only if the geocoder
    confirms it.
    """

    PLACE_ANCHORS = frozenset({"from"})

    def __init__(
        self,
        matcher: Optional[VocabularyMatcher] = None,
        place_validator: Optional[PlaceValidator] = None,
    ):
        self._matcher = matcher or default_matcher()
        self._place_validator = place_validator or PlaceValidator()

    async def parse(self, sentence: str) -> SearchParameters:
        tokens = TextProcessor.tokenize(sentence)
        found: dict[str, str] = {}

        for token in tokens:
            position = self._matcher.match_position(token)
            if position:
                found["position"] = position
                continue

            industry = self._matcher.match_industry(token)
            if industry:
                found["industry"] = industry

        place = await self._extract_place(tokens)
        if place:
            found["place"] = place

        logger.info(
            "Prompt parsed",
            extra={"token_count": len(tokens), "fields": sorted(found)},
        )
        return SearchParameters(**found)

    async def _extract_place(self, tokens: list[str]) -> Optional[str]:
        anchor_index = next(
            (i for i, token in enumerate(tokens) if token in self.PLACE_ANCHORS),
            None,
        )
        if anchor_index is None or anchor_index + 1 >= len(tokens):
            return None

        candidate = tokens[anchor_index + 1]
        if not await self._place_validator.is_valid_place(candidate):
            logger.debug("Place candidate rejected", extra={"candidate": candidate})
            return None

        return TextProcessor.capitalize_first(candidate)
