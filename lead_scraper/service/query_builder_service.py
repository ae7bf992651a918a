from typing import Optional
from urllib.parse import urlencode

from lead_scraper.core.config import settings
from lead_scraper.core.exceptions import MissingParameterError
from lead_scraper.models.lead_models import SearchParameters
from lead_scraper.utils.text_processor import TextProcessor


def build_boolean_query(params: SearchParameters) -> str:
    """Build `(<position> and <place> and <industry>) and linkedin profile`."""
    missing = params.missing_fields()
    if missing:
        raise MissingParameterError(missing)

    position = TextProcessor.normalize(params.position)
    place = TextProcessor.normalize(params.place)
    industry = TextProcessor.normalize(params.industry)

    return f"({position} and {place} and {industry}) and linkedin profile"


def build_search_url(query: str, base_url: Optional[str] = None) -> str:
    base = base_url or settings.SEARCH_BASE_URL
    return f"{base}?{urlencode({'q': query})}"
