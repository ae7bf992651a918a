from datetime import datetime, timezone
from typing import List

from lead_scraper.models.lead_models import LeadQueryResult, SearchResultEntry


def aggregate(query: str, url: str, results: List[SearchResultEntry]) -> LeadQueryResult:
    """Package extracted entries with request metadata. `count` is always derived."""
    results = list(results)
    return LeadQueryResult(
        query=query,
        url=url,
        results=results,
        count=len(results),
        timestamp=datetime.now(timezone.utc),
    )
