from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional


class SearchParameters(BaseModel):
    """Parameters discovered in a lead request. Any subset may be absent."""
    industry: Optional[str] = None
    position: Optional[str] = None
    place: Optional[str] = None

    class Config:
        frozen = True

    def missing_fields(self) -> List[str]:
        return [
            name
            for name in ("industry", "position", "place")
            if not (getattr(self, name) or "").strip()
        ]

    def is_complete(self) -> bool:
        return not self.missing_fields()


class SearchResultEntry(BaseModel):
    title: str
    link: str
    snippet: Optional[str] = None

    class Config:
        frozen = True


class LeadQueryResult(BaseModel):
    query: str
    url: str
    results: List[SearchResultEntry] = Field(default_factory=list)
    count: int
    timestamp: datetime

    class Config:
        frozen = True
        json_encoders = {
            datetime: lambda dt: dt.isoformat()
        }
