"""
Pydantic models for API request/response schemas
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class LeadsRequest(BaseModel):
    """Request model for lead scraping.

    The three search fields are optional at the schema level so that a
    missing field is reported as a 400 rather than a validation 422.
    """
    industry: Optional[str] = Field(None, description="Industry, e.g. 'finance industry'")
    position: Optional[str] = Field(None, description="Position, e.g. 'CEO'")
    place: Optional[str] = Field(None, description="Place, e.g. 'Mumbai'")
    url: Optional[str] = Field(None, description="Search URL overriding the generated one")

    class Config:
        json_schema_extra = {
            "example": {
                "industry": "finance industry",
                "position": "CEO",
                "place": "Mumbai"
            }
        }


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint"""
    error: str
    message: Optional[str] = None
    required: Optional[List[str]] = None
