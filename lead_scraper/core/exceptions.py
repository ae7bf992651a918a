"""
Error taxonomy for the lead search pipeline.

Validation-level problems are absorbed where they happen; browser and
network problems propagate to the HTTP boundary as one of these types.
"""

from typing import List, Optional


class LeadScraperError(Exception):
    """Base class for all pipeline errors surfaced to callers."""

    status_code: int = 500
    error: str = "Comprehensive scraping failed"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}


class MissingParameterError(LeadScraperError):
    status_code = 400
    error = "Missing required parameters"

    def __init__(self, missing: List[str], required: Optional[List[str]] = None):
        self.missing = list(missing)
        self.required = list(required or ["industry", "position", "place"])
        super().__init__(
            f"{', '.join(name.capitalize() for name in self.required)} are required "
            f"(missing: {', '.join(self.missing)})"
        )

    def to_dict(self) -> dict:
        return {
            "error": self.error,
            "message": self.message,
            "required": self.required,
        }


class PlaceValidationFailure(Exception):
    """Geocoding lookup failed or returned something unusable. Never fatal."""


class BrowserLaunchError(LeadScraperError):
    pass


class NavigationError(LeadScraperError):
    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Navigation to {url} failed: {reason}")


class ExtractionError(LeadScraperError):
    def __init__(self, url: str, reason: str, page_title: Optional[str] = None):
        self.url = url
        self.page_title = page_title
        detail = f"Result extraction from {url} failed: {reason}"
        if page_title:
            detail += f" (page title: {page_title!r})"
        super().__init__(detail)
