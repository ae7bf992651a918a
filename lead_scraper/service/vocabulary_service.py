from dataclasses import dataclass, field
from typing import Optional

# =============================================================================
# Vocabulary
# =============================================================================

DEFAULT_POSITIONS = frozenset({
    "ceo", "cto", "cfo", "coo", "cmo", "cio", "ciso", "cpo",
    "founder", "cofounder", "owner", "partner", "president", "chairman",
    "vp", "svp", "evp", "director", "head", "manager", "supervisor",
    "engineer", "developer", "architect", "designer", "programmer",
    "analyst", "consultant", "accountant", "auditor", "advisor",
    "recruiter", "hr", "marketer", "salesperson", "executive",
    "scientist", "researcher", "doctor", "nurse", "lawyer", "attorney",
    "teacher", "professor", "principal", "officer", "administrator",
})

DEFAULT_INDUSTRIES = frozenset({
    "finance", "banking", "fintech", "insurance", "investment",
    "it", "software", "technology", "tech", "saas", "telecom",
    "healthcare", "pharma", "pharmaceutical", "biotech", "medical",
    "education", "edtech", "retail", "ecommerce", "fmcg",
    "manufacturing", "automotive", "aerospace", "construction",
    "energy", "oil", "mining", "logistics", "shipping", "transportation",
    "hospitality", "travel", "tourism", "media", "entertainment",
    "marketing", "advertising", "consulting", "legal", "agriculture",
    "textile", "chemical", "government", "nonprofit", "realty",
})


@dataclass(frozen=True)
class VocabularyMatcher:
    """Classifies single tokens against fixed position and industry term sets."""
    positions: frozenset[str] = field(default=DEFAULT_POSITIONS)
    industries: frozenset[str] = field(default=DEFAULT_INDUSTRIES)

    def match_position(self, token: str) -> Optional[str]:
        if token in self.positions:
            return token.upper()
        return None

    def match_industry(self, token: str) -> Optional[str]:
        if token in self.industries:
            return f"{token} industry"
        return None


def default_matcher() -> VocabularyMatcher:
    return VocabularyMatcher()
