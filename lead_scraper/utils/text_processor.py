import re

# =============================================================================
# Text Processing Utilities
# =============================================================================

_WORD_PATTERN = re.compile(r"\w+")


class TextProcessor:
    @staticmethod
    def tokenize(text: str) -> list[str]:
        if not text:
            return []
        return _WORD_PATTERN.findall(text.lower())

    @staticmethod
    def capitalize_first(token: str) -> str:
        if not token:
            return token
        return token[0].upper() + token[1:]

    @staticmethod
    def normalize(value: str) -> str:
        return value.strip().lower()
