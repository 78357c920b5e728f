from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from app.core.config import Settings, get_settings


FIXED_TAG = "fixed"
INVESTMENT_TAG = "investment"

DEFAULT_FIXED_KEYWORDS = ("rent", "mortgage", "insurance", "subscription", "utilities", "loan")
DEFAULT_INVESTMENT_KEYWORDS = ("investment", "savings", "401k", "ira", "stocks", "crypto")


@dataclass(frozen=True)
class ClassificationTable:
    """Versioned keyword -> tag table used by the monthly rollup.

    A label (transaction category or transfer destination) carries a tag when
    any keyword mapped to that tag appears in it, case-insensitively.
    """

    version: str
    tags: Mapping[str, frozenset[str]] = field(default_factory=dict)

    @classmethod
    def from_keywords(
        cls,
        version: str,
        *,
        fixed: Iterable[str],
        investment: Iterable[str],
    ) -> "ClassificationTable":
        tags: dict[str, set[str]] = {}
        for keyword in fixed:
            tags.setdefault(keyword.lower(), set()).add(FIXED_TAG)
        for keyword in investment:
            tags.setdefault(keyword.lower(), set()).add(INVESTMENT_TAG)
        return cls(version=version, tags={key: frozenset(value) for key, value in tags.items()})

    def tags_for(self, label: str | None) -> frozenset[str]:
        if not label:
            return frozenset()
        lowered = label.lower()
        matched: set[str] = set()
        for keyword, keyword_tags in self.tags.items():
            if keyword in lowered:
                matched.update(keyword_tags)
        return frozenset(matched)

    def has_tag(self, label: str | None, tag: str) -> bool:
        return tag in self.tags_for(label)


DEFAULT_CLASSIFICATION = ClassificationTable.from_keywords(
    "2025.1",
    fixed=DEFAULT_FIXED_KEYWORDS,
    investment=DEFAULT_INVESTMENT_KEYWORDS,
)


def classification_from_settings(settings: Settings | None = None) -> ClassificationTable:
    settings = settings or get_settings()
    return ClassificationTable.from_keywords(
        settings.classification_version,
        fixed=settings.fixed_keyword_list,
        investment=settings.investment_keyword_list,
    )
