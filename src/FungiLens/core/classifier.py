"""Shape-based value classification.

Decides how a value should be presented purely from its runtime shape, and
how high it should sort in a field listing. The category depends on the value
only; the field name may shift the priority but never the category.

The check order below is significant: the first matching rule wins.
"""

from __future__ import annotations

import re
import warnings
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Final, Mapping, Sequence

from dateutil import parser as date_parser


class Category(str, Enum):
    """Closed set of presentation categories."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    NAME = "name"
    TAG = "tag"
    MEDIA = "media"
    TEXT = "text"
    STRING_LIST = "string-list"
    SIMPLE_LIST = "simple-list"
    OBJECT_LIST = "object-list"
    RANGE = "range"
    GEO = "geo"
    NESTED = "nested"
    FALLBACK = "fallback"


# Variants refine a category without widening the closed set.
IMAGE: Final = "image"
DATE: Final = "date"
EMPTY: Final = "empty"
FREE_TEXT: Final = "text"


@dataclass(frozen=True, slots=True)
class Classification:
    """Presentation category and display priority of one value."""

    category: Category
    priority: int
    variant: str | None = None


_BASE_PRIORITY: Final[dict[tuple[Category, str | None], int]] = {
    (Category.NAME, None): 900,
    (Category.MEDIA, IMAGE): 850,
    (Category.TAG, None): 750,
    (Category.TEXT, None): 700,
    (Category.RANGE, None): 680,
    (Category.NUMBER, None): 650,
    (Category.BOOLEAN, None): 600,
    (Category.SIMPLE_LIST, None): 550,
    (Category.STRING_LIST, FREE_TEXT): 550,
    (Category.STRING_LIST, EMPTY): 550,
    (Category.OBJECT_LIST, None): 550,
    (Category.NESTED, None): 400,
    (Category.GEO, None): 350,
    (Category.MEDIA, DATE): 200,
    (Category.FALLBACK, None): 100,
}
_DEFAULT_PRIORITY: Final = 500

# (substrings, priority delta); every matching group applies.
_NAME_HINTS: Final[tuple[tuple[tuple[str, ...], int], ...]] = (
    (("edib", "toxic", "safe", "poison", "deadly", "lookalike", "danger"), 300),
    (("habitat", "season", "location", "substrate"), 70),
    (("description", "summary"), 40),
    (("scientific", "taxonomy", "classification", "research"), -50),
    (("created", "updated", "modified", "slug"), -500),
)
_IDENTITY_WORDS: Final = ("name", "title")
_IDENTITY_BONUS: Final = 100

_IMAGE_EXT_RE = re.compile(r"\.(jpg|jpeg|png|gif|webp|svg|ico|bmp)$", re.IGNORECASE)
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}:\d{2})?")
_DIGIT_RE = re.compile(r"\d")
_WORD_SPLIT_RE = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]+(?![a-z])")

TAG_MAX_LENGTH: Final = 15
NAME_MAX_LENGTH: Final = 30
TAG_LIST_MAX_AVG_LENGTH: Final = 20


def is_image_reference(text: str) -> bool:
    """Return whether a string looks like an image path or URL."""
    if text.startswith("data:image"):
        return True
    url_like = text.startswith("http") or text.startswith("/")
    return url_like and (bool(_IMAGE_EXT_RE.search(text)) or "image" in text.lower())


def is_date_string(text: str) -> bool:
    """Return whether a string reads as a date.

    ISO-like prefixes are accepted directly. Anything else must contain a digit
    and be accepted by ``dateutil``; bare month or weekday words are not dates.
    """
    if _ISO_DATE_RE.match(text):
        return True
    if not _DIGIT_RE.search(text):
        return False
    # Timezone names are irrelevant here and would otherwise warn.
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            date_parser.parse(text, ignoretz=True)
        except (ValueError, OverflowError):
            return False
    return True


def field_name_words(field_name: str) -> list[str]:
    """Split a camelCase or snake_case field name into lower-case words."""
    return [w.lower() for w in _WORD_SPLIT_RE.findall(field_name or "")]


class ValueClassifier:
    """Classify values for presentation.

    Stateless; instances may be shared freely.
    """

    def classify(self, value: Any, field_name: str = "") -> Classification:
        """Classify a value and compute its display priority.

        Args:
            value: Any value found in a document, including None.
            field_name: Optional field name used as a priority hint only.

        Returns:
            The classification. Never raises.
        """
        category, variant = self.categorize(value)
        return Classification(
            category=category,
            variant=variant,
            priority=self.priority(category, variant, field_name),
        )

    def categorize(self, value: Any) -> tuple[Category, str | None]:
        if isinstance(value, bool):
            return Category.BOOLEAN, None
        if isinstance(value, (int, float)):
            return Category.NUMBER, None
        if isinstance(value, str):
            return self._categorize_string(value)
        if isinstance(value, (datetime, date)):
            return Category.MEDIA, DATE
        if isinstance(value, (list, tuple)):
            return self._categorize_sequence(value)
        if isinstance(value, Mapping):
            return self._categorize_mapping(value)
        return Category.FALLBACK, None

    def priority(self, category: Category, variant: str | None, field_name: str = "") -> int:
        """Return base priority for a category adjusted by field-name hints."""
        priority = _BASE_PRIORITY.get((category, variant), _DEFAULT_PRIORITY)
        if not field_name:
            return priority

        lowered = field_name.lower()
        for needles, delta in _NAME_HINTS:
            if any(needle in lowered for needle in needles):
                priority += delta
        if any(word in lowered for word in _IDENTITY_WORDS) or "id" in field_name_words(field_name):
            priority += _IDENTITY_BONUS
        return priority

    def _categorize_string(self, value: str) -> tuple[Category, str | None]:
        text = value.strip()
        if not text:
            return Category.FALLBACK, None
        if is_image_reference(text):
            return Category.MEDIA, IMAGE
        if is_date_string(text):
            return Category.MEDIA, DATE
        single_line = "\n" not in text
        if single_line and len(text) < TAG_MAX_LENGTH:
            return Category.TAG, None
        if single_line and len(text) < NAME_MAX_LENGTH:
            return Category.NAME, None
        return Category.TEXT, None

    def _categorize_sequence(self, value: Sequence[Any]) -> tuple[Category, str | None]:
        if not value:
            return Category.STRING_LIST, EMPTY
        first = value[0]
        if isinstance(first, str):
            total = sum(len(item) if isinstance(item, str) else 0 for item in value)
            if total / len(value) < TAG_LIST_MAX_AVG_LENGTH:
                return Category.TAG, None
            return Category.STRING_LIST, FREE_TEXT
        if isinstance(first, Mapping):
            return Category.OBJECT_LIST, None
        return Category.SIMPLE_LIST, None

    def _categorize_mapping(self, value: Mapping[str, Any]) -> tuple[Category, str | None]:
        if "min" in value and "max" in value:
            return Category.RANGE, None
        if "lat" in value and ("lng" in value or "lon" in value):
            return Category.GEO, None
        if "latitude" in value and "longitude" in value:
            return Category.GEO, None
        return Category.NESTED, None


_default_classifier = ValueClassifier()


def classify(value: Any, field_name: str = "") -> Classification:
    """Classify with a shared stateless classifier."""
    return _default_classifier.classify(value, field_name)
