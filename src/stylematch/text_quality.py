"""
Pin text cleaning and embedding-quality classification.

Pin titles and descriptions are noisy: mis-decoded punctuation, bare URLs,
markdown-ish symbols, emoji-only captions and boilerplate like "new design".
This module turns them into a single embedding string and decides whether
that string is worth sending to the embedding provider at all.
"""

import re
from typing import Any, Iterable, List, Optional

from stylematch.models import PinTextAssessment, Product, TextQuality


_CONTROL_RE = re.compile(r"[\u0000-\u001F\u007F]")
_WHITESPACE_RE = re.compile(r"\s+")
_URL_RE = re.compile(r"https?://\S+", re.IGNORECASE)
_MARKUP_RE = re.compile(r"[#*_~`|<>\[\]{}()]")
_LETTER_RUN_RE = re.compile(r"[A-Za-z]{2,}")
_NUMERIC_ONLY_RE = re.compile(r"^[0-9\s\-_/.,]+$")

# Mis-decoded UTF-8 punctuation, replaced literally in this order. The bare
# "â€" prefix (closing quote whose last byte was lost) must come last.
_MOJIBAKE_REPLACEMENTS = (
    ("Â", ""),
    ("â€™", "'"),
    ("â€œ", '"'),
    ("â€“", "-"),
    ("â€”", "-"),
    ("â€¢", "-"),
    ("â€", '"'),
)

LOW_SIGNAL_PHRASES = frozenset({
    "new design",
    "neck design",
    "sleeves design",
    "sleeves designs",
})

# Any one of these is enough (given letters, not numeric, not boilerplate).
MIN_COMBINED_WORDS = 3
MIN_FIELD_WORDS = 2
MIN_COMBINED_CHARS = 28


def clean_text(value: Any) -> str:
    """Strip control characters, repair common mojibake, collapse whitespace."""
    if not isinstance(value, str):
        return ""

    text = _collapse(_CONTROL_RE.sub(" ", value))
    for broken, fixed in _MOJIBAKE_REPLACEMENTS:
        text = text.replace(broken, fixed)
    text = _collapse(text)

    if text == "-":
        return ""
    return text


def remove_urls(value: str) -> str:
    return _URL_RE.sub(" ", value)


def normalize_for_embedding(value: Optional[str]) -> str:
    """Drop markup-control characters and collapse whitespace."""
    if not value:
        return ""
    return _collapse(_MARKUP_RE.sub(" ", value))


def count_words(value: Optional[str]) -> int:
    if not value:
        return 0
    return len(value.split())


def has_meaningful_letters(value: str) -> bool:
    return bool(_LETTER_RUN_RE.search(value))


def is_mostly_numeric(value: str) -> bool:
    return bool(_NUMERIC_ONLY_RE.match(value))


def assess_pin_text(title: Any, description: Any) -> PinTextAssessment:
    """
    Build the embedding text for a pin and classify it.

    Title and description are cleaned independently, stripped of URLs and
    markup, then joined with ". ". The result is usable when it has a run of
    two or more letters, is not numeric-only, is not a known boilerplate
    phrase, and is long enough by at least one of the word/character
    thresholds.
    """
    title_clean = normalize_for_embedding(remove_urls(clean_text(title)))
    desc_clean = normalize_for_embedding(remove_urls(clean_text(description)))

    combined = ". ".join(part for part in (title_clean, desc_clean) if part).strip()

    long_enough = (
        count_words(combined) >= MIN_COMBINED_WORDS
        or count_words(desc_clean) >= MIN_FIELD_WORDS
        or count_words(title_clean) >= MIN_FIELD_WORDS
        or len(combined) >= MIN_COMBINED_CHARS
    )
    usable = (
        has_meaningful_letters(combined)
        and not is_mostly_numeric(combined)
        and combined.lower() not in LOW_SIGNAL_PHRASES
        and long_enough
    )

    if usable:
        return PinTextAssessment(
            embedding_text=combined,
            usable_for_embedding=True,
            text_quality=TextQuality.USABLE,
        )
    return PinTextAssessment()


def build_product_embedding_text(product: Product) -> str:
    """Name, brand, category and tags, cleaned and joined with ". "."""
    tags = " ".join(_non_empty(clean_text(tag) for tag in product.tags))
    chunks = _non_empty([
        clean_text(product.name),
        clean_text(product.brand),
        clean_text(product.category),
        tags,
    ])
    return normalize_for_embedding(". ".join(chunks))


def _collapse(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value).strip()


def _non_empty(values: Iterable[str]) -> List[str]:
    return [value for value in values if value]
