"""Keyword Extractor

Frequency-based fallback labels for when structured concept extraction is
unavailable (LLM call failed, timed out or returned garbage).

    text -> lowercase -> non-letters to spaces -> tokens >= 4 chars
         -> drop stop words -> count -> most frequent first -> Capitalize

Ties keep first-seen order, so the output is deterministic.
"""
import re
import unicodedata
from collections import Counter
from typing import List

from models.diagram import Concept

DEFAULT_MAX_KEYWORDS = 8
MIN_TOKEN_LENGTH = 4
DEFAULT_FILLER_DESCRIPTION = "Key idea from the text"

# Runs of anything that is not a Unicode letter (digits and underscore included)
_NON_LETTER_RE = re.compile(r"[\W\d_]+")

# Connectives only; anything shorter than MIN_TOKEN_LENGTH is dropped anyway
STOP_WORDS = frozenset({
    # English
    "about", "above", "after", "again", "also", "been", "before", "being",
    "below", "between", "both", "does", "doing", "down", "during", "each",
    "every", "from", "further", "have", "having", "here", "into", "just",
    "more", "most", "only", "other", "over", "same", "should", "some",
    "such", "than", "that", "their", "them", "then", "there", "these",
    "they", "this", "those", "through", "under", "until", "very", "were",
    "what", "when", "where", "which", "while", "will", "with", "would",
    "your", "could", "because", "upon", "within", "without",
    # Turkish
    "ama", "ancak", "bazı", "belki", "bile", "birçok", "biri", "birkaç",
    "böyle", "bunu", "bunun", "bunlar", "çünkü", "daha", "dolayı", "eğer",
    "gibi", "göre", "hangi", "hatta", "hem", "hiç", "için", "ile", "ise",
    "kadar", "karşı", "kendi", "nasıl", "neden", "olan", "olarak", "oldu",
    "olduğu", "olmak", "onun", "şey", "şimdi", "şöyle", "şunu", "sonra",
    "tüm", "üzere", "veya", "yani", "yine", "zaten", "değil", "diğer",
    "gerek", "ayrıca", "aynı", "arasında", "bile", "bütün",
})


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def extract_keywords(text: str, max: int = DEFAULT_MAX_KEYWORDS) -> List[str]:
    """Most frequent content words in `text`, capitalized, at most `max`.

    Never raises: non-string text or a non-positive max gives [].
    """
    if not isinstance(text, str) or not text:
        return []
    try:
        limit = int(max)
    except (TypeError, ValueError):
        return []
    if limit <= 0:
        return []

    # NFC keeps accents attached; "İ".lower() would leave a stray combining dot
    normalized = unicodedata.normalize("NFC", text).replace("İ", "i")
    tokens = _NON_LETTER_RE.sub(" ", normalized.lower()).split()
    counts = Counter(
        token for token in tokens
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    )
    # most_common sorts stably, so equal counts stay in first-seen order
    return [_capitalize(word) for word, _ in counts.most_common(limit)]


def concepts_from_text(text: str, max: int = DEFAULT_MAX_KEYWORDS,
                       filler: str = DEFAULT_FILLER_DESCRIPTION) -> List[Concept]:
    """Fallback concept list: one Concept per keyword with a generic description."""
    return [Concept(name=word, description=filler) for word in extract_keywords(text, max)]
