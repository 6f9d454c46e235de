"""
Word validation for letters rounds.
"""

import logging
import unicodedata
from collections import Counter
from functools import lru_cache
from typing import FrozenSet, Iterable, Optional

from config import DICTIONARY_PATH, EMPTY_SUBMISSION, INVALID_WORD

logger = logging.getLogger(__name__)


def normalize(word: str) -> str:
    """Uppercase, trim and strip diacritics ("café" -> "CAFE", "año" -> "ANO")."""
    decomposed = unicodedata.normalize("NFD", word.strip())
    return "".join(c for c in decomposed if not unicodedata.combining(c)).upper()


def make_dictionary(words: Iterable[str]) -> FrozenSet[str]:
    return frozenset(w for w in (normalize(w) for w in words) if w)


@lru_cache(maxsize=None)
def load_dictionary(path: str = DICTIONARY_PATH) -> FrozenSet[str]:
    """
    Read a word list: one word per line, blank lines and '#' comments ignored.
    Entries are normalised the same way submissions are.
    """
    with open(path, encoding="utf-8") as fh:
        words = [line for line in fh if line.strip() and not line.lstrip().startswith("#")]
    dictionary = make_dictionary(words)
    if not dictionary:
        raise ValueError(f"Dictionary {path} contains no words")
    logger.info("Loaded %d dictionary words from %s", len(dictionary), path)
    return dictionary


def can_form(word: str, pool: Iterable[str]) -> bool:
    """True if every letter of `word` can be matched to a distinct, unused pool letter."""
    available = Counter(normalize(letter) for letter in pool)
    needed = Counter(normalize(word))
    return all(available[ch] >= n for ch, n in needed.items())


def check_word(word: str, pool: Iterable[str], dictionary: FrozenSet[str]) -> Optional[str]:
    """Return None for a legal word, otherwise the rejection kind."""
    normalized = normalize(word or "")
    if not normalized:
        return EMPTY_SUBMISSION
    if not can_form(normalized, pool):
        return INVALID_WORD
    if normalized not in dictionary:
        return INVALID_WORD
    return None


def validate(word: str, pool: Iterable[str], dictionary: FrozenSet[str]) -> bool:
    return check_word(word, pool, dictionary) is None
