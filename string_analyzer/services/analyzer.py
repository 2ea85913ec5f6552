import hashlib
from collections import Counter
from typing import Callable, Dict, List

from string_analyzer.models.string_record import PropertyReport

Hasher = Callable[[str], str]


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of the raw UTF-8 bytes of a string"""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def fold_char(ch: str) -> str:
    """
    Case-fold a single character.
    Characters whose lowercase form spans several code points (e.g. 'İ')
    are kept as-is so folding never changes the character count.
    """
    lowered = ch.lower()
    return lowered if len(lowered) == 1 else ch


def fold(text: str) -> List[str]:
    return [fold_char(ch) for ch in text]


def is_palindrome(text: str) -> bool:
    """Check if string is palindrome (case-insensitive, all characters kept)"""
    folded = fold(text)
    return folded == folded[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct characters, case-insensitive"""
    return len(set(fold(text)))


def count_words(text: str) -> int:
    """Count words separated by runs of whitespace"""
    return len(text.split())


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get case-insensitive frequency map of every character"""
    return dict(Counter(fold(text)))


def analyze(value: str, hasher: Hasher = compute_sha256) -> PropertyReport:
    """Analyze a string and return all computed properties"""
    return PropertyReport(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=count_unique_characters(value),
        word_count=count_words(value),
        sha256_hash=hasher(value),
        character_frequency_map=get_character_frequency(value),
    )
