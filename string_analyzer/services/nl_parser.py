"""
Keyword-driven translation of "natural language" queries into filters.

This is a fixed vocabulary, not language understanding. Each rule pairs a
regex (run against the normalized query) with a handler producing filter
fields. Rules run in table order and later rules override earlier ones for
the same field. A negation ("not", "no", "non") directly before a phrase
cancels that phrase. Anything the table does not recognize is ignored.

Examples:
- "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
- "strings longer than 10 characters"   -> {min_length: 11}
- "strings containing the letter z"     -> {contains_character: "z"}
- "palindromes containing the first vowel" -> {is_palindrome: true, contains_character: "a"}
"""
import re
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from string_analyzer.models.string_record import FilterSet, InterpretedQuery

logger = logging.getLogger(__name__)

NUMBER_WORDS = {
    "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
    "eleven": 11, "twelve": 12, "thirteen": 13, "fourteen": 14, "fifteen": 15,
    "sixteen": 16, "seventeen": 17, "eighteen": 18, "nineteen": 19, "twenty": 20,
}

# Named characters resolve alphabetically: first vowel is 'a'
VOWELS_BY_ORDINAL = {
    "first": "a",
    "second": "e",
    "third": "i",
    "fourth": "o",
    "fifth": "u",
    "last": "u",
}

NUM = r"(?P<n>\d+|" + "|".join(NUMBER_WORDS) + r")\b"
UNIT = r"(?:characters?|chars?|letters?)\b"
# Quotes and trailing punctuation around a token, e.g. 'z' or "strings."
STRIP_CHARS = "\"'`.,;:!?()[]{}"
# Text ending in a negation, optionally followed by an article
NEGATION = re.compile(r"\b(?:not|non|no|isn't|aren't)\s+(?:(?:a|an)\s+)?$")

Handler = Callable[[re.Match], Optional[Dict[str, Any]]]


@dataclass(frozen=True)
class Rule:
    name: str
    pattern: re.Pattern
    handler: Handler
    # A negation word right before the match cancels the rule
    negatable: bool = True


def parse_number(token: str) -> int:
    if token.isdigit():
        return int(token)
    return NUMBER_WORDS[token]


def _number(match: re.Match) -> int:
    return parse_number(match.group("n"))


def _contains(match: re.Match) -> Dict[str, Any]:
    return {"contains_character": match.group("ch")}


def _vowel(match: re.Match) -> Dict[str, Any]:
    return {"contains_character": VOWELS_BY_ORDINAL[match.group("ordinal")]}


def _rule(name: str, pattern: str, handler: Handler, negatable: bool = True) -> Rule:
    return Rule(name=name, pattern=re.compile(pattern), handler=handler, negatable=negatable)


RULES: List[Rule] = [
    # Palindrome intent
    _rule(
        "palindrome",
        r"\bpalindrom(?:e|es|ic)\b",
        lambda m: {"is_palindrome": True},
    ),
    _rule(
        "non_palindrome",
        r"\b(?:non\s*|(?:not|isn't|aren't)\s+(?:(?:a|an)\s+)?|no\s+)palindrom(?:e|es|ic)\b",
        lambda m: {"is_palindrome": False},
        negatable=False,
    ),
    # Word counts
    _rule(
        "single_word",
        r"\b(?:single|one)\s+word\b",
        lambda m: {"word_count": 1},
    ),
    _rule(
        "word_count",
        r"(?<!than )(?<!least )(?<!most )\b" + NUM + r"\s+words?\b",
        lambda m: {"word_count": _number(m)},
    ),
    # Length comparators are exclusive of N
    _rule(
        "longer_than",
        r"\blonger\s+than\s+" + NUM,
        lambda m: {"min_length": _number(m) + 1},
    ),
    _rule(
        "more_than",
        r"\b(?:more|greater)\s+than\s+" + NUM + r"\s+" + UNIT,
        lambda m: {"min_length": _number(m) + 1},
    ),
    _rule(
        "shorter_than",
        r"\bshorter\s+than\s+" + NUM,
        lambda m: {"max_length": _number(m) - 1},
    ),
    _rule(
        "fewer_than",
        r"\b(?:fewer|less)\s+than\s+" + NUM + r"\s+" + UNIT,
        lambda m: {"max_length": _number(m) - 1},
    ),
    # Inclusive bounds
    _rule(
        "at_least",
        r"\bat\s+least\s+" + NUM + r"\s+" + UNIT,
        lambda m: {"min_length": _number(m)},
    ),
    _rule(
        "at_most",
        r"\b(?:at\s+most|no\s+more\s+than)\s+" + NUM + r"\s+" + UNIT,
        lambda m: {"max_length": _number(m)},
    ),
    _rule(
        "exact_length",
        r"\bexactly\s+" + NUM + r"\s+" + UNIT,
        lambda m: {"min_length": _number(m), "max_length": _number(m)},
    ),
    _rule(
        "length_long",
        r"\b" + NUM + r"\s+" + UNIT + r"\s+long\b",
        lambda m: {"min_length": _number(m), "max_length": _number(m)},
    ),
    # Character containment
    _rule(
        "contains_character",
        r"\b(?:containing|contains|contain|with|having|including|includes)\s+"
        r"(?:the\s+|a\s+|an\s+)?(?:letter|character|char)\s+(?P<ch>\S)(?=\s|$)",
        _contains,
    ),
    _rule(
        "named_vowel",
        r"\b(?P<ordinal>first|second|third|fourth|fifth|last)\s+vowel\b",
        _vowel,
    ),
]


def normalize(query: str) -> str:
    """Lower-case, split hyphenated words and strip quotes/punctuation from tokens"""
    tokens = []
    for token in query.lower().replace("-", " ").split():
        if len(token) > 1:
            token = token.strip(STRIP_CHARS)
        if token:
            tokens.append(token)
    return " ".join(tokens)


def parse(query: str, rules: Optional[List[Rule]] = None) -> InterpretedQuery:
    """
    Translate a query into structured filters. Never raises: an unrecognized
    query produces an empty filter set (match everything).
    """
    text = normalize(query)
    fields: Dict[str, Any] = {}
    matched = []

    for rule in RULES if rules is None else rules:
        for match in rule.pattern.finditer(text):
            if rule.negatable and NEGATION.search(text, 0, match.start()):
                continue
            updates = rule.handler(match)
            if updates:
                fields.update(updates)
                matched.append(rule.name)

    logger.debug(f"Parsed query '{query}' -> {fields} (rules: {matched})")
    return InterpretedQuery(original=query, parsed_filters=FilterSet(**fields))
