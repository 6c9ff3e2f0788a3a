"""String helpers shared by the ETL layer.

Two jobs live here:

• **Normalisation** – turn a display title into a comparison key
  ("Marvel's Spider-Man 2" → "marvels spider man 2").
• **Similarity** – Sørensen–Dice coefficient over character bigrams, the only
  signal the resolver uses to decide whether two titles are the same game.
"""

from __future__ import annotations

import re
from typing import Set

_RE_NON_WORD = re.compile(r"[^\w\s]|_")
_RE_WHITESPACE = re.compile(r"\s+")

# Whole-token match only; the empty string is never passed in because we split on whitespace
_RE_ROMAN_NUMERAL = re.compile(
    r"^M{0,3}(CM|CD|D?C{0,3})(XC|XL|L?X{0,3})(IX|IV|V?I{0,3})$",
    re.IGNORECASE,
)

ROMAN_NUMERALS = {"I": 1, "V": 5, "X": 10, "L": 50, "C": 100, "D": 500, "M": 1000}


def normalize(text: str) -> str:
    """Return a lower-cased, punctuation-free, single-spaced copy of *text*."""

    text = text.lower().replace("-", " ")
    text = _RE_NON_WORD.sub("", text)
    return _RE_WHITESPACE.sub(" ", text).strip()


def roman_numeral_value(token: str) -> int:
    """Evaluate a Roman numeral (subtractive notation), e.g. ``"XIV"`` → 14."""

    total = 0
    previous = 0
    for char in reversed(token.upper()):
        value = ROMAN_NUMERALS[char]
        if value >= previous:
            total += value
        else:
            total -= value
        previous = value
    return total


def convert_roman_numerals(text: str) -> str:
    """Replace every whitespace-separated Roman numeral token with its digits.

    ``"Part II"`` → ``"Part 2"``; tokens that are not numerals are left alone.
    Strings without any numeral token (including ``""``) come back unchanged.
    """

    tokens = text.split()
    if not any(_RE_ROMAN_NUMERAL.match(tok) for tok in tokens):
        return text
    return " ".join(
        str(roman_numeral_value(tok)) if _RE_ROMAN_NUMERAL.match(tok) else tok
        for tok in tokens
    )


def normalize_alias(text: str) -> str:
    """Comparison key used by alias ledgers and the pool's alias cache."""

    return convert_roman_numerals(normalize(text))


def bigrams(text: str) -> Set[str]:
    """Set of contiguous two-character substrings of *text*."""

    return {text[i:i + 2] for i in range(len(text) - 1)}


def dice_coefficient(a: str, b: str) -> float:
    """Sørensen–Dice similarity of *a* and *b* in ``[0, 1]``.

    Two strings without any bigram (both shorter than two characters) are
    non-comparable and score ``0.0`` so they can never clear a merge threshold.
    """

    bigrams_a = bigrams(a)
    bigrams_b = bigrams(b)
    total = len(bigrams_a) + len(bigrams_b)
    if total == 0:
        return 0.0
    return 2 * len(bigrams_a & bigrams_b) / total


__all__ = [
    "normalize",
    "roman_numeral_value",
    "convert_roman_numerals",
    "normalize_alias",
    "bigrams",
    "dice_coefficient",
]
