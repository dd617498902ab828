"""String normalisation utilities used to derive entity identifiers."""

from __future__ import annotations

import re

__all__ = ["pluralize", "snake_case", "split_words", "studly_case"]


_SEPARATORS = re.compile(r"[\s\-_]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_INVALID_IDENTIFIER = re.compile(r"[^0-9a-zA-Z]")

_UNCOUNTABLE = frozenset(
    {
        "audio",
        "data",
        "equipment",
        "feedback",
        "information",
        "media",
        "metadata",
        "money",
        "news",
        "series",
        "sheep",
        "species",
        "staff",
    }
)

_IRREGULAR = {
    "child": "children",
    "foot": "feet",
    "goose": "geese",
    "man": "men",
    "mouse": "mice",
    "ox": "oxen",
    "person": "people",
    "tooth": "teeth",
    "woman": "women",
}

_ES_SUFFIXES = ("s", "x", "z", "ch", "sh")
_F_TO_VES = {"leaf", "life", "knife", "wife", "half", "shelf", "wolf", "thief"}


def _collapse_whitespace(value: str) -> str:
    return " ".join(value.split())


def split_words(value: str) -> list[str]:
    """Split ``value`` on separators and camel case boundaries."""

    words: list[str] = []
    for chunk in _SEPARATORS.split(_collapse_whitespace(value)):
        chunk = _INVALID_IDENTIFIER.sub("", chunk)
        if chunk:
            words.extend(part for part in _CAMEL_BOUNDARY.split(chunk) if part)
    return words


def studly_case(value: str) -> str:
    """Return ``value`` with the first letter of each word upper-cased.

    The remaining letters of each word are preserved, so ``"ProductCategory"``
    and ``"product category"`` both normalise to ``"ProductCategory"``.
    """

    return "".join(word[0].upper() + word[1:] for word in split_words(value))


def snake_case(value: str) -> str:
    """Return ``value`` as lower case words joined by underscores."""

    return "_".join(word.lower() for word in split_words(value))


def _match_case(source: str, target: str) -> str:
    if source.isupper() and len(source) > 1:
        return target.upper()
    if source[:1].isupper():
        return target[:1].upper() + target[1:]
    return target


def _pluralize_word(word: str) -> str:
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return word
    if lower in _IRREGULAR:
        return _match_case(word, _IRREGULAR[lower])
    if lower in _F_TO_VES:
        stem = word[:-2] if lower.endswith("fe") else word[:-1]
        return stem + ("VES" if word.isupper() else "ves")

    suffix = "s"
    stem = word
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        stem, suffix = word[:-1], "ies"
    elif lower.endswith(_ES_SUFFIXES):
        suffix = "es"
    return stem + (suffix.upper() if word.isupper() and len(word) > 1 else suffix)


def pluralize(value: str) -> str:
    """Return the English plural of ``value``.

    Only the last camel case word is inflected: ``"ProductCategory"`` becomes
    ``"ProductCategories"``.
    """

    if not value:
        return value

    words = _CAMEL_BOUNDARY.split(value)
    head, last = "".join(words[:-1]), words[-1]
    return head + _pluralize_word(last)
