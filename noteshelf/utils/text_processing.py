"""
Text processing utilities for names and letter case.

canonicalize() is the comparison key used to match user input against shelf
entries. The *_case() functions back the template case helpers.
"""

import re
from typing import List

# Whitespace and punctuation; underscore counts as punctuation
WORD_SEPARATORS = re.compile(r"[\W_]+")

# Words inside a separator-free chunk: acronyms, Capitalized words, lowercase runs
CASE_BOUNDARIES = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[^\W_A-Z]+")


def canonicalize(name: str) -> str:
    """
    Convert a name into its canonical comparison key (kebab-case fold).

    Lowercases every character, splits on whitespace and punctuation, drops
    empty words and joins the rest with hyphens. Total: any string is valid
    input and strings made only of punctuation give an empty result.

    Args:
        name: Arbitrary subject or note name

    Returns:
        Canonical form of the name

    Example:
        >>> canonicalize("The Quick Brown Fox: [It Jumps Over The Lazy Dog].")
        'the-quick-brown-fox-it-jumps-over-the-lazy-dog'
        >>> canonicalize("Year 1")
        'year-1'
    """
    words = WORD_SEPARATORS.split(name.lower())
    return "-".join(word for word in words if word)


def is_canonical(name: str) -> bool:
    """
    Check whether a name is visible to resolution.

    Names that are empty after canonicalization, or that differ from their
    canonical form (``_drafts``, ``My Notes``), are hidden.
    """
    canonical = canonicalize(name)
    return bool(canonical) and canonical == name


def split_words(text: str) -> List[str]:
    """
    Split text into words on punctuation, whitespace and case boundaries.

    Example:
        >>> split_words("XMLHttpRequest for the_win")
        ['XML', 'Http', 'Request', 'for', 'the', 'win']
    """
    words = []
    for chunk in WORD_SEPARATORS.split(text):
        if chunk:
            words.extend(CASE_BOUNDARIES.findall(chunk) or [chunk])
    return words


def upper_case(text: str) -> str:
    return " ".join(word.upper() for word in split_words(text))


def lower_case(text: str) -> str:
    return " ".join(word.lower() for word in split_words(text))


def kebab_case(text: str) -> str:
    return "-".join(word.lower() for word in split_words(text))


def snake_case(text: str) -> str:
    return "_".join(word.lower() for word in split_words(text))


def title_case(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in split_words(text))


def camel_case(text: str) -> str:
    """Upper camel case: ``"calculus notes"`` becomes ``"CalculusNotes"``."""
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(text))
