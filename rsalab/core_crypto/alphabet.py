"""
27-symbol alphabet codec: 'A'..'Z' -> 0..25, space -> 26.
"""

import re
from typing import Iterable, List


ALPHABET_SIZE = 27
SPACE_CODE = 26
PLACEHOLDER = "?"

_NON_ALPHABET = re.compile(r"[^A-Z ]+")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    Canonicalize text to the A-Z/space alphabet.

    Uppercases, turns every other character into a space, collapses
    whitespace runs and trims. Lossy by construction.
    """
    text = _NON_ALPHABET.sub(" ", text.upper())
    return _WHITESPACE.sub(" ", text).strip()


def symbol_to_int(ch: str) -> int:
    """Map 'A'..'Z' to 0..25 and space to 26."""
    if ch == " ":
        return SPACE_CODE
    if len(ch) == 1 and "A" <= ch <= "Z":
        return ord(ch) - ord("A")
    raise ValueError(f"Character {ch!r} is not in the A-Z/space alphabet")


def int_to_symbol(n: int) -> str:
    """
    Map 0..25 to 'A'..'Z' and 26 to space.

    Any other integer decodes to the placeholder '?' so the decoded text
    keeps one character per token.
    """
    if n == SPACE_CODE:
        return " "
    if 0 <= n <= 25:
        return chr(ord("A") + n)
    return PLACEHOLDER


def text_to_symbols(text: str) -> List[int]:
    """Normalize text and map it to symbol codes."""
    return [symbol_to_int(ch) for ch in normalize(text)]


def symbols_to_text(symbols: Iterable[int]) -> str:
    """Map symbol codes back to text, using the placeholder for invalid codes."""
    return "".join(int_to_symbol(s) for s in symbols)
