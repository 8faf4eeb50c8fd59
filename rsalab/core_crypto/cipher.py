"""
Symbol-by-symbol RSA Cipher

Each normalized symbol m is encrypted independently as c = m^e mod n and
decrypted as m = c^d mod n. There is no padding or chaining, so equal
plaintext symbols always give equal ciphertext tokens; that weakness is
what the frequency attack exploits.

Ciphertext travels as whitespace-separated integers, e.g. "1 2 1234".
"""

import re
from collections import Counter
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .alphabet import text_to_symbols, symbols_to_text
from .keys import MIN_MODULUS
from .rsa_math import mod_exp, ModulusTooSmallError, InvalidCiphertextTokenError


Ciphertext = Union[str, Sequence[int]]

_TOKEN_SEPARATORS = re.compile(r"[\s,]+")


# ============================================================================
# Parsing / Formatting
# ============================================================================

def parse_ciphertext(
    raw: str,
    modulus: Optional[int] = None,
    strict: bool = False
) -> List[int]:
    """
    Parse a whitespace- or comma-separated list of integers.

    Args:
        raw: Raw ciphertext string
        modulus: When given, tokens outside [0, modulus - 1] are invalid
        strict: Raise on invalid tokens instead of dropping them

    Returns:
        Ciphertext values in order

    Raises:
        InvalidCiphertextTokenError: On an invalid token when strict is set
    """
    values = []
    for token in _TOKEN_SEPARATORS.split(raw.strip()):
        if not token:
            continue
        try:
            value = int(token, 10)
        except ValueError:
            if strict:
                raise InvalidCiphertextTokenError(f"Token {token!r} is not an integer")
            continue
        if modulus is not None and not 0 <= value < modulus:
            if strict:
                raise InvalidCiphertextTokenError(
                    f"Token {value} is outside [0, {modulus - 1}]"
                )
            continue
        values.append(value)
    return values


def coerce_ciphertext(ciphertext: Ciphertext, modulus: Optional[int] = None) -> List[int]:
    """Accept raw text or a sequence of ints and return the valid values."""
    if isinstance(ciphertext, str):
        return parse_ciphertext(ciphertext, modulus)
    return [
        value for value in ciphertext
        if modulus is None or 0 <= value < modulus
    ]


def format_ciphertext(values: Iterable[int]) -> str:
    """Render ciphertext values for transport."""
    return " ".join(str(v) for v in values)


# ============================================================================
# Encryption / Decryption
# ============================================================================

def encrypt(text: str, e: int, n: int) -> List[int]:
    """
    Encrypt text symbol by symbol under the public key (e, n).

    The text is normalized first, so lowercase letters and punctuation do
    not survive the round trip.

    Raises:
        ModulusTooSmallError: If n < 29
    """
    if n < MIN_MODULUS:
        raise ModulusTooSmallError(
            f"Modulus {n} is too small for the 27-symbol alphabet (need >= {MIN_MODULUS})"
        )
    return [mod_exp(m, e, n) for m in text_to_symbols(text)]


def decrypt(ciphertext: Ciphertext, d: int, n: int) -> str:
    """
    Decrypt ciphertext under the private key (d, n).

    Malformed tokens are dropped; values that do not decode to a symbol
    come out as '?'.
    """
    values = coerce_ciphertext(ciphertext, n)
    return symbols_to_text(mod_exp(c, d, n) for c in values)


# ============================================================================
# Chart data
# ============================================================================

def ciphertext_histogram(ciphertext: Ciphertext) -> Tuple[List[str], List[int]]:
    """
    Count ciphertext tokens for a bar chart.

    Returns:
        (labels, counts) with labels sorted numerically
    """
    counts = Counter(coerce_ciphertext(ciphertext))
    values = sorted(counts)
    return [str(v) for v in values], [counts[v] for v in values]
