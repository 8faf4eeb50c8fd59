"""
Letter Frequency Scoring

Computes 27-bin frequency vectors (A..Z, space) and compares them with a
reference English profile using mean-squared error. Lower MSE means the
text looks more like English.
"""

from typing import List, Sequence, Tuple

from ..core_crypto.alphabet import ALPHABET_SIZE, SPACE_CODE


# ============================================================================
# Reference Profile
# ============================================================================

# Standard English letter frequencies, space share approximated at 0.17
ENGLISH_FREQUENCY: Tuple[float, ...] = (
    0.08167,  # A
    0.01492,  # B
    0.02782,  # C
    0.04253,  # D
    0.12702,  # E
    0.02228,  # F
    0.02015,  # G
    0.06094,  # H
    0.06966,  # I
    0.00153,  # J
    0.00772,  # K
    0.04025,  # L
    0.02406,  # M
    0.06749,  # N
    0.07507,  # O
    0.01929,  # P
    0.00095,  # Q
    0.05987,  # R
    0.06327,  # S
    0.09056,  # T
    0.02758,  # U
    0.00978,  # V
    0.02360,  # W
    0.00150,  # X
    0.01974,  # Y
    0.00074,  # Z
    0.17000,  # space
)

SPACE_LABEL = "␣"


# ============================================================================
# Counting
# ============================================================================

def letter_counts(text: str) -> List[int]:
    """Count each of the 27 symbols; letters are case-insensitive, others ignored."""
    counts = [0] * ALPHABET_SIZE
    for ch in text.upper():
        if "A" <= ch <= "Z":
            counts[ord(ch) - ord("A")] += 1
        elif ch == " ":
            counts[SPACE_CODE] += 1
    return counts


def letter_frequency(text: str) -> List[float]:
    """
    Empirical 27-bin frequency vector of text.

    Returns an all-zero vector for text with no alphabet symbols.
    """
    counts = letter_counts(text)
    total = sum(counts)
    if total == 0:
        return [0.0] * ALPHABET_SIZE
    return [c / total for c in counts]


def mean_squared_error(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Average squared difference over the first min(len(a), len(b)) entries.

    Returns 0.0 when either vector is empty.
    """
    length = min(len(vec_a), len(vec_b))
    if length == 0:
        return 0.0
    return sum((vec_a[i] - vec_b[i]) ** 2 for i in range(length)) / length


def english_score(text: str) -> float:
    """MSE between the text's frequency profile and English."""
    return mean_squared_error(letter_frequency(text), ENGLISH_FREQUENCY)


def letter_histogram(text: str) -> Tuple[List[str], List[int]]:
    """(labels, counts) for a bar chart of the 27 symbols."""
    labels = [chr(ord("A") + i) for i in range(26)] + [SPACE_LABEL]
    return labels, letter_counts(text)
