"""
Frequency-Based RSA Cryptanalysis

Recovers plaintext from symbol-by-symbol RSA ciphertext knowing only the
public key (e, n). Every candidate private exponent d is tried by
decrypting the whole ciphertext; a candidate survives only if every token
decrypts to a symbol code in [0, 26], and survivors are ranked by the MSE
between their letter frequencies and English.

Search strategies:
- Exhaustive: d = 1, 2, ... below min(search_cap, n)
- Phi-restricted: guess phi in [floor(0.5 * n), n], derive d = e^-1 mod phi,
  and stop early once a candidate scores under the MSE threshold

Both are deterministic. The lowest MSE wins and ties keep the first
candidate seen. Neither strategy is guaranteed to find the real key: on
short or unusual text the most English-looking candidate may be wrong.
"""

import math
import time
from fractions import Fraction
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..core_crypto.alphabet import SPACE_CODE, symbols_to_text
from ..core_crypto.cipher import Ciphertext, coerce_ciphertext
from ..core_crypto.rsa_math import gcd, mod_exp, mod_inverse
from .frequency import english_score


# ============================================================================
# Constants
# ============================================================================

DEFAULT_SEARCH_CAP = 10000
DEFAULT_ATTEMPT_CAP = 5000
DEFAULT_MSE_THRESHOLD = 1e-4
DEFAULT_PHI_LOW_RATIO = 0.5

METHOD_EXHAUSTIVE = "exhaustive"
METHOD_PHI = "phi"


# ============================================================================
# Outcomes
# ============================================================================

class SkipReason(Enum):
    """Why a candidate was discarded without scoring."""
    NOT_INVERTIBLE = "not_invertible"
    SYMBOL_OUT_OF_RANGE = "symbol_out_of_range"


class StopReason(Enum):
    """Why a search stopped."""
    EMPTY_CIPHERTEXT = "empty_ciphertext"
    EXHAUSTED = "exhausted"
    ATTEMPT_CAP = "attempt_cap"
    THRESHOLD = "threshold"
    DEADLINE = "deadline"


@dataclass(frozen=True)
class CandidateOutcome:
    """Result of trying one private exponent: a scored candidate or a skip."""
    d: Optional[int]
    skip_reason: Optional[SkipReason] = None
    plaintext: str = ""
    mse: float = math.inf

    @property
    def is_valid(self) -> bool:
        return self.skip_reason is None


@dataclass(frozen=True)
class CryptanalysisResult:
    """
    Best candidate found by a search.

    plaintext is empty and mse is infinite when no candidate survived.
    attempt_count is the number of d (exhaustive) or phi (phi-restricted)
    values actually tried.
    """
    method: str
    plaintext: str = ""
    guessed_d: Optional[int] = None
    mse: float = math.inf
    attempt_count: int = 0
    phi_guess: Optional[int] = None
    stop_reason: StopReason = StopReason.EXHAUSTED
    elapsed_ms: float = 0.0

    @property
    def found(self) -> bool:
        return self.guessed_d is not None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['stop_reason'] = self.stop_reason.value
        return data


@dataclass
class AnalysisConfig:
    """Tuning knobs for the searches. The defaults suit two-digit primes."""
    search_cap: int = DEFAULT_SEARCH_CAP
    attempt_cap: int = DEFAULT_ATTEMPT_CAP
    mse_threshold: float = DEFAULT_MSE_THRESHOLD
    phi_low_ratio: float = DEFAULT_PHI_LOW_RATIO
    deadline_seconds: Optional[float] = None

    def __post_init__(self):
        if self.search_cap < 1:
            raise ValueError("search_cap must be positive")
        if self.attempt_cap < 1:
            raise ValueError("attempt_cap must be positive")
        if not 0 < self.phi_low_ratio <= 1:
            raise ValueError("phi_low_ratio must be in (0, 1]")
        if self.deadline_seconds is not None and self.deadline_seconds < 0:
            raise ValueError("deadline_seconds must be non-negative")


# ============================================================================
# Candidate Evaluation
# ============================================================================

def evaluate_candidate(tokens: Sequence[int], d: int, n: int) -> CandidateOutcome:
    """
    Decrypt every token with d and score the result.

    Skips as soon as one token decrypts outside [0, 26].
    """
    symbols = []
    for c in tokens:
        m = mod_exp(c, d, n)
        if m > SPACE_CODE:
            return CandidateOutcome(d=d, skip_reason=SkipReason.SYMBOL_OUT_OF_RANGE)
        symbols.append(m)

    plaintext = symbols_to_text(symbols)
    return CandidateOutcome(d=d, plaintext=plaintext, mse=english_score(plaintext))


def evaluate_phi_guess(tokens: Sequence[int], e: int, phi: int, n: int) -> CandidateOutcome:
    """Derive d from a guessed phi and evaluate it."""
    if gcd(e, phi) != 1:
        return CandidateOutcome(d=None, skip_reason=SkipReason.NOT_INVERTIBLE)
    return evaluate_candidate(tokens, mod_inverse(e, phi), n)


class _SearchState:
    """Running best-so-far for one search."""

    def __init__(self, deadline_seconds: Optional[float]):
        self._deadline_seconds = deadline_seconds
        self._started = time.perf_counter()
        self.best: Optional[CandidateOutcome] = None
        self.best_phi: Optional[int] = None
        self.attempts = 0

    def offer(self, outcome: CandidateOutcome, phi: Optional[int] = None) -> None:
        # strict comparison keeps the first candidate on ties
        if outcome.is_valid and (self.best is None or outcome.mse < self.best.mse):
            self.best = outcome
            self.best_phi = phi

    def expired(self) -> bool:
        if self._deadline_seconds is None:
            return False
        return time.perf_counter() - self._started >= self._deadline_seconds

    def result(self, method: str, stop_reason: StopReason) -> CryptanalysisResult:
        elapsed_ms = (time.perf_counter() - self._started) * 1000
        if self.best is None:
            return CryptanalysisResult(
                method=method,
                attempt_count=self.attempts,
                stop_reason=stop_reason,
                elapsed_ms=elapsed_ms,
            )
        return CryptanalysisResult(
            method=method,
            plaintext=self.best.plaintext,
            guessed_d=self.best.d,
            mse=self.best.mse,
            attempt_count=self.attempts,
            phi_guess=self.best_phi,
            stop_reason=stop_reason,
            elapsed_ms=elapsed_ms,
        )


def _prepare_tokens(ciphertext: Ciphertext, n: int) -> List[int]:
    if n <= 0:
        raise ValueError("Modulus must be positive")
    return coerce_ciphertext(ciphertext, n)


# ============================================================================
# Search Strategies
# ============================================================================

def analyze_exhaustive(
    ciphertext: Ciphertext,
    e: int,
    n: int,
    search_cap: int = DEFAULT_SEARCH_CAP,
    deadline_seconds: Optional[float] = None
) -> CryptanalysisResult:
    """
    Try every private exponent d with 1 <= d < min(search_cap, n).

    The public exponent is not needed by this strategy; it is accepted so
    both searches share one calling convention.

    Args:
        ciphertext: Ciphertext values or raw ciphertext string
        e: Public exponent
        n: Public modulus
        search_cap: Upper bound (exclusive) on d
        deadline_seconds: Optional wall-clock budget

    Returns:
        CryptanalysisResult with the lowest-MSE candidate
    """
    tokens = _prepare_tokens(ciphertext, n)
    state = _SearchState(deadline_seconds)
    if not tokens:
        return state.result(METHOD_EXHAUSTIVE, StopReason.EMPTY_CIPHERTEXT)

    limit = min(search_cap, n)
    for d in range(1, limit):
        if state.expired():
            return state.result(METHOD_EXHAUSTIVE, StopReason.DEADLINE)
        state.attempts += 1
        state.offer(evaluate_candidate(tokens, d, n))

    stop_reason = StopReason.EXHAUSTED if limit == n else StopReason.ATTEMPT_CAP
    return state.result(METHOD_EXHAUSTIVE, stop_reason)


def analyze_phi_restricted(
    ciphertext: Ciphertext,
    e: int,
    n: int,
    attempt_cap: int = DEFAULT_ATTEMPT_CAP,
    mse_threshold: float = DEFAULT_MSE_THRESHOLD,
    deadline_seconds: Optional[float] = None,
    phi_low_ratio: float = DEFAULT_PHI_LOW_RATIO
) -> CryptanalysisResult:
    """
    Search phi guesses in [floor(phi_low_ratio * n), n].

    phi(n) = n - p - q + 1, which sits between n/2 and n for two primes of
    similar size. For each guess coprime to e, d = e^-1 mod phi is tried.
    The scan stops once a candidate scores below mse_threshold, after
    attempt_cap guesses, or when the deadline passes.

    Args:
        ciphertext: Ciphertext values or raw ciphertext string
        e: Public exponent
        n: Public modulus
        attempt_cap: Maximum number of phi values to try
        mse_threshold: Early-exit score
        deadline_seconds: Optional wall-clock budget
        phi_low_ratio: Lower end of the phi range as a fraction of n

    Returns:
        CryptanalysisResult with the lowest-MSE candidate and its phi guess
    """
    tokens = _prepare_tokens(ciphertext, n)
    state = _SearchState(deadline_seconds)
    if not tokens:
        return state.result(METHOD_PHI, StopReason.EMPTY_CIPHERTEXT)

    low = max(math.floor(Fraction(phi_low_ratio) * n), 1)
    for phi in range(low, n + 1):
        if state.attempts >= attempt_cap:
            return state.result(METHOD_PHI, StopReason.ATTEMPT_CAP)
        if state.expired():
            return state.result(METHOD_PHI, StopReason.DEADLINE)

        state.attempts += 1
        state.offer(evaluate_phi_guess(tokens, e, phi, n), phi)

        if state.best is not None and state.best.mse < mse_threshold:
            return state.result(METHOD_PHI, StopReason.THRESHOLD)

    return state.result(METHOD_PHI, StopReason.EXHAUSTED)


def analyze(
    ciphertext: Ciphertext,
    e: int,
    n: int,
    method: str = METHOD_PHI,
    config: Optional[AnalysisConfig] = None
) -> CryptanalysisResult:
    """Run one of the search strategies with settings from an AnalysisConfig."""
    config = config or AnalysisConfig()

    if method == METHOD_PHI:
        return analyze_phi_restricted(
            ciphertext, e, n,
            attempt_cap=config.attempt_cap,
            mse_threshold=config.mse_threshold,
            deadline_seconds=config.deadline_seconds,
            phi_low_ratio=config.phi_low_ratio,
        )
    if method == METHOD_EXHAUSTIVE:
        return analyze_exhaustive(
            ciphertext, e, n,
            search_cap=config.search_cap,
            deadline_seconds=config.deadline_seconds,
        )
    raise ValueError(f"Unknown analysis method: {method!r}")
