"""
RSA Lab Session

Ties key generation, the cipher and the cryptanalysis engine together
for one classroom session, recording each step in an EventLogger.
"""

from typing import List, Optional, Tuple

from ..core_crypto.keys import KeyPair, generate_keypair, MIN_PRIME, MAX_PRIME
from ..core_crypto.cipher import (
    Ciphertext, encrypt, decrypt, coerce_ciphertext, format_ciphertext,
    ciphertext_histogram,
)
from ..analysis.cryptanalysis import (
    AnalysisConfig, CryptanalysisResult, analyze, METHOD_PHI,
)
from .event_logger import EventLogger


class RSALab:
    """
    One lab session: a current key pair plus an event log.

    The key pair is only ever replaced as a whole by regenerate().

    Example:
        >>> lab = RSALab()
        >>> tokens = lab.encrypt("attack at dawn")
        >>> lab.decrypt(tokens)
        'ATTACK AT DAWN'
    """

    def __init__(
        self,
        min_prime: int = MIN_PRIME,
        max_prime: int = MAX_PRIME,
        config: Optional[AnalysisConfig] = None,
        keys: Optional[KeyPair] = None,
        logger: Optional[EventLogger] = None
    ):
        self._min_prime = min_prime
        self._max_prime = max_prime
        self._config = config or AnalysisConfig()
        self._logger = logger or EventLogger()
        self._keys = keys or self.regenerate()

    @property
    def keys(self) -> KeyPair:
        return self._keys

    @property
    def config(self) -> AnalysisConfig:
        return self._config

    @property
    def logger(self) -> EventLogger:
        return self._logger

    def regenerate(self) -> KeyPair:
        """Replace the current key pair with a freshly generated one."""
        self._keys = generate_keypair(self._min_prime, self._max_prime)
        self._logger.log_keys_generated(
            self._keys.e, self._keys.n, self._min_prime, self._max_prime
        )
        return self._keys

    def encrypt(self, plaintext: str) -> List[int]:
        """Encrypt under the current public key."""
        tokens = encrypt(plaintext, self._keys.e, self._keys.n)
        self._logger.log_encrypt(plaintext, len(tokens), self._keys.e, self._keys.n)
        return tokens

    def encrypt_to_string(self, plaintext: str) -> str:
        return format_ciphertext(self.encrypt(plaintext))

    def decrypt(self, ciphertext: Ciphertext) -> str:
        """Decrypt with the current private key."""
        plaintext = decrypt(ciphertext, self._keys.d, self._keys.n)
        self._logger.log_decrypt(plaintext, len(plaintext), self._keys.n)
        return plaintext

    def analyze(
        self,
        ciphertext: Ciphertext,
        method: str = METHOD_PHI,
        public_key: Optional[Tuple[int, int]] = None
    ) -> CryptanalysisResult:
        """
        Attack ciphertext knowing only a public key.

        Args:
            ciphertext: Ciphertext values or raw string
            method: "phi" or "exhaustive"
            public_key: (e, n); defaults to the session's public key
        """
        e, n = public_key or self._keys.public_key
        tokens = coerce_ciphertext(ciphertext, n)

        self._logger.log_analysis_started(method, len(tokens), e, n)
        result = analyze(tokens, e, n, method=method, config=self._config)
        self._logger.log_analysis_finished(
            method=method,
            found=result.found,
            mse=result.mse,
            attempts=result.attempt_count,
            stop_reason=result.stop_reason.value,
            elapsed_ms=result.elapsed_ms,
        )
        return result

    @staticmethod
    def histogram(ciphertext: Ciphertext) -> Tuple[List[str], List[int]]:
        """Ciphertext token counts for the chart collaborator."""
        return ciphertext_histogram(ciphertext)

    def __repr__(self) -> str:
        return f"RSALab(keys={self._keys!r}, events={len(self._logger)})"
