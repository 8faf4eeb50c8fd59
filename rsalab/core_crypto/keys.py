"""
RSA Key Generation

Small-modulus RSA key pairs for the classroom lab. Primes are drawn from a
two-digit range by default so the cryptanalysis engine can brute-force the
private exponent.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Optional, Tuple

from .rsa_math import (
    gcd, mod_inverse, is_prime, primes_in_range, random_prime, choose_e,
    RSAMathError, NoPrimeInRangeError, ModulusTooSmallError, NotInvertibleError,
)


# ============================================================================
# Constants
# ============================================================================

MIN_PRIME = 7
MAX_PRIME = 97
MIN_MODULUS = 29  # 27 symbols plus margin


# ============================================================================
# Key Pair (Immutable)
# ============================================================================

@dataclass(frozen=True)
class KeyPair:
    """
    Immutable RSA key pair with its generating primes.

    Construction validates n >= 29, gcd(e, phi) = 1 and e*d = 1 (mod phi).
    """
    p: int
    q: int
    n: int
    phi: int
    e: int
    d: int

    def __post_init__(self):
        if not (is_prime(self.p) and is_prime(self.q)):
            raise RSAMathError("p and q must both be prime")
        if self.p == self.q:
            raise RSAMathError("p and q must be distinct")
        if self.n != self.p * self.q:
            raise RSAMathError("n must equal p * q")
        if self.phi != (self.p - 1) * (self.q - 1):
            raise RSAMathError("phi must equal (p - 1)(q - 1)")
        if self.n < MIN_MODULUS:
            raise ModulusTooSmallError(
                f"Modulus {self.n} is too small for the 27-symbol alphabet (need >= {MIN_MODULUS})"
            )
        if gcd(self.e, self.phi) != 1:
            raise NotInvertibleError(f"e = {self.e} is not coprime to phi = {self.phi}")
        if (self.e * self.d) % self.phi != 1:
            raise RSAMathError("d is not the inverse of e modulo phi")

    @classmethod
    def from_primes(cls, p: int, q: int, e: Optional[int] = None) -> 'KeyPair':
        """
        Build a key pair from two known primes.

        Args:
            p: First prime
            q: Second prime (distinct from p)
            e: Public exponent; chosen with choose_e() when omitted

        Returns:
            New KeyPair
        """
        phi = (p - 1) * (q - 1)
        if e is None:
            e = choose_e(phi)
        d = mod_inverse(e, phi)
        return cls(p=p, q=q, n=p * q, phi=phi, e=e, d=d)

    @property
    def public_key(self) -> Tuple[int, int]:
        """Public key (e, n)."""
        return self.e, self.n

    @property
    def private_key(self) -> Tuple[int, int]:
        """Private key (d, n)."""
        return self.d, self.n

    def to_dict(self) -> Dict[str, int]:
        """Return all key components as a plain dict."""
        return asdict(self)

    def __repr__(self) -> str:
        return f"KeyPair(n={self.n}, e={self.e})"


# ============================================================================
# Generation
# ============================================================================

def _check_prime_range(min_prime: int, max_prime: int) -> None:
    primes = primes_in_range(min_prime, max_prime)
    if len(primes) < 2:
        raise NoPrimeInRangeError(
            f"Need two distinct primes in [{min_prime}, {max_prime}], found {len(primes)}"
        )
    if primes[-1] * primes[-2] < MIN_MODULUS:
        raise ModulusTooSmallError(
            f"Largest modulus from [{min_prime}, {max_prime}] is "
            f"{primes[-1] * primes[-2]}, need >= {MIN_MODULUS}"
        )


def generate_keypair(min_prime: int = MIN_PRIME, max_prime: int = MAX_PRIME) -> KeyPair:
    """
    Generate a small-modulus RSA key pair.

    Draws p, then a distinct q, from [min_prime, max_prime] and redraws both
    while n = p*q < 29. Then e = choose_e(phi) and d = e^-1 mod phi.

    Args:
        min_prime: Lower bound for p and q
        max_prime: Upper bound for p and q

    Returns:
        New KeyPair

    Raises:
        NoPrimeInRangeError: If the range holds fewer than two primes
        ModulusTooSmallError: If no pair of primes in range reaches n >= 29
    """
    _check_prime_range(min_prime, max_prime)

    while True:
        p = random_prime(min_prime, max_prime)
        q = random_prime(min_prime, max_prime)
        while q == p:
            q = random_prime(min_prime, max_prime)

        if p * q >= MIN_MODULUS:
            break

    return KeyPair.from_primes(p, q)
