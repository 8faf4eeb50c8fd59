"""
RSA Mathematical Operations Implementation

Implements the number theory behind the classroom RSA lab:
- Modular exponentiation (square-and-multiply algorithm)
- Trial-division primality testing
- Random prime sampling within a bounded range
- Public exponent selection
- Extended Euclidean Algorithm for modular inverse

Note: All arithmetic uses exact Python integers. The moduli are kept tiny
      on purpose so the cryptanalysis demo can brute-force them; nothing
      here is secure.
"""

import math
import secrets
from typing import List, Tuple


# ============================================================================
# Constants
# ============================================================================

PREFERRED_EXPONENTS = (3, 5, 17, 257)


# ============================================================================
# Errors
# ============================================================================

class RSAMathError(ValueError):
    """Base class for errors raised by the RSA lab."""
    pass


class NotInvertibleError(RSAMathError):
    """Raised when gcd(a, m) != 1 so no modular inverse exists."""
    pass


class NoPrimeInRangeError(RSAMathError):
    """Raised when a prime range cannot supply the requested primes."""
    pass


class NoValidExponentError(RSAMathError):
    """Raised when no public exponent coprime to phi exists below phi."""
    pass


class ModulusTooSmallError(RSAMathError):
    """Raised when n cannot represent the 27-symbol alphabet."""
    pass


class InvalidCiphertextTokenError(RSAMathError):
    """Raised by strict ciphertext parsing on a malformed token."""
    pass


# ============================================================================
# Arithmetic
# ============================================================================

def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """
    Modular exponentiation using square-and-multiply algorithm.

    Algorithm (right-to-left binary method):
    1. Reduce base modulo modulus, start with result = 1
    2. For each bit of exponent (from LSB to MSB):
       - If bit is 1, multiply result by base (mod modulus)
       - Square the base (mod modulus)

    Args:
        base: The base number
        exponent: The exponent (must be non-negative)
        modulus: The modulus (must be positive)

    Returns:
        (base^exponent) mod modulus

    Raises:
        ValueError: If exponent < 0 or modulus <= 0
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    if modulus <= 0:
        raise ValueError("Modulus must be positive")
    if modulus == 1:
        return 0

    base = base % modulus
    result = 1

    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1

    return result


def gcd(a: int, b: int) -> int:
    """
    Compute the greatest common divisor using Euclidean algorithm.

    gcd(0, 0) is defined as 0.
    """
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean Algorithm (iterative).

    Finds integers x, y such that: a*x + b*y = gcd(a, b)

    Returns:
        Tuple (gcd, x, y)
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1

    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y

    return old_r, old_x, old_y


def mod_inverse(e: int, phi: int) -> int:
    """
    Compute modular multiplicative inverse using Extended Euclidean Algorithm.

    Finds d in [0, phi - 1] such that (e * d) mod phi = 1

    Args:
        e: The number to find inverse of
        phi: The modulus (must be positive)

    Returns:
        Modular inverse of e mod phi

    Raises:
        NotInvertibleError: If gcd(e, phi) != 1
    """
    if phi <= 0:
        raise ValueError("Modulus must be positive")

    g, x, _ = extended_gcd(e % phi, phi)
    if g != 1:
        raise NotInvertibleError(f"{e} is not invertible modulo {phi} (gcd = {g})")

    return ((x % phi) + phi) % phi


# ============================================================================
# Primes
# ============================================================================

def is_prime(n: int) -> bool:
    """Trial division primality test up to sqrt(n)."""
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2

    for i in range(3, math.isqrt(n) + 1, 2):
        if n % i == 0:
            return False
    return True


def primes_in_range(min_value: int, max_value: int) -> List[int]:
    """List all primes p with min_value <= p <= max_value."""
    return [p for p in range(max(min_value, 2), max_value + 1) if is_prime(p)]


def _has_prime(min_value: int, max_value: int) -> bool:
    for candidate in range(max(min_value, 2), max_value + 1):
        if is_prime(candidate):
            return True
    return False


def random_prime(min_value: int, max_value: int) -> int:
    """
    Sample a random prime in [min_value, max_value].

    Draws integers uniformly from the range, bumps even draws to the next
    odd number, and retries until a prime lands inside the range.

    Raises:
        NoPrimeInRangeError: If the range contains no prime
    """
    if min_value > max_value or not _has_prime(min_value, max_value):
        raise NoPrimeInRangeError(f"No prime in range [{min_value}, {max_value}]")

    span = max_value - min_value + 1
    while True:
        candidate = min_value + secrets.randbelow(span)
        if candidate % 2 == 0 and candidate != 2:
            candidate += 1
        if candidate <= max_value and is_prime(candidate):
            return candidate


# ============================================================================
# Exponent selection
# ============================================================================

def choose_e(phi: int) -> int:
    """
    Pick a public exponent e with 1 < e < phi and gcd(e, phi) = 1.

    The common exponents (3, 5, 17, 257) are tried first, in that order.
    Otherwise odd integers from 3 upward are scanned.

    Raises:
        NoValidExponentError: If phi <= 2 or no exponent exists below phi
    """
    if phi <= 2:
        raise NoValidExponentError(f"No valid public exponent for phi = {phi}")

    for candidate in PREFERRED_EXPONENTS:
        if candidate < phi and gcd(candidate, phi) == 1:
            return candidate

    for candidate in range(3, phi, 2):
        if gcd(candidate, phi) == 1:
            return candidate

    raise NoValidExponentError(f"No valid public exponent for phi = {phi}")
