"""
RSALab - small-modulus RSA with frequency-based cryptanalysis.

A classroom demonstration. The primes are tiny on purpose; nothing in
this package is secure.
"""

from .core_crypto.rsa_math import (
    RSAMathError, NotInvertibleError, NoPrimeInRangeError,
    NoValidExponentError, ModulusTooSmallError, InvalidCiphertextTokenError,
)
from .core_crypto.keys import KeyPair, generate_keypair
from .core_crypto.cipher import encrypt, decrypt
from .analysis.cryptanalysis import (
    AnalysisConfig, CryptanalysisResult, analyze_exhaustive, analyze_phi_restricted,
)

__version__ = "1.0.0"

__all__ = [
    'KeyPair',
    'generate_keypair',
    'encrypt',
    'decrypt',
    'analyze_exhaustive',
    'analyze_phi_restricted',
    'AnalysisConfig',
    'CryptanalysisResult',
    'RSAMathError',
    'NotInvertibleError',
    'NoPrimeInRangeError',
    'NoValidExponentError',
    'ModulusTooSmallError',
    'InvalidCiphertextTokenError',
]
