# Core Cryptography Module
"""
Core RSA lab implementations including:
- Number theory (mod_exp, gcd, modular inverse, primes)
- Small-modulus key generation
- A-Z/space alphabet codec
- Symbol-by-symbol RSA cipher
"""
