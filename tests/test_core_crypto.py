"""
Unit tests for Core Crypto modules.

Tests:
- RSA Math (mod_exp, gcd, inverse, primes, exponent choice)
- Key generation
- Alphabet codec
- Cipher
"""

import dataclasses

import pytest
from rsalab.core_crypto.rsa_math import (
    mod_exp, gcd, extended_gcd, mod_inverse, is_prime, primes_in_range,
    random_prime, choose_e, NotInvertibleError, NoPrimeInRangeError,
    NoValidExponentError,
)
from rsalab.core_crypto.keys import KeyPair, generate_keypair, MIN_MODULUS
from rsalab.core_crypto.alphabet import (
    normalize, symbol_to_int, int_to_symbol, text_to_symbols, symbols_to_text,
)
from rsalab.core_crypto.cipher import (
    encrypt, decrypt, parse_ciphertext, format_ciphertext, ciphertext_histogram,
)


class TestRSAMath:
    """Unit tests for the number theory kernel."""

    @pytest.mark.parametrize("base,exp,mod,expected", [
        (2, 10, 1000, 24),
        (3, 7, 13, 3),
        (5, 117, 19, 1),
        (7, 0, 13, 1),
        (0, 5, 13, 0),
    ])
    def test_mod_exp_known_values(self, base, exp, mod, expected):
        assert mod_exp(base, exp, mod) == expected

    def test_mod_exp_matches_builtin(self):
        """Square-and-multiply should agree with pow() on big integers."""
        assert mod_exp(123456789, 987654321, 10 ** 40 + 7) == pow(123456789, 987654321, 10 ** 40 + 7)

    def test_mod_exp_identities(self):
        """base^0 = 1 and base^1 = base mod m."""
        for m in (2, 29, 143, 3233):
            for base in (0, 1, 5, 200, 5000):
                assert mod_exp(base, 0, m) == 1
                assert mod_exp(base, 1, m) == base % m

    def test_mod_exp_rejects_negative_exponent(self):
        with pytest.raises(ValueError):
            mod_exp(2, -1, 13)

    def test_gcd(self):
        assert gcd(12, 18) == 6
        assert gcd(17, 120) == 1
        assert gcd(-4, 6) == 2
        assert gcd(0, 0) == 0

    def test_extended_gcd_bezout(self):
        for a, b in [(240, 46), (17, 3120), (7, 120), (5, 0)]:
            g, x, y = extended_gcd(a, b)
            assert g == gcd(a, b)
            assert a * x + b * y == g

    def test_mod_inverse(self):
        assert mod_inverse(17, 43) == 38
        assert mod_inverse(7, 120) == 103
        assert mod_inverse(17, 3120) == 2753

    def test_mod_inverse_in_range(self):
        for e in (3, 7, 11, 13):
            d = mod_inverse(e, 40)
            assert 0 <= d < 40
            assert (e * d) % 40 == 1

    def test_mod_inverse_not_invertible(self):
        """e = 4, phi = 8 share a factor."""
        with pytest.raises(NotInvertibleError):
            mod_inverse(4, 8)

    def test_is_prime(self):
        primes = [2, 3, 5, 7, 11, 13, 97, 101, 7919]
        composites = [-7, 0, 1, 4, 9, 15, 91, 100, 7917]
        assert all(is_prime(p) for p in primes)
        assert not any(is_prime(c) for c in composites)

    def test_primes_in_range(self):
        assert primes_in_range(7, 20) == [7, 11, 13, 17, 19]
        assert primes_in_range(0, 3) == [2, 3]
        assert primes_in_range(24, 28) == []

    def test_random_prime_in_range(self):
        for _ in range(50):
            p = random_prime(7, 97)
            assert 7 <= p <= 97
            assert is_prime(p)

    def test_random_prime_single_candidate(self):
        assert random_prime(90, 100) == 97
        assert random_prime(2, 2) == 2

    def test_random_prime_empty_range(self):
        """A range with no prime must fail instead of looping forever."""
        with pytest.raises(NoPrimeInRangeError):
            random_prime(8, 8)
        with pytest.raises(NoPrimeInRangeError):
            random_prime(24, 28)

    def test_choose_e_preference_order(self):
        """3 and 5 divide 120, so 17 is the first preferred exponent."""
        assert choose_e(120) == 17
        assert choose_e(3120) == 17
        assert choose_e(4) == 3
        assert choose_e(6) == 5

    def test_choose_e_scan_fallback(self):
        """phi = 15 rules out 3, 5 and the large exponents; the scan finds 7."""
        assert choose_e(15) == 7

    def test_choose_e_no_exponent(self):
        with pytest.raises(NoValidExponentError):
            choose_e(2)
        with pytest.raises(NoValidExponentError):
            choose_e(3)


class TestKeyGeneration:
    """Unit tests for small-modulus key pairs."""

    def test_generated_keys_satisfy_invariants(self):
        for _ in range(25):
            keys = generate_keypair()
            assert keys.p != keys.q
            assert keys.n == keys.p * keys.q
            assert keys.n >= MIN_MODULUS
            assert keys.phi == (keys.p - 1) * (keys.q - 1)
            assert gcd(keys.e, keys.phi) == 1
            assert (keys.e * keys.d) % keys.phi == 1
            assert 7 <= keys.p <= 97 and 7 <= keys.q <= 97

    def test_narrow_range(self):
        keys = generate_keypair(11, 13)
        assert {keys.p, keys.q} == {11, 13}
        assert keys.n == 143

    def test_from_primes_textbook(self):
        keys = KeyPair.from_primes(61, 53)
        assert keys.n == 3233
        assert keys.phi == 3120
        assert keys.e == 17
        assert keys.d == 2753
        assert keys.public_key == (17, 3233)
        assert keys.private_key == (2753, 3233)

    def test_from_primes_explicit_exponent(self):
        keys = KeyPair.from_primes(11, 13, e=7)
        assert (keys.n, keys.phi, keys.e, keys.d) == (143, 120, 7, 103)

    def test_keypair_is_immutable(self):
        keys = KeyPair.from_primes(11, 13, e=7)
        with pytest.raises(dataclasses.FrozenInstanceError):
            keys.d = 1

    def test_to_dict(self):
        keys = KeyPair.from_primes(11, 13, e=7)
        assert keys.to_dict() == {'p': 11, 'q': 13, 'n': 143, 'phi': 120, 'e': 7, 'd': 103}


class TestAlphabet:
    """Unit tests for the A-Z/space codec."""

    def test_normalize(self):
        assert normalize("Hello, World!") == "HELLO WORLD"
        assert normalize("  a--b  ") == "A B"
        assert normalize("line\none\ttwo") == "LINE ONE TWO"
        assert normalize("123 !!") == ""

    def test_symbol_mapping(self):
        assert symbol_to_int("A") == 0
        assert symbol_to_int("Z") == 25
        assert symbol_to_int(" ") == 26
        assert int_to_symbol(0) == "A"
        assert int_to_symbol(25) == "Z"
        assert int_to_symbol(26) == " "

    def test_invalid_code_is_placeholder(self):
        assert int_to_symbol(27) == "?"
        assert int_to_symbol(-1) == "?"

    def test_text_symbols(self):
        assert text_to_symbols("hi there") == [7, 8, 26, 19, 7, 4, 17, 4]
        assert symbols_to_text([7, 8, 26, 99]) == "HI ?"


class TestCipher:
    """Unit tests for symbol-by-symbol encryption."""

    def test_hi_scenario(self):
        """p=11, q=13, e=7, d=103: H=7 -> 6, I=8 -> 57."""
        assert encrypt("HI", 7, 143) == [6, 57]
        assert decrypt([6, 57], 103, 143) == "HI"

    def test_round_trip_fixed_keys(self):
        keys = KeyPair.from_primes(61, 53)
        text = "Meet me at the usual place at ten"
        assert decrypt(encrypt(text, keys.e, keys.n), keys.d, keys.n) == normalize(text)

    def test_round_trip_generated_keys(self):
        texts = ["A", "ZZZ", "THE QUICK BROWN FOX", "hello, world!", "  spaced   out  "]
        for _ in range(10):
            keys = generate_keypair()
            for text in texts:
                ciphertext = encrypt(text, keys.e, keys.n)
                assert all(0 <= c < keys.n for c in ciphertext)
                assert decrypt(ciphertext, keys.d, keys.n) == normalize(text)

    def test_equal_symbols_give_equal_tokens(self):
        tokens = encrypt("ABAB", 17, 3233)
        assert tokens[0] == tokens[2]
        assert tokens[1] == tokens[3]

    def test_decrypt_string_input(self):
        assert decrypt("6 57", 103, 143) == "HI"
        assert decrypt("6, 57", 103, 143) == "HI"

    def test_decrypt_drops_bad_tokens(self):
        assert decrypt("6 abc 57", 103, 143) == "HI"
        assert decrypt("6 500 57", 103, 143) == "HI"

    def test_decrypt_placeholder(self):
        """100 decrypts to 100 under d=1, which is not a symbol."""
        assert decrypt([100], 1, 143) == "?"

    def test_encrypt_empty(self):
        assert encrypt("", 7, 143) == []
        assert decrypt("", 103, 143) == ""

    def test_parse_ciphertext(self):
        assert parse_ciphertext("1, 2  3,x 4") == [1, 2, 3, 4]
        assert parse_ciphertext("1 12 3", modulus=10) == [1, 3]
        assert parse_ciphertext("   ") == []

    def test_format_ciphertext(self):
        assert format_ciphertext([6, 57, 0]) == "6 57 0"

    def test_ciphertext_histogram(self):
        labels, counts = ciphertext_histogram("10 2 10 33")
        assert labels == ["2", "10", "33"]
        assert counts == [1, 2, 1]
