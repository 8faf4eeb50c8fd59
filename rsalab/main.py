"""
RSALab - Command Line Entry Point

Usage examples:
  rsalab keygen --min-prime 11 --max-prime 97
  rsalab encrypt --e 17 --n 3233 "attack at dawn"
  rsalab decrypt --d 2753 --n 3233 "<ciphertext>"
  rsalab analyze --e 17 --n 3233 --method phi "<ciphertext>"
  rsalab demo "the quick brown fox jumps over the lazy dog"
"""

import argparse
import json
import sys
from typing import List, Optional

from .core_crypto.keys import generate_keypair, MIN_PRIME, MAX_PRIME
from .core_crypto.cipher import encrypt, decrypt, format_ciphertext
from .core_crypto.alphabet import normalize
from .analysis.cryptanalysis import (
    AnalysisConfig, CryptanalysisResult, analyze,
    DEFAULT_SEARCH_CAP, DEFAULT_ATTEMPT_CAP, DEFAULT_MSE_THRESHOLD,
    METHOD_PHI, METHOD_EXHAUSTIVE,
)
from .integration.lab import RSALab


DEMO_TEXT = "THE QUICK BROWN FOX JUMPS OVER THE LAZY DOG"


def print_result(result: CryptanalysisResult) -> None:
    """Print cryptanalysis diagnostics."""
    if not result.found:
        print(f"No valid plaintext found after {result.attempt_count} attempts "
              f"({result.stop_reason.value}). Try a longer ciphertext.")
        return

    print(f"Plaintext:  {result.plaintext}")
    print(f"Guessed d:  {result.guessed_d}")
    if result.phi_guess is not None:
        print(f"Guessed φ:  {result.phi_guess}")
    print(f"Best MSE:   {result.mse:.6f} (lower is better)")
    print(f"Attempts:   {result.attempt_count}")
    print(f"Stopped:    {result.stop_reason.value}")
    print(f"Time:       {result.elapsed_ms:.2f}ms")


def cmd_keygen(args: argparse.Namespace) -> None:
    keys = generate_keypair(args.min_prime, args.max_prime)
    if args.json:
        print(json.dumps(keys.to_dict()))
        return
    print(f"p = {keys.p}, q = {keys.q}")
    print(f"n = {keys.n}")
    print(f"φ(n) = (p − 1)(q − 1) = {keys.p - 1} · {keys.q - 1} = {keys.phi}")
    print(f"e = {keys.e}")
    print(f"d = {keys.d}")


def cmd_encrypt(args: argparse.Namespace) -> None:
    print(format_ciphertext(encrypt(" ".join(args.text), args.e, args.n)))


def cmd_decrypt(args: argparse.Namespace) -> None:
    print(decrypt(" ".join(args.ciphertext), args.d, args.n))


def cmd_analyze(args: argparse.Namespace) -> None:
    config = AnalysisConfig(
        search_cap=args.search_cap,
        attempt_cap=args.attempt_cap,
        mse_threshold=args.threshold,
        deadline_seconds=args.deadline,
    )
    result = analyze(" ".join(args.ciphertext), args.e, args.n, method=args.method, config=config)
    print_result(result)


def cmd_demo(args: argparse.Namespace) -> None:
    text = " ".join(args.text) if args.text else DEMO_TEXT
    lab = RSALab(min_prime=args.min_prime, max_prime=args.max_prime)
    keys = lab.keys

    print(f"Keys: p={keys.p}, q={keys.q}, n={keys.n}, φ={keys.phi}, e={keys.e}, d={keys.d}")
    print(f"Plaintext:  {normalize(text)}")
    ciphertext = lab.encrypt_to_string(text)
    print(f"Ciphertext: {ciphertext}")
    print(f"Decrypted:  {lab.decrypt(ciphertext)}")

    print("\nAttacking with only (e, n)...")
    print_result(lab.analyze(ciphertext, method=args.method))
    lab.logger.print_log()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rsalab",
        description="Toy RSA over A-Z/space with frequency-based cryptanalysis (not secure).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("keygen", help="Generate a small-modulus key pair")
    p.add_argument("--min-prime", type=int, default=MIN_PRIME)
    p.add_argument("--max-prime", type=int, default=MAX_PRIME)
    p.add_argument("--json", action="store_true", help="Print keys as JSON")
    p.set_defaults(func=cmd_keygen)

    p = sub.add_parser("encrypt", help="Encrypt text under (e, n)")
    p.add_argument("--e", type=int, required=True, help="Public exponent e")
    p.add_argument("--n", type=int, required=True, help="Modulus n")
    p.add_argument("text", nargs="+")
    p.set_defaults(func=cmd_encrypt)

    p = sub.add_parser("decrypt", help="Decrypt ciphertext under (d, n)")
    p.add_argument("--d", type=int, required=True, help="Private exponent d")
    p.add_argument("--n", type=int, required=True, help="Modulus n")
    p.add_argument("ciphertext", nargs="+", help="Space or comma separated integers")
    p.set_defaults(func=cmd_decrypt)

    p = sub.add_parser("analyze", help="Recover plaintext from ciphertext and (e, n)")
    p.add_argument("--e", type=int, required=True, help="Public exponent e")
    p.add_argument("--n", type=int, required=True, help="Modulus n")
    p.add_argument("--method", choices=[METHOD_PHI, METHOD_EXHAUSTIVE], default=METHOD_PHI)
    p.add_argument("--search-cap", type=int, default=DEFAULT_SEARCH_CAP,
                   help="Exhaustive search: upper bound on d")
    p.add_argument("--attempt-cap", type=int, default=DEFAULT_ATTEMPT_CAP,
                   help="Phi search: maximum phi guesses")
    p.add_argument("--threshold", type=float, default=DEFAULT_MSE_THRESHOLD,
                   help="Phi search: stop once MSE drops below this")
    p.add_argument("--deadline", type=float, default=None, help="Time budget in seconds")
    p.add_argument("ciphertext", nargs="+", help="Space or comma separated integers")
    p.set_defaults(func=cmd_analyze)

    p = sub.add_parser("demo", help="Generate keys, encrypt, attack and show the event log")
    p.add_argument("--min-prime", type=int, default=MIN_PRIME)
    p.add_argument("--max-prime", type=int, default=MAX_PRIME)
    p.add_argument("--method", choices=[METHOD_PHI, METHOD_EXHAUSTIVE], default=METHOD_PHI)
    p.add_argument("text", nargs="*")
    p.set_defaults(func=cmd_demo)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for RSALab."""
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
