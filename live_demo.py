#!/usr/bin/env python
"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                            RSALAB LIVE DEMO                                  ║
║                Toy RSA and Frequency-Based Cryptanalysis                     ║
╚══════════════════════════════════════════════════════════════════════════════╝

This script walks a class through:
- Small-modulus RSA key generation
- Symbol-by-symbol encryption and decryption
- Why equal letters give equal ciphertext tokens
- Recovering the plaintext from (e, n) alone by frequency scoring
- The tamper-evident event log of the session

Run with --no-pause to skip the presenter prompts.
"""

import sys

from rsalab.core_crypto.alphabet import normalize
from rsalab.analysis.frequency import letter_frequency, ENGLISH_FREQUENCY, mean_squared_error
from rsalab.analysis.cryptanalysis import METHOD_PHI, METHOD_EXHAUSTIVE
from rsalab.integration.lab import RSALab


PAUSE = "--no-pause" not in sys.argv


def print_header(title):
    """Print a formatted section header"""
    print("\n" + "═" * 70)
    print(f"  {title}")
    print("═" * 70)


def print_step(step_num, description):
    """Print a numbered step"""
    print(f"\n  [{step_num}] {description}")


def pause(message="Press ENTER to continue..."):
    """Pause for presenter to explain"""
    if not PAUSE:
        return
    print(f"\n  [PAUSE] {message}")
    input()


def print_bars(labels, counts, width=40):
    """Draw a horizontal text bar chart."""
    peak = max(counts) if counts else 0
    for label, count in zip(labels, counts):
        bar = "█" * (round(width * count / peak) if peak else 0)
        print(f"    {label:>6} │ {bar} {count}")


def main():
    print("\n" * 2)
    print("╔" + "═" * 68 + "╗")
    print("║" + "        RSALAB - TOY RSA AND FREQUENCY CRYPTANALYSIS".center(68) + "║")
    print("╚" + "═" * 68 + "╝")
    print("\n  Two-digit primes only. This is a teaching aid, NOT secure RSA.")

    pause("Press ENTER to begin the demonstration...")

    print_header("PART 1: KEY GENERATION")
    lab = RSALab()
    keys = lab.keys

    print_step(1, "Pick two distinct primes")
    print(f"      p = {keys.p}, q = {keys.q}")
    print_step(2, "Compute n and φ(n)")
    print(f"      n = p · q = {keys.n}")
    print(f"      φ(n) = (p − 1)(q − 1) = {keys.p - 1} · {keys.q - 1} = {keys.phi}")
    print_step(3, "Choose e coprime to φ(n), then d = e⁻¹ mod φ(n)")
    print(f"      e = {keys.e}, d = {keys.d}")
    print(f"      check: e · d mod φ(n) = {keys.e * keys.d % keys.phi}")

    pause()

    print_header("PART 2: ENCRYPTION")
    plaintext = "The quick brown fox jumps over the lazy dog and keeps on running"
    print(f"\n  Message:    {plaintext}")
    print(f"  Normalized: {normalize(plaintext)}")

    ciphertext = lab.encrypt_to_string(plaintext)
    print(f"\n  Ciphertext: {ciphertext}")
    print(f"\n  Decrypted with d: {lab.decrypt(ciphertext)}")

    print_step(1, "Ciphertext token frequencies (equal letters → equal tokens)")
    labels, counts = lab.histogram(ciphertext)
    print_bars(labels, counts)

    pause()

    print_header("PART 3: ATTACK WITH ONLY (e, n)")
    print(f"\n  Attacker knows e = {keys.e}, n = {keys.n} and the ciphertext.")

    print_step(1, "φ-restricted search")
    result = lab.analyze(ciphertext, method=METHOD_PHI)
    print(f"      Recovered:  {result.plaintext or 'Decryption failed'}")
    print(f"      Guessed d:  {result.guessed_d}   Guessed φ: {result.phi_guess}")
    print(f"      Best MSE:   {result.mse:.6f}   Attempts: {result.attempt_count}")
    print(f"      Time:       {result.elapsed_ms:.2f}ms ({result.stop_reason.value})")

    print_step(2, "Exhaustive d search")
    result = lab.analyze(ciphertext, method=METHOD_EXHAUSTIVE)
    print(f"      Recovered:  {result.plaintext or 'Decryption failed'}")
    print(f"      Guessed d:  {result.guessed_d}   Attempts: {result.attempt_count}")
    print(f"      Time:       {result.elapsed_ms:.2f}ms")

    print_step(3, "How English-like is the winner?")
    score = mean_squared_error(letter_frequency(result.plaintext), ENGLISH_FREQUENCY)
    print(f"      MSE against English: {score:.6f}")

    pause()

    print_header("PART 4: EVENT LOG")
    lab.logger.print_log()
    print(f"\n  Chain verifies: {lab.logger.verify_integrity()}")


if __name__ == "__main__":
    main()
