# RSALab Test Suite
"""
Test suite including:
- Unit tests (number theory, keys, codec, cipher, scoring)
- Cryptanalysis tests
- Integration tests (lab session, event log, CLI)
- Security tests (invalid inputs)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
