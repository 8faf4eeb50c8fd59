# Analysis Module
"""
Frequency scoring and ciphertext-only cryptanalysis:
- 27-bin letter frequencies and MSE against English
- Exhaustive and phi-restricted private exponent searches
"""
