import math
from typing import Dict, Hashable


def compression_ratio(encoded_bit_count: int, symbol_count: int) -> float:
    # Each input symbol is one 8-bit code unit
    if symbol_count == 0:
        return 0.0
    return encoded_bit_count / (symbol_count * 8)


def average_code_length(freqs: Dict[Hashable, int], codes: Dict[Hashable, str]) -> float:
    total = sum(freqs.values())
    if total == 0:
        return 0.0
    return sum(len(codes[s]) * f for s, f in freqs.items()) / total


def entropy(freqs: Dict[Hashable, int]) -> float:
    """Shannon entropy of the frequency table, in bits per symbol."""
    total = sum(freqs.values())
    if total == 0:
        return 0.0
    h = 0.0
    for f in freqs.values():
        p = f / total
        h -= p * math.log2(p)
    return h
