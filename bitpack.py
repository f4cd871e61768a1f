from typing import Tuple

from huffman import InvalidBitError


def pack_bits(bits: str) -> Tuple[bytes, int]:
    """
    Converts a '0'/'1' string into packed bytes, most significant bit first
    Returns (packed_bytes, pad_bits) where pad_bits is number of 0 bits added at the end
    """
    out = bytearray()
    acc = 0
    acc_bits = 0

    for i, ch in enumerate(bits):
        if ch == '1':
            acc = (acc << 1) | 1
        elif ch == '0':
            acc = acc << 1
        else:
            raise InvalidBitError(f"unexpected bit {ch!r} at offset {i}")
        acc_bits += 1
        if acc_bits == 8:
            out.append(acc & 0xFF)
            acc = 0
            acc_bits = 0

    pad_bits = 0
    if acc_bits != 0:
        pad_bits = 8 - acc_bits
        acc = acc << pad_bits
        out.append(acc & 0xFF)

    return bytes(out), pad_bits


def unpack_bits(packed: bytes, pad_bits: int) -> str:
    if not 0 <= pad_bits < 8:
        raise ValueError(f"pad_bits must be in 0..7, got {pad_bits}")
    if pad_bits and not packed:
        raise ValueError("pad_bits given for an empty stream")

    total_bits = len(packed) * 8 - pad_bits
    bits = ''.join(format(byte, '08b') for byte in packed)
    return bits[:total_bits]
