"""
Single-string Huffman session report

Runs the whole pipeline over one string and prints what happened at each step:
frequency table, code table, encoded and decoded strings and the size comparison.
Symbols are the UTF-8 bytes of the text, so a non-ASCII character counts as
several symbols.

How to run:
  python session.py "abracadabra"
  python session.py --verbose "mississippi river"
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import huffman as huff
from stats import compression_ratio

logger = logging.getLogger(__name__)


@dataclass
class SessionReport:
    text: str
    frequencies: Dict[int, int] # byte value -> count
    codes: Dict[int, str]
    encoded: str
    decoded: str
    original_bits: int
    encoded_bits: int
    ratio: float


def run_session(text: str) -> SessionReport:
    data = text.encode("utf-8")
    codec = huff.HuffmanCodec.from_symbols(data)
    encoded = codec.encode(data)
    decoded = bytes(codec.decode(encoded)).decode("utf-8")
    logger.debug("session: %d bytes, %d distinct, %d encoded bits",
                 len(data), len(codec.frequencies), len(encoded))

    return SessionReport(
        text=text,
        frequencies=codec.frequencies,
        codes=codec.codes,
        encoded=encoded,
        decoded=decoded,
        original_bits=len(data) * 8,
        encoded_bits=len(encoded),
        ratio=compression_ratio(len(encoded), len(data)),
    )


def symbol_label(b: int) -> str:
    # printable ASCII as the character itself, anything else as hex
    if 0x20 <= b < 0x7F:
        return repr(chr(b))
    return f"0x{b:02X}"


def format_report(report: SessionReport) -> str:
    lines = ["Frequency Table:"]
    for b, f in report.frequencies.items():
        lines.append(f"{symbol_label(b)}: {f}")

    lines.append("")
    lines.append("Character | Frequency | Huffman Code")
    lines.append("------------------------------------")
    for b, code in report.codes.items():
        lines.append(f"    {symbol_label(b):<6}|     {report.frequencies[b]:<6}| {code}")

    lines.append("")
    lines.append(f"Original String: {report.text}")
    lines.append(f"Encoded String: {report.encoded}")
    lines.append(f"Decoded String: {report.decoded}")
    lines.append("")
    lines.append(f"Original Size: {report.original_bits} bits")
    lines.append(f"Encoded Size: {report.encoded_bits} bits")
    lines.append(f"Compression Ratio: {report.ratio * 100:.2f}%")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Huffman-encode one string and report the result")
    ap.add_argument("text", help="Text to encode (each UTF-8 byte is one symbol)")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    print(format_report(run_session(args.text)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
