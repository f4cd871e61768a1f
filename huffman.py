import heapq
import logging
from typing import Dict, Hashable, Iterable, List, Optional

logger = logging.getLogger(__name__)

PLACEHOLDER_CODE = "0" # code for a tree that is a single leaf (empty root-to-leaf path)


class HuffmanError(Exception):
    """Base class for codec failures."""

class UnknownSymbolError(HuffmanError, KeyError):
    def __init__(self, symbol):
        super().__init__(symbol)
        self.symbol = symbol

    def __str__(self):
        return f"symbol {self.symbol!r} has no entry in the code table"

class TruncatedCodeError(HuffmanError, ValueError):
    pass

class InvalidBitError(HuffmanError, ValueError):
    pass

class EmptyQueueError(HuffmanError, IndexError):
    pass


class HuffmanNode: # Node for Huffman tree
    __slots__ = ("symbol", "frequency", "left", "right")

    def __init__(self, symbol, frequency, left=None, right=None):
        self.symbol = symbol    # None for internal nodes
        self.frequency = frequency
        self.left = left
        self.right = right

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode({self.symbol!r}, {self.frequency})"
        return f"HuffmanNode(internal, {self.frequency})"


class PriorityQueue:
    """
    Min-heap of nodes keyed by frequency.

    Entries carry an insertion sequence number as a secondary key, so nodes of
    equal frequency come out in the order they went in. That keeps the tree
    shape, and therefore the codes, reproducible for identical input.
    """

    def __init__(self):
        self._heap = []
        self._seq = 0

    def insert(self, node: HuffmanNode) -> None:
        heapq.heappush(self._heap, (node.frequency, self._seq, node))
        self._seq += 1

    def extract_min(self) -> HuffmanNode:
        if not self._heap:
            raise EmptyQueueError("extract_min from an empty priority queue")
        return heapq.heappop(self._heap)[2]

    def peek_count(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self):
        return len(self._heap)


def count_frequencies(symbols: Iterable[Hashable]) -> Dict[Hashable, int]:
    ft: Dict[Hashable, int] = {}
    for s in symbols:
        ft[s] = ft.get(s, 0) + 1
    return ft


def build_tree(frequency_table: Dict[Hashable, int]) -> Optional[HuffmanNode]: # frequency_table: dict of symbol -> frequency
    if not frequency_table:
        return None

    queue = PriorityQueue()
    for symbol, frequency in frequency_table.items():
        queue.insert(HuffmanNode(symbol, frequency))

    # Merge the two lightest nodes until only the root is left
    while queue.peek_count() > 1:
        left = queue.extract_min()
        right = queue.extract_min()
        queue.insert(HuffmanNode(None, left.frequency + right.frequency, left, right))

    root = queue.extract_min()
    logger.debug("built tree for %d symbols, root weight %d", len(frequency_table), root.frequency)
    return root


def generate_codes(root: Optional[HuffmanNode]) -> Dict[Hashable, str]: # root: root of the Huffman tree
    codes: Dict[Hashable, str] = {}
    if root is None:
        return codes

    # Explicit stack, a skewed tree over a large alphabet is as deep as the alphabet
    stack = [(root, '')]
    while stack:
        node, current_code = stack.pop()
        if node.is_leaf:
            codes[node.symbol] = current_code or PLACEHOLDER_CODE
            continue
        stack.append((node.right, current_code + '1'))
        stack.append((node.left, current_code + '0')) # left popped first
    return codes


def encode(symbols: Iterable[Hashable], code_table: Dict[Hashable, str]) -> str:
    out = []
    for s in symbols:
        try:
            out.append(code_table[s])
        except KeyError:
            raise UnknownSymbolError(s) from None
    return ''.join(out)


def decode(bits: str, root: Optional[HuffmanNode]) -> List[Hashable]:
    """
    Walk the tree bit by bit, emitting a symbol at every leaf and restarting
    from the root. Raises TruncatedCodeError if the bits run out between the
    root and a leaf.
    """
    if not bits:
        return []
    if root is None:
        raise InvalidBitError("cannot decode bits without a tree")

    decoded = []
    if root.is_leaf: # single-symbol tree, every symbol is PLACEHOLDER_CODE
        for i, bit in enumerate(bits):
            if bit != PLACEHOLDER_CODE:
                raise InvalidBitError(f"unexpected bit {bit!r} at offset {i}")
            decoded.append(root.symbol)
        return decoded

    node = root
    for i, bit in enumerate(bits):
        if bit == '0':
            node = node.left
        elif bit == '1':
            node = node.right
        else:
            raise InvalidBitError(f"unexpected bit {bit!r} at offset {i}")

        if node.is_leaf:
            decoded.append(node.symbol)
            node = root

    if node is not root:
        raise TruncatedCodeError(f"bit stream ends inside a code after {len(decoded)} symbols")
    return decoded


def decode_text(bits: str, root: Optional[HuffmanNode]) -> str:
    return ''.join(decode(bits, root))


def decode_bytes(bits: str, root: Optional[HuffmanNode]) -> bytes:
    return bytes(decode(bits, root))


class HuffmanCodec:
    """One encode/decode session: frequencies, tree and codes derived together."""

    def __init__(self, frequencies, root, codes):
        self.frequencies = frequencies
        self.root = root
        self.codes = codes

    @classmethod
    def from_symbols(cls, symbols) -> "HuffmanCodec":
        frequencies = count_frequencies(symbols)
        root = build_tree(frequencies)
        return cls(frequencies, root, generate_codes(root))

    def encode(self, symbols) -> str:
        return encode(symbols, self.codes)

    def decode(self, bits: str) -> List[Hashable]:
        return decode(bits, self.root)
