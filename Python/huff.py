# Bradford Arrington 2025
import heapq
import os
from typing import Dict, Iterable, Iterator, Optional, TextIO

from bitio import CompressorBitio
from codelist import read_encoding, write_encoding, format_symbol
from hufferr import (CorruptStream, CorruptTable, EmptyInput, HuffmanError, IOFailure,
                     TruncatedStream, UnknownSymbol)

COMPRESSION_NAME = "static order 0 model with Huffman coding"
USAGE = ("infile outfile [-d] [-p]\n\n"
         "Specifying -d will dump the modeling data\n"
         "Specifying -p will pack the codewords into bits\n")
LISTING_SUFFIX = ".sch"


class Node:
    """A leaf (symbol is a character) or a merge point (symbol is None)."""
    __slots__ = ['symbol', 'weight', 'left', 'right']

    def __init__(self, symbol: Optional[str], weight: int,
                 left: Optional['Node'] = None, right: Optional['Node'] = None):
        self.symbol = symbol
        self.weight = weight
        self.left = left
        self.right = right

    def is_leaf(self) -> bool:
        return self.symbol is not None

    def __repr__(self):
        return f"Node({self.symbol!r}, {self.weight})"


def count_characters(text: Iterable[str]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for c in text:
        counts[c] = counts.get(c, 0) + 1
    return counts


def count_file(input_file: TextIO) -> Dict[str, int]:
    """Counts the characters of a text stream, leaving its position unchanged."""
    input_marker = input_file.tell()

    input_file.seek(0)
    counts: Dict[str, int] = {}
    while True:
        c = input_file.read(1)
        if not c:
            break # EOF
        counts[c] = counts.get(c, 0) + 1

    input_file.seek(input_marker)
    return counts


def build_tree(frequencies: Dict[str, int]) -> Node:
    """
    Builds the Huffman tree for a character -> count mapping and returns its root.

    The two lightest nodes are merged until a single node is left. Equal
    weights are resolved in favour of the node inserted first: leaves in the
    iteration order of ``frequencies``, then merge nodes in creation order.
    A single-entry mapping yields a lone leaf as the root.
    """
    if not frequencies:
        raise EmptyInput("No characters to build a Huffman tree from")

    heap = []
    next_serial = 0
    for symbol, count in frequencies.items():
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise ValueError(f"Frequency keys must be single characters, got {symbol!r}")
        if count < 0:
            raise ValueError(f"Negative count {count} for character {symbol!r}")
        heap.append((count, next_serial, Node(symbol, count)))
        next_serial += 1
    heapq.heapify(heap)

    while len(heap) > 1:
        weight_0, _, child_0 = heapq.heappop(heap)
        weight_1, _, child_1 = heapq.heappop(heap)
        merged = Node(None, weight_0 + weight_1, child_0, child_1)
        heapq.heappush(heap, (merged.weight, next_serial, merged))
        next_serial += 1

    return heap[0][2]


def generate_codes(root: Optional[Node]) -> Dict[str, str]:
    codes: Dict[str, str] = {}
    if root is None:
        return codes
    if root.is_leaf():
        # One-character alphabet: give it a real bit so it can be decoded
        codes[root.symbol] = "0"
        return codes
    convert_tree_to_code(root, codes, "")
    return codes


def convert_tree_to_code(node: Optional[Node], codes: Dict[str, str], code_so_far: str):
    if node is None:
        return
    if node.is_leaf():
        codes[node.symbol] = code_so_far
        return

    convert_tree_to_code(node.left, codes, code_so_far + "0")
    convert_tree_to_code(node.right, codes, code_so_far + "1")


def build_decode_tree(codes: Dict[str, str]) -> Node:
    """
    Rebuilds a tree from a codeword table so decoding can walk one edge per
    symbol. Unlike a Huffman tree, merge nodes here may miss a child.
    """
    root = Node(None, 0)
    for symbol, code in codes.items():
        if not code:
            raise CorruptTable(f"Empty codeword for character {symbol!r}")
        node = root
        for bit in code:
            if node.is_leaf():
                raise CorruptTable(f"Codeword for {node.symbol!r} is a prefix of the codeword for {symbol!r}")
            if bit == "0":
                if node.left is None:
                    node.left = Node(None, 0)
                node = node.left
            elif bit == "1":
                if node.right is None:
                    node.right = Node(None, 0)
                node = node.right
            else:
                raise CorruptTable(f"Invalid symbol {bit!r} in codeword for {symbol!r}")
        if node.is_leaf() or node.left is not None or node.right is not None:
            raise CorruptTable(f"Codeword {code} for {symbol!r} collides with another codeword")
        node.symbol = symbol
    return root


def encode_symbols(text: Iterable[str], codes: Dict[str, str]) -> Iterator[str]:
    for position, c in enumerate(text):
        code = codes.get(c)
        if code is None:
            raise UnknownSymbol(c, position)
        yield code


def encode(text: Iterable[str], codes: Dict[str, str]) -> str:
    return "".join(encode_symbols(text, codes))


def decode_symbols(symbols: Iterable[str], root: Node) -> Iterator[str]:
    node = root
    pending = 0
    for position, bit in enumerate(symbols):
        if bit not in ("0", "1"):
            raise CorruptStream(f"Invalid symbol {bit!r} at position {position}")
        pending += 1
        if node is None:
            # Off the tree: nothing can match, the rest is one unresolved codeword
            continue
        node = node.left if bit == "0" else node.right

        # Leaf node found
        if node is not None and node.is_leaf():
            yield node.symbol
            node = root
            pending = 0

    if pending:
        raise TruncatedStream(pending)


def decode(symbols: Iterable[str], codes: Dict[str, str]) -> str:
    return "".join(decode_symbols(symbols, build_decode_tree(codes)))


def read_symbols(input_file: TextIO) -> Iterator[str]:
    while True:
        c = input_file.read(1)
        if not c:
            return # EOF
        yield c


def compress_data(input_file: TextIO, output_file: TextIO, codes: Dict[str, str]):
    input_file.seek(0)

    for code in encode_symbols(read_symbols(input_file), codes):
        try:
            output_file.write(code)
        except OSError as e:
            raise IOFailure(f"Error trying to write codeword to output: {e}") from e


def expand_data(symbols: Iterable[str], output_file: TextIO, codes: Dict[str, str]):
    for c in decode_symbols(symbols, build_decode_tree(codes)):
        try:
            output_file.write(c)
        except OSError as e:
            raise IOFailure(f"Error trying to write expanded character to output: {e}") from e


def compress_packed(input_file: TextIO, output_bit_file: 'CompressorBitio.BitFile',
                    codes: Dict[str, str], counts: Dict[str, int]):
    symbol_count = sum(counts[c] * len(codes[c]) for c in counts)
    output_bit_file.write_header(symbol_count)

    input_file.seek(0)
    for code in encode_symbols(read_symbols(input_file), codes):
        output_bit_file.output_bits(int(code, 2), len(code))


def print_char(c: str):
    if " " <= c < "\x7f":
        print(f"'{c}'", end="")
    else:
        print(f"{ord(c):3d}", end="")


def print_model(counts: Dict[str, int], codes: Optional[Dict[str, str]]):
    for c in sorted(counts):
        print("node=", end="")
        print_char(c)
        print(f"  count={counts[c]:3d}", end="")

        if codes is not None and c in codes:
            print(f"  Huffman code={codes[c]}", end="")

        print() # Newline


def compress_file(input_path: str, output_path: str, packed: bool = False, dump: bool = False) -> Dict[str, str]:
    """
    Compresses a UTF-8 text file. The codeword listing needed to expand it
    is written beside the output as ``output_path + LISTING_SUFFIX``.
    """
    with open(input_path, 'r', encoding='utf-8', newline='') as input_file:
        counts = count_file(input_file)
        root_node = build_tree(counts)
        codes = generate_codes(root_node)

        if dump:
            print_model(counts, codes)

        try:
            write_encoding(codes, output_path + LISTING_SUFFIX)

            if packed:
                output_bit_file = CompressorBitio.BitFile.open_output_bit_file(output_path)
                try:
                    compress_packed(input_file, output_bit_file, codes, counts)
                finally:
                    output_bit_file.close_bit_file()
            else:
                try:
                    output_file = open(output_path, 'w', encoding='ascii', newline='')
                except OSError as e:
                    raise IOFailure(f"Cannot open {output_path} for writing: {e}") from e
                with output_file:
                    compress_data(input_file, output_file, codes)
        except HuffmanError:
            # Neither a partial output nor its listing is left behind
            for name in (output_path, output_path + LISTING_SUFFIX):
                if os.path.isfile(name):
                    os.remove(name)
            raise

    return codes


def expand_file(input_path: str, output_path: str, dump: bool = False) -> Dict[str, str]:
    """Expands a file written by compress_file, packed or not."""
    codes = read_encoding(input_path + LISTING_SUFFIX)

    if dump:
        for c, code in codes.items():
            print(f"{format_symbol(c)}: {code}")

    packed = CompressorBitio.is_packed_file(input_path)
    try:
        output_file = open(output_path, 'w', encoding='utf-8', newline='')
    except OSError as e:
        raise IOFailure(f"Cannot open {output_path} for writing: {e}") from e

    try:
        with output_file:
            if packed:
                input_bit_file = CompressorBitio.BitFile.open_input_bit_file(input_path)
                try:
                    symbol_count = input_bit_file.read_header()
                    expand_data(input_bit_file.input_symbols(symbol_count), output_file, codes)
                finally:
                    input_bit_file.close_bit_file()
            else:
                with open(input_path, 'r', encoding='utf-8', newline='') as input_file:
                    expand_data(read_symbols(input_file), output_file, codes)
    except (HuffmanError, UnicodeDecodeError):
        # No partially expanded output is left behind
        os.remove(output_path)
        raise

    return codes
