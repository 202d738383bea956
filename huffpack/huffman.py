"""Huffman coding tables, compression to the packed format and decoding."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import BinaryIO, Deque, Dict, List, Mapping, Sequence, Tuple, Union

from huffpack.bits import BitReader, BitWriter

ALPHABET_SIZE = 256

Data = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: Data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


@dataclass
class _Node:
    count: int
    symbols: List[int]


def _insert_node(nodes: List[_Node], new: _Node) -> None:
    """Insert ``new`` keeping the list ordered by count, carrying displaced nodes."""
    for index, node in enumerate(nodes):
        if node.count > new.count:
            nodes[index], new = new, node
    nodes.append(new)


def count_characters(data: Data) -> List[int]:
    """Return the number of occurrences of every byte value in ``data``."""
    counts = [0] * ALPHABET_SIZE
    for byte in _as_bytes(data):
        counts[byte] += 1
    return counts


def build_table(counts: Sequence[int]) -> Dict[int, str]:
    """Build the coding table from byte frequencies.

    Only bytes with a positive count get a code; a table with a single such
    byte gets no code at all.
    """
    if len(counts) != ALPHABET_SIZE:
        raise ValueError(f"expected {ALPHABET_SIZE} counts, got {len(counts)}")

    nodes: List[_Node] = []
    for symbol, count in enumerate(counts):
        if count > 0:
            _insert_node(nodes, _Node(count, [symbol]))

    position = 0
    while position < len(nodes) - 1:
        first, second = nodes[position], nodes[position + 1]
        _insert_node(
            nodes,
            _Node(first.count + second.count, first.symbols + second.symbols),
        )
        position += 2

    table: Dict[int, str] = {}
    free_prefixes: Deque[str] = deque()
    for top in range(len(nodes) - 2, 0, -2):
        prefix = free_prefixes.popleft() if free_prefixes else ""
        for node, bit in ((nodes[top], "0"), (nodes[top - 1], "1")):
            code = prefix + bit
            if len(node.symbols) == 1:
                table[node.symbols[0]] = code
            else:
                free_prefixes.append(code)
    return dict(sorted(table.items()))


def encode_bits(data: Data, table: Mapping[int, str]) -> str:
    """Return the encoded form of ``data`` as a string of '0' and '1'."""
    try:
        return "".join(table[byte] for byte in _as_bytes(data))
    except KeyError as exc:
        raise ValueError(f"no code for byte {exc.args[0]}") from None


def format_results(data: Data, counts: Sequence[int], table: Mapping[int, str]) -> str:
    """Render the encoded text followed by the character, frequency and code table."""
    bits = encode_bits(data, table)
    rows = "".join(
        f"{chr(symbol)} | {count} | {table.get(symbol, '')}\n"
        for symbol, count in enumerate(counts)
        if count > 0
    )
    return (
        "Compressed text: \n"
        + bits
        + "\n\n"
        + "Character | Frequency | Code\n"
        + rows
        + "\n"
    )


def compress_to_stream(
    data: Data, counts: Sequence[int], table: Mapping[int, str], stream: BinaryIO
) -> None:
    """Write the length, coding table and packed bits of ``data`` to ``stream``."""
    payload = _as_bytes(data)
    bits = encode_bits(payload, table)
    entries: List[Tuple[int, str]] = []
    for symbol, count in enumerate(counts):
        if count > 0:
            if symbol not in table:
                raise ValueError(f"no code for byte {symbol}")
            entries.append((symbol, table[symbol]))

    with BitWriter(stream) as writer:
        writer.write_char_count(len(payload))
        for symbol, code in entries:
            writer.write_table_entry(symbol, code)
        for bit in bits:
            writer.write_bit_char(bit)


def import_table(reader: BitReader) -> Tuple[Dict[int, str], int]:
    """Read the stored text length and coding table; return ``(table, length)``."""
    length = reader.read_char_count()
    table: Dict[int, str] = {}
    while (entry := reader.read_table_entry()) is not None:
        symbol, code = entry
        table[symbol] = code
    return table, length


def decode(reader: BitReader, table: Mapping[int, str], length: int) -> bytes:
    """Decode up to ``length`` bytes from the remaining bits of ``reader``.

    A byte is emitted as soon as exactly one code still agrees with the bits
    read since the previous byte.
    """
    output = bytearray()
    candidates: List[int] = []
    position = 0
    ordered = sorted(table)
    while len(output) < length:
        bit = reader.read_bit()
        if bit is None:
            break
        symbol = "1" if bit else "0"
        if position == 0:
            candidates = [s for s in ordered if table[s][:1] == symbol]
        else:
            candidates = [
                s for s in candidates if table[s][position:position + 1] == symbol
            ]
        position += 1
        if len(candidates) == 1:
            output.append(candidates[0])
            candidates = []
            position = 0
    return bytes(output)


def decompress_stream(stream: BinaryIO) -> bytes:
    """Read a compressed stream and return the decoded bytes."""
    reader = BitReader(stream)
    table, length = import_table(reader)
    return decode(reader, table, length)