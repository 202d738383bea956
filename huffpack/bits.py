"""Bit-level writing and reading of the compressed file format.

A compressed stream starts with the text length as a 4-byte little-endian
signed integer, followed by table entries of the form ``|<byte>-<code>|``
and finally the packed bit stream, most significant bit first, padded with
zero bits to a whole byte.
"""

from __future__ import annotations

import struct
from typing import BinaryIO, Iterator, Optional, Tuple, Union

_COUNT_FORMAT = "<i"
_COUNT_SIZE = struct.calcsize(_COUNT_FORMAT)
_ENTRY_EDGE = ord("|")
_ENTRY_SEPARATOR = ord("-")


def _as_byte(character: Union[int, str, bytes]) -> int:
    if isinstance(character, int):
        value = character
    elif isinstance(character, (str, bytes)) and len(character) == 1:
        value = ord(character)
    else:
        raise ValueError(f"expected a single character, got {character!r}")
    if not 0 <= value <= 0xFF:
        raise ValueError(f"character {value} does not fit in one byte")
    return value


class BitWriter:
    """Writes the header, table entries and single bits to a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._buffer = 0
        self._bit_count = 0
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("write to a closed BitWriter")

    def write_char_count(self, count: int) -> None:
        """Write the length of the encoded text as a 4-byte integer."""
        self._check_open()
        try:
            self._stream.write(struct.pack(_COUNT_FORMAT, count))
        except struct.error as exc:
            raise ValueError(f"character count {count} out of range") from exc

    def write_table_entry(self, character: Union[int, str, bytes], code: str) -> None:
        """Write one ``|<character>-<code>|`` entry of the coding table."""
        self._check_open()
        if "|" in code:
            raise ValueError("a code may not contain '|'")
        entry = bytes([_ENTRY_EDGE, _as_byte(character), _ENTRY_SEPARATOR])
        self._stream.write(entry + code.encode("latin-1") + b"|")

    def write_bit(self, bit: int) -> None:
        """Append one bit; only its lowest bit counts."""
        self._check_open()
        self._buffer = ((self._buffer << 1) | (bit & 1)) & 0xFF
        self._bit_count += 1
        if self._bit_count == 8:
            self._stream.write(bytes([self._buffer]))
            self._buffer = 0
            self._bit_count = 0

    def write_bit_char(self, bit: str) -> None:
        """Append the bit named by a ``'0'`` or ``'1'`` character."""
        self.write_bit(1 if bit == "1" else 0)

    def flush(self) -> None:
        """Write any pending bits, padded with zeros to a whole byte."""
        self._check_open()
        if self._bit_count > 0:
            self._buffer = (self._buffer << (8 - self._bit_count)) & 0xFF
            self._stream.write(bytes([self._buffer]))
            self._buffer = 0
            self._bit_count = 0

    def close(self) -> None:
        """Flush pending bits and refuse further writes."""
        if self._closed:
            return
        self.flush()
        self._closed = True

    def __enter__(self) -> "BitWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class BitReader:
    """Reads the header, table entries and single bits from a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._buffer = 0
        self._bit_count = 0
        self._pushback: Optional[int] = None

    def _read_byte(self) -> Optional[int]:
        if self._pushback is not None:
            value, self._pushback = self._pushback, None
            return value
        data = self._stream.read(1)
        return data[0] if data else None

    def read_char_count(self) -> int:
        """Read the 4-byte length of the encoded text."""
        raw = bytearray()
        while len(raw) < _COUNT_SIZE:
            value = self._read_byte()
            if value is None:
                raise EOFError("stream ended inside the character count")
            raw.append(value)
        return struct.unpack(_COUNT_FORMAT, bytes(raw))[0]

    def read_table_entry(self) -> Optional[Tuple[int, str]]:
        """Read the next table entry as ``(byte, code)``.

        Returns None when no further entry follows; if the next byte does not
        open an entry it is left in place for bit reading.
        """
        first = self._read_byte()
        if first is None:
            return None
        if first != _ENTRY_EDGE:
            self._pushback = first
            return None
        character = self._read_byte()
        if character is None:
            return None
        if self._read_byte() != _ENTRY_SEPARATOR:
            return None
        code = bytearray()
        while True:
            value = self._read_byte()
            if value is None:
                return None
            if value == _ENTRY_EDGE:
                return character, code.decode("latin-1")
            code.append(value)

    def read_bit(self) -> Optional[int]:
        """Return the next bit, or None at the end of the stream."""
        if self._bit_count == 0:
            value = self._read_byte()
            if value is None:
                return None
            self._buffer = value
            self._bit_count = 8
        bit = (self._buffer >> 7) & 1
        self._buffer = (self._buffer << 1) & 0xFF
        self._bit_count -= 1
        return bit

    def __iter__(self) -> Iterator[int]:
        while True:
            bit = self.read_bit()
            if bit is None:
                return
            yield bit