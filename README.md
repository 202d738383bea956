# huffpack

Huffman coding for text. huffpack counts how often each byte occurs and
builds a code table from those counts. It can show the encoded bit string and
the table in the terminal. It can also pack the text into a `.huff` file and
unpack it again.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Command line

Compress a message and print the bit string and the code table:

```
huffpack -m "ABRACADABRA"
```

Compress a text file into a `.huff` file:

```
huffpack -c -i notes.txt -o notes.huff
```

Decompress a `.huff` file back into text:

```
huffpack -d -i notes.huff -o notes.txt
```

Options:

- `-m`, `--msg TEXT`: the text to compress. It is encoded as UTF-8.
- `-i`, `--input FILE`: the input file. Use a text file when compressing and a `.huff` file when decompressing.
- `-o`, `--output FILE`: the output file. If you leave it out, the results are printed to the terminal.
- `-c`, `--compress`: compress. This is the default.
- `-d`, `--decompress`: decompress a `.huff` file. You must give `-i`.
- `-p`, `--probabilities`: before the table is built, asks for a new frequency for each character that occurs. This option has no effect when the input is a file.
- `-?`, `--help`: prints the help text and exits with status 1. Unknown options do the same.

If you give neither a message nor an input file, huffpack asks for one line of text.

When it compresses a message to the terminal, huffpack prints the bit string and then a
`Character | Frequency | Code` table. When it compresses a file to the terminal, it prints
only the bit string. When it decompresses without `-o`, it prints the decoded text as UTF-8.

On success the command exits with status 0. On an error it exits with status 1, for
example when a file cannot be opened.

## Library use

```python
import io
from huffpack.huffman import (
    count_characters, build_table, encode_bits, format_results,
    compress_to_stream, decompress_stream,
)

data = b"ABRACADABRA"
counts = count_characters(data)   # 256 counts, one per byte value
table = build_table(counts)       # {byte: "0101..."}
print(encode_bits(data, table))
print(format_results(data, counts, table))

buffer = io.BytesIO()
compress_to_stream(data, counts, table, buffer)
buffer.seek(0)
print(decompress_stream(buffer))
```

`huffpack.huffman` also provides `import_table(reader)` and `decode(reader, table, length)`.
`decompress_stream` uses these two to read a stream step by step. The functions take
`bytes` or `str`. A `str` is encoded as UTF-8. If the data holds a byte that has no code,
`encode_bits` and `compress_to_stream` raise `ValueError`.

The bit-level I/O lives in `huffpack.bits`:

- `BitWriter(stream)` writes the length header (`write_char_count`), table entries
  (`write_table_entry`) and single bits (`write_bit`, `write_bit_char`). The bits go
  most significant first. `flush` and `close` pad the last byte with zeros. It can be
  used as a context manager.
- `BitReader(stream)` reads these back with `read_char_count`, `read_table_entry` and
  `read_bit`. Iterating over it yields the remaining bits.

## File format

A `.huff` file holds three parts, in this order:

1. The length of the original text, as a 4-byte little-endian signed integer.
2. One entry for each character, written as `|<byte>-<code>|`. The code is made of the characters `0` and `1`.
3. The encoded bit stream, padded with zeros to a whole byte.

## Limitations

- A text made of a single distinct character gets no code. huffpack cannot compress
  such a text and reports an error.
- A decoded character is emitted once its bits match exactly one code in the table.
  Decoding stops after the stored number of characters.