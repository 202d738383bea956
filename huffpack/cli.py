"""Command-line front end: compress text or files and decompress packed files."""

from __future__ import annotations

import getopt
import re
import sys
from typing import List, Optional, Sequence, TextIO

from huffpack.huffman import (
    build_table,
    compress_to_stream,
    count_characters,
    decompress_stream,
    encode_bits,
    format_results,
)

_SHORT_OPTIONS = "i:o:m:cdp?"
_LONG_OPTIONS = [
    "input=",
    "output=",
    "msg=",
    "probabilities",
    "compress",
    "decompress",
    "help",
]

_HELP = (
    "Help\n"
    "  -m --msg <inputText>\n"
    "  -i --input <inputFileName> -> Defines input file. For compression use .txt"
    " and for decompression use .huff.\n"
    "  -o --output <outputFileName> -> Defines output file. For compression use .huff"
    " and for decompression use .txt.\n"
    "  -c --compress -> Compressing a text\n"
    "  -d --decompress -> Decompressing a .huff file created by this program\n"
    "  -p --probabilities -> User will be able to define a custom probablities"
    " (frequencies because of ints... :D) for each character."
    " (does not work when importing from a .txt file)\n"
    "  -> If output file is not specified then output will be in command window."
    " If input file or message is not specified then user will be asked for an"
    " additional input after launch.\n"
    "  -> If action (-c or -d) is not specified then default action is compression."
    "  -> PRO TIP: You can use -m to set unique characters and then -p to define"
    " custom frequencies for each one of them. For example: -m ABCDEFG -p."
)

_INTEGER = re.compile(r"[+-]?\d+")


def read_input_text(stream: TextIO) -> str:
    """Read one line of text from ``stream`` without its trailing newline."""
    line = stream.readline()
    if not line:
        raise EOFError("no input text")
    return line[:-1] if line.endswith("\n") else line


def prompt_frequencies(
    counts: Sequence[int], input_stream: TextIO, output_stream: TextIO
) -> List[int]:
    """Ask for a new frequency of every byte that occurs; return the new counts."""
    result = list(counts)
    pending = ""

    def next_integer() -> int:
        nonlocal pending
        while True:
            pending = pending.lstrip()
            if not pending:
                line = input_stream.readline()
                if not line:
                    raise EOFError("input ended while reading a frequency")
                pending = line
                continue
            match = _INTEGER.match(pending)
            if match:
                pending = pending[match.end():]
                return int(match.group())
            pending = ""
            output_stream.write("That is not a number! Try that again: ")

    for symbol, count in enumerate(counts):
        if count > 0:
            output_stream.write(
                f"Frequency of character '{chr(symbol)}' is '{count}', write new value: "
            )
            result[symbol] = next_integer()
    return result


def _compress(
    input_file: Optional[str],
    output_file: Optional[str],
    text: Optional[str],
    probabilities: bool,
) -> int:
    from_file = input_file is not None
    if from_file:
        probabilities = False
        try:
            with open(input_file, "rb") as handle:
                data = handle.read()
        except OSError as exc:
            print(f"Error opening file: {exc}", file=sys.stderr)
            return 1
    else:
        if text is None:
            sys.stdout.write("Input a text: ")
            sys.stdout.flush()
            try:
                text = read_input_text(sys.stdin)
            except EOFError as exc:
                print(f"Error: {exc}", file=sys.stderr)
                return 1
        data = text.encode("utf-8")

    counts = count_characters(data)
    if probabilities:
        try:
            counts = prompt_frequencies(counts, sys.stdin, sys.stdout)
        except EOFError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    table = build_table(counts)
    try:
        bits = encode_bits(data, table)
        if output_file is not None:
            with open(output_file, "wb") as handle:
                compress_to_stream(data, counts, table, handle)
            print(f"... saved into {output_file}")
        elif from_file:
            sys.stdout.write("Compressed text: \n" + bits + "\n")
        else:
            sys.stdout.write(format_results(data, counts, table))
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error opening file: {exc}", file=sys.stderr)
        return 1
    return 0


def _decompress(input_file: Optional[str], output_file: Optional[str]) -> int:
    if not input_file:
        sys.stdout.write("You need to specifi input .huff file.\n")
        return 1
    try:
        with open(input_file, "rb") as handle:
            decoded = decompress_stream(handle)
    except OSError as exc:
        print(f"Error opening file: {exc}", file=sys.stderr)
        return 1
    except EOFError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if output_file is None:
        sys.stdout.write(decoded.decode("utf-8", errors="replace") + "\n")
        sys.stdout.write(f"... loaded from {input_file} \n")
        return 0
    try:
        with open(output_file, "wb") as handle:
            handle.write(decoded)
    except OSError as exc:
        print(f"Error opening file: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(f"... loaded from {input_file} ... saved to {output_file}\n")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        options, _ = getopt.gnu_getopt(args, _SHORT_OPTIONS, _LONG_OPTIONS)
    except getopt.GetoptError:
        sys.stdout.write(_HELP)
        return 1

    compress = True
    probabilities = False
    input_file: Optional[str] = None
    output_file: Optional[str] = None
    text: Optional[str] = None

    for option, value in options:
        if option in ("-i", "--input"):
            input_file = value
        elif option in ("-o", "--output"):
            output_file = value
        elif option in ("-m", "--msg"):
            text = value
        elif option in ("-p", "--probabilities"):
            probabilities = True
        elif option in ("-c", "--compress"):
            compress = True
        elif option in ("-d", "--decompress"):
            compress = False
        else:
            sys.stdout.write(_HELP)
            return 1

    if compress:
        return _compress(input_file, output_file, text, probabilities)
    return _decompress(input_file, output_file)


if __name__ == "__main__":
    sys.exit(main())