"""Huffman coding of text: bit-level I/O, coding tables, the .huff format and a command line."""

__version__ = "0.1.0"
__all__ = ["bits", "huffman", "cli"]