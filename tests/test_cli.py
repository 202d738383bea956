import io
import sys

import pytest

from huffpack.cli import main, prompt_frequencies, read_input_text
from huffpack.huffman import build_table, count_characters, encode_bits


def test_help_returns_failure_and_prints_help(capsys):
    assert main(["-?"]) == 1
    assert capsys.readouterr().out.startswith("Help\n")


def test_long_help_option(capsys):
    assert main(["--help"]) == 1
    assert "-m --msg <inputText>" in capsys.readouterr().out


def test_unknown_option_prints_help(capsys):
    assert main(["-z"]) == 1
    assert "Help" in capsys.readouterr().out


def test_decompress_without_input_fails(capsys):
    assert main(["-d"]) == 1
    assert "You need to specifi input .huff file." in capsys.readouterr().out


def test_round_trip_through_files(tmp_path, capsys):
    packed = tmp_path / "msg.huff"
    restored = tmp_path / "msg.txt"
    assert main(["-m", "abracadabra", "-o", str(packed)]) == 0
    assert main(["-d", "-i", str(packed), "-o", str(restored)]) == 0
    assert restored.read_bytes() == b"abracadabra"
    out = capsys.readouterr().out
    assert f"... saved into {packed}" in out
    assert f"... loaded from {packed} ... saved to {restored}" in out


def test_round_trip_long_options(tmp_path):
    packed = tmp_path / "msg.huff"
    restored = tmp_path / "msg.txt"
    assert main(["--msg", "mississippi river", "--output", str(packed), "--compress"]) == 0
    assert main(["--decompress", "--input", str(packed), "--output", str(restored)]) == 0
    assert restored.read_text() == "mississippi river"


def test_compress_text_to_console(capsys):
    assert main(["-m", "abracadabra"]) == 0
    out = capsys.readouterr().out
    table = build_table(count_characters("abracadabra"))
    assert out.startswith("Compressed text: \n" + encode_bits("abracadabra", table) + "\n\n")
    assert "Character | Frequency | Code\n" in out
    assert f"a | 5 | {table[ord('a')]}\n" in out


def test_compress_file_to_console(tmp_path, capsys):
    source = tmp_path / "in.txt"
    source.write_bytes(b"hello world")
    assert main(["-i", str(source)]) == 0
    table = build_table(count_characters(b"hello world"))
    expected = "Compressed text: \n" + encode_bits(b"hello world", table) + "\n"
    assert capsys.readouterr().out == expected


def test_file_input_ignores_message_and_probabilities(tmp_path, capsys):
    source = tmp_path / "in.txt"
    source.write_bytes(b"banana")
    packed = tmp_path / "in.huff"
    restored = tmp_path / "out.txt"
    assert main(["-i", str(source), "-m", "ignored text", "-p", "-o", str(packed)]) == 0
    assert main(["-d", "-i", str(packed), "-o", str(restored)]) == 0
    assert restored.read_bytes() == b"banana"


def test_decompress_to_console(tmp_path, capsys):
    packed = tmp_path / "msg.huff"
    assert main(["-m", "abracadabra", "-o", str(packed)]) == 0
    capsys.readouterr()
    assert main(["-d", "-i", str(packed)]) == 0
    out = capsys.readouterr().out
    assert out == f"abracadabra\n... loaded from {packed} \n"


def test_missing_input_file_fails(tmp_path):
    assert main(["-i", str(tmp_path / "absent.txt")]) == 1
    assert main(["-d", "-i", str(tmp_path / "absent.huff")]) == 1


def test_single_distinct_character_is_an_error(capsys):
    assert main(["-m", "aaaa"]) == 1
    assert "Error" in capsys.readouterr().err


def test_text_read_from_stdin(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("typed text\n"))
    packed = tmp_path / "t.huff"
    restored = tmp_path / "t.txt"
    assert main(["-o", str(packed)]) == 0
    assert capsys.readouterr().out.startswith("Input a text: ")
    assert main(["-d", "-i", str(packed), "-o", str(restored)]) == 0
    assert restored.read_text() == "typed text"


def test_custom_probabilities_round_trip(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("1\n3\n2\n"))
    packed = tmp_path / "p.huff"
    restored = tmp_path / "p.txt"
    assert main(["-m", "abc", "-p", "-o", str(packed)]) == 0
    assert "Frequency of character 'a' is '1', write new value: " in capsys.readouterr().out
    assert main(["-d", "-i", str(packed), "-o", str(restored)]) == 0
    assert restored.read_text() == "abc"


def test_read_input_text_strips_newline():
    stream = io.StringIO("hello\nworld\n")
    assert read_input_text(stream) == "hello"
    assert read_input_text(stream) == "world"


def test_read_input_text_without_newline():
    assert read_input_text(io.StringIO("last")) == "last"


def test_read_input_text_at_end_raises():
    with pytest.raises(EOFError):
        read_input_text(io.StringIO(""))


def test_prompt_frequencies_sets_new_values():
    counts = count_characters("abb")
    out = io.StringIO()
    result = prompt_frequencies(counts, io.StringIO("5\n7\n"), out)
    assert result[ord("a")] == 5
    assert result[ord("b")] == 7
    assert counts[ord("a")] == 1
    assert sum(result) == 12
    assert out.getvalue() == (
        "Frequency of character 'a' is '1', write new value: "
        "Frequency of character 'b' is '2', write new value: "
    )


def test_prompt_frequencies_retries_on_bad_input():
    counts = count_characters("ab")
    out = io.StringIO()
    result = prompt_frequencies(counts, io.StringIO("x\n3\n4\n"), out)
    assert result[ord("a")] == 3
    assert result[ord("b")] == 4
    assert out.getvalue().count("That is not a number! Try that again: ") == 1


def test_prompt_frequencies_reads_several_numbers_per_line():
    counts = count_characters("ab")
    result = prompt_frequencies(counts, io.StringIO("8 9\n"), io.StringIO())
    assert (result[ord("a")], result[ord("b")]) == (8, 9)


def test_prompt_frequencies_end_of_input_raises():
    with pytest.raises(EOFError):
        prompt_frequencies(count_characters("ab"), io.StringIO("1\n"), io.StringIO())