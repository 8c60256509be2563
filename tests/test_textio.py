from unittest import mock

import pytest

from modbase.textio import DecodedText, decode_text_data, iter_file_lines, read_file_text


def test_plain_utf8():
    result = decode_text_data("héllo wörld".encode("utf-8"))
    assert result == DecodedText("héllo wörld", "UTF-8", False)


def test_empty_data():
    assert decode_text_data(b"") == DecodedText("", "UTF-8", False)


def test_utf8_bom_removed():
    result = decode_text_data(b"\xef\xbb\xbfabc")
    assert result.text == "abc"
    assert result.had_bom is True
    assert result.encoding == "UTF-8"


def test_utf16le_with_bom():
    data = b"\xff\xfe" + "text ü".encode("utf-16-le")
    result = decode_text_data(data)
    assert result.text == "text ü"
    assert result.encoding == "UTF-16LE"
    assert result.had_bom is True


def test_utf16be_with_bom():
    data = b"\xfe\xff" + "abc".encode("utf-16-be")
    result = decode_text_data(data)
    assert result.text == "abc"
    assert result.encoding == "UTF-16BE"


def test_utf32le_with_bom():
    data = b"\xff\xfe\x00\x00" + "xyz".encode("utf-32-le")
    result = decode_text_data(data)
    assert result.text == "xyz"
    assert result.encoding == "UTF-32LE"
    assert result.had_bom is True


def test_utf16_without_bom_detected_by_nulls():
    data = "plain".encode("utf-16-le")
    result = decode_text_data(data)
    assert result.text == "plain"
    assert result.had_bom is False
    assert result.encoding == "UTF-8"


def test_invalid_utf8_falls_back_to_locale_encoding():
    with mock.patch("locale.getpreferredencoding", return_value="latin-1"):
        result = decode_text_data(b"caf\xe9")
    assert result.text == "café"
    assert result.had_bom is False


@pytest.mark.parametrize("text", ["", "a", "line1\nline2\r\n", "日本語", "tab\there"])
def test_utf8_round_trip(text):
    assert decode_text_data(text.encode("utf-8")).text == text


def test_read_file_text(tmp_path):
    path = tmp_path / "f.txt"
    path.write_bytes(b"\xef\xbb\xbf[section]\nkey=value\n")
    result = read_file_text(path)
    assert result.text == "[section]\nkey=value\n"
    assert result.had_bom is True


def test_read_file_text_missing(tmp_path):
    result = read_file_text(tmp_path / "missing.txt")
    assert result.text == ""
    assert result.encoding is None


def test_iter_file_lines(tmp_path):
    path = tmp_path / "lines.txt"
    path.write_bytes(b"  a  \r\n\r\n# comment\n   \n  #x\nb\tc\nlast")
    assert list(iter_file_lines(path)) == ["a", "b\tc", "last"]


def test_iter_file_lines_utf8(tmp_path):
    path = tmp_path / "lines.txt"
    path.write_bytes("  ünï  \n".encode("utf-8"))
    assert list(iter_file_lines(path)) == ["ünï"]


def test_iter_file_lines_empty(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert list(iter_file_lines(path)) == []


def test_iter_file_lines_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        iter_file_lines(tmp_path / "nope.txt")