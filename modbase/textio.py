"""Reading text of unknown encoding, and line-oriented text files."""

from __future__ import annotations

import locale
import os
from dataclasses import dataclass
from typing import Iterator, Optional, Union

__all__ = ["DecodedText", "decode_text_data", "read_file_text", "iter_file_lines"]

PathLike = Union[str, "os.PathLike[str]"]

_BOM = "\ufeff"

# byte-order marks, longest first so UTF-32 LE is not taken for UTF-16 LE
_BOMS = (
    (b"\x00\x00\xfe\xff", "UTF-32BE", "utf-32-be"),
    (b"\xff\xfe\x00\x00", "UTF-32LE", "utf-32-le"),
    (b"\xef\xbb\xbf", "UTF-8", "utf-8"),
    (b"\xfe\xff", "UTF-16BE", "utf-16-be"),
    (b"\xff\xfe", "UTF-16LE", "utf-16-le"),
)


@dataclass(frozen=True)
class DecodedText:
    """Text decoded from raw bytes, with what was learned about its encoding."""

    text: str
    encoding: Optional[str]
    had_bom: bool


def _encoding_from_bom(data: bytes) -> Optional[tuple[str, str]]:
    for bom, name, codec in _BOMS:
        if data.startswith(bom):
            return name, codec
    return None


def decode_text_data(data: bytes) -> DecodedText:
    """Decode ``data``, guessing its encoding.

    UTF-8 is tried first. If that does not reproduce the bytes exactly, or the
    text holds NUL characters, the encoding is taken from a byte-order mark;
    failing that, UTF-16 is assumed when there were NULs and the locale's
    encoding otherwise. The reported encoding only changes from UTF-8 when a
    byte-order mark identified it. A leading byte-order mark is removed from
    the text.
    """
    data = bytes(data)
    encoding = "UTF-8"
    text = data.decode("utf-8", errors="replace")

    # embedded NULs are rare in text files and suggest UTF-16
    has_embedded_nulls = "\x00" in text

    if has_embedded_nulls or text.encode("utf-8", errors="surrogatepass") != data:
        found = _encoding_from_bom(data)
        if found is not None:
            encoding, codec = found
            text = data.decode(codec, errors="replace")
        elif has_embedded_nulls:
            text = data.decode("utf-16-le", errors="replace")
        else:
            system = locale.getpreferredencoding(False)
            text = data.decode(system, errors="replace")

    if text.startswith(_BOM):
        return DecodedText(text[1:], encoding, True)
    return DecodedText(text, encoding, False)


def read_file_text(path: PathLike) -> DecodedText:
    """Read a file and decode it with :func:`decode_text_data`.

    A file that cannot be read gives empty text with no encoding.
    """
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError:
        return DecodedText("", None, False)
    return decode_text_data(data)


def _meaningful_lines(data: bytes) -> Iterator[str]:
    for raw in data.replace(b"\r", b"\n").split(b"\n"):
        line = raw.lstrip()
        if not line or line.startswith(b"#"):
            continue
        yield line.rstrip().decode("utf-8", errors="replace")


def iter_file_lines(path: PathLike) -> Iterator[str]:
    """Iterate over the non-empty, non-comment lines of a UTF-8 file.

    Surrounding whitespace is stripped from each line and lines starting with
    ``#`` are skipped. The file is read at once, so an unreadable file raises
    :class:`OSError` from this call.
    """
    with open(path, "rb") as handle:
        data = handle.read()
    return _meaningful_lines(data)