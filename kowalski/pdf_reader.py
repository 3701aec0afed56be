"""Read the text of PDF files."""

from __future__ import annotations

import os
import re
import zlib
from collections.abc import Iterator
from pathlib import Path


class PdfReaderError(Exception):
    """Raised when a PDF cannot be read."""

    prefix = "PDF reader error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class InvalidPathError(PdfReaderError):
    """The path does not exist or does not name a PDF."""

    prefix = "Invalid path"


class PdfError(PdfReaderError):
    """The file could not be parsed as a PDF."""

    prefix = "PDF error"


_LEXEME = re.compile(
    rb"(?P<space>\s+)|(?P<comment>%[^\r\n]*)|(?P<lit>\()|(?P<dopen><<)|(?P<dclose>>>)"
    rb"|(?P<hex><[0-9A-Fa-f\s]*>)|(?P<aopen>\[)|(?P<aclose>\])"
    rb"|(?P<name>/[^\s()<>\[\]{}/%]*)|(?P<word>[^\s()<>\[\]{}/%]+)|(?P<other>.)",
    re.S,
)
_NUMBER = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)")
_STREAM_START = re.compile(rb"(?<!end)stream\r?\n")
_TEXT_BLOCK = re.compile(rb"\bBT\b")
_WHITESPACE = re.compile(rb"\s")

_ESCAPES = {
    ord("n"): b"\n",
    ord("r"): b"\r",
    ord("t"): b"\t",
    ord("b"): b"\b",
    ord("f"): b"\f",
    ord("("): b"(",
    ord(")"): b")",
    ord("\\"): b"\\",
}
_OCTAL = range(0x30, 0x38)
_TJ_SPACE_THRESHOLD = -200


def _read_literal(data: bytes, pos: int) -> tuple[bytes, int]:
    """Read a literal string whose opening parenthesis ends just before pos."""
    out = bytearray()
    depth = 1
    end = len(data)
    while pos < end:
        char = data[pos]
        pos += 1
        if char == 0x5C:
            if pos >= end:
                break
            escaped = data[pos]
            pos += 1
            if escaped in _ESCAPES:
                out += _ESCAPES[escaped]
            elif escaped in _OCTAL:
                digits = bytes([escaped])
                while len(digits) < 3 and pos < end and data[pos] in _OCTAL:
                    digits += data[pos : pos + 1]
                    pos += 1
                out.append(int(digits, 8) & 0xFF)
            elif escaped == 0x0D:
                if pos < end and data[pos] == 0x0A:
                    pos += 1
            elif escaped != 0x0A:
                out.append(escaped)
        elif char == 0x28:
            depth += 1
            out.append(char)
        elif char == 0x29:
            depth -= 1
            if depth == 0:
                return bytes(out), pos
            out.append(char)
        else:
            out.append(char)
    return bytes(out), pos


def _lexemes(data: bytes) -> Iterator[tuple[str, object]]:
    pos = 0
    while (match := _LEXEME.match(data, pos)) is not None:
        kind = match.lastgroup
        pos = match.end()
        if kind == "lit":
            value, pos = _read_literal(data, pos)
            yield "str", value
        elif kind == "hex":
            digits = _WHITESPACE.sub(b"", match.group()[1:-1])
            if len(digits) % 2:
                digits += b"0"
            yield "str", bytes.fromhex(digits.decode("ascii"))
        elif kind in ("aopen", "aclose"):
            yield kind, None
        elif kind == "name":
            yield "name", match.group().decode("latin-1")
        elif kind == "word":
            word = match.group().decode("latin-1")
            if _NUMBER.fullmatch(word):
                yield "num", float(word)
            else:
                yield "op", word


def _decode_text(raw: bytes) -> str:
    if raw.startswith(b"\xfe\xff"):
        return raw[2:].decode("utf-16-be", errors="replace")
    return raw.decode("latin-1")


def _content_text(stream: bytes) -> str:
    """Collect the text shown by the operators of one content stream."""
    parts: list[str] = []
    operands: list[object] = []
    array: list[object] | None = None
    for kind, value in _lexemes(stream):
        if kind == "aopen":
            array = []
        elif kind == "aclose":
            operands.append(array if array is not None else [])
            array = None
        elif array is not None and kind in ("str", "num"):
            array.append(value)
        elif kind in ("str", "num", "name"):
            operands.append(value)
        elif kind == "op":
            last = operands[-1] if operands else None
            if value == "Tj" and isinstance(last, bytes):
                parts.append(_decode_text(last))
            elif value in ("'", '"'):
                parts.append("\n")
                if isinstance(last, bytes):
                    parts.append(_decode_text(last))
            elif value == "TJ" and isinstance(last, list):
                for item in last:
                    if isinstance(item, bytes):
                        parts.append(_decode_text(item))
                    elif isinstance(item, float) and item < _TJ_SPACE_THRESHOLD:
                        parts.append(" ")
            elif value == "T*":
                parts.append("\n")
            elif value in ("Td", "TD") and isinstance(last, float) and last != 0:
                parts.append("\n")
            elif value == "ET":
                parts.append("\n")
            operands.clear()
    return "".join(parts)


def _streams(data: bytes) -> Iterator[tuple[bytes, bytes]]:
    """Yield the dictionary text and raw bytes of every stream object."""
    pos = 0
    while (match := _STREAM_START.search(data, pos)) is not None:
        end = data.find(b"endstream", match.end())
        if end < 0:
            return
        header_start = max(data.rfind(b"obj", 0, match.start()), 0)
        yield data[header_start : match.start()], data[match.end() : end]
        pos = end + len(b"endstream")


def _decode_stream(header: bytes, raw: bytes) -> bytes | None:
    if b"/FlateDecode" in header:
        try:
            return zlib.decompressobj().decompress(raw)
        except zlib.error:
            return None
    if b"/Filter" in header:
        return None
    return raw


def extract_text(path: str | os.PathLike[str]) -> str:
    """Extract the text drawn by the content streams of a PDF file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise PdfError(str(exc)) from exc
    if not data.lstrip().startswith(b"%PDF-"):
        raise PdfError("file has no PDF header")
    texts = []
    for header, raw in _streams(data):
        stream = _decode_stream(header, raw)
        if stream and _TEXT_BLOCK.search(stream):
            texts.append(_content_text(stream))
    return "".join(texts)


class PdfReader:
    """Reads text from PDF files after checking the path."""

    def read_pdf(self, file_path: str | os.PathLike[str]) -> str:
        """Return the text of the PDF at file_path."""
        path = os.fspath(file_path)
        if not Path(path).exists():
            raise InvalidPathError(f"File not found: {path}")
        if not path.lower().endswith(".pdf"):
            raise InvalidPathError("File must be a PDF")
        return extract_text(path)


def pdf_to_text(pdf_path: str | os.PathLike[str], output_path: str | os.PathLike[str]) -> None:
    """Write the text of a PDF file to output_path."""
    text = PdfReader().read_pdf(pdf_path)
    Path(output_path).write_text(text, encoding="utf-8")


def read_pdf_file(pdf_path: str | os.PathLike[str]) -> str:
    """Return the text of a PDF file."""
    return PdfReader().read_pdf(pdf_path)