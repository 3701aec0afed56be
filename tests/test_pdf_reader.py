import zlib

import pytest

from kowalski.pdf_reader import (
    InvalidPathError,
    PdfError,
    PdfReader,
    PdfReaderError,
    extract_text,
    pdf_to_text,
    read_pdf_file,
)


def _make_pdf(content: bytes, compress: bool = True) -> bytes:
    if compress:
        body = zlib.compress(content)
        header = b"<< /Length %d /Filter /FlateDecode >>" % len(body)
    else:
        body = content
        header = b"<< /Length %d >>" % len(body)
    return (
        b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\n4 0 obj\n"
        + header
        + b"\nstream\n"
        + body
        + b"\nendstream\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"
    )


@pytest.fixture
def write_pdf(tmp_path):
    def write(content: bytes, compress: bool = True, name: str = "paper.pdf"):
        path = tmp_path / name
        path.write_bytes(_make_pdf(content, compress))
        return path

    return write


def test_invalid_file():
    with pytest.raises(InvalidPathError):
        PdfReader().read_pdf("nonexistent.pdf")


def test_invalid_extension():
    with pytest.raises(InvalidPathError):
        PdfReader().read_pdf("test.txt")


def test_existing_non_pdf_extension(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    with pytest.raises(InvalidPathError) as info:
        PdfReader().read_pdf(str(path))
    assert str(info.value) == "Invalid path: File must be a PDF"


def test_missing_file_message():
    with pytest.raises(PdfReaderError) as info:
        PdfReader().read_pdf("nonexistent.pdf")
    assert str(info.value) == "Invalid path: File not found: nonexistent.pdf"


def test_reads_compressed_text(write_pdf):
    path = write_pdf(b"BT /F1 12 Tf 72 712 Td (Hello World) Tj ET")
    assert PdfReader().read_pdf(str(path)).strip() == "Hello World"


def test_reads_uncompressed_text(write_pdf):
    path = write_pdf(b"BT /F1 12 Tf 72 712 Td (Plain text) Tj ET", compress=False)
    assert extract_text(path).strip() == "Plain text"


def test_uppercase_extension_accepted(write_pdf):
    path = write_pdf(b"BT (Upper) Tj ET", name="PAPER.PDF")
    assert PdfReader().read_pdf(str(path)).strip() == "Upper"


def test_escapes_in_literal_strings(write_pdf):
    path = write_pdf(rb"BT (a\(b\)c) Tj ET")
    assert extract_text(path).strip() == "a(b)c"


def test_tj_array_and_hex_string(write_pdf):
    path = write_pdf(b"BT [(Hel) -10 (lo)] TJ T* <576F726C64> Tj ET")
    assert extract_text(path).strip() == "Hello\nWorld"


def test_large_tj_offset_becomes_space(write_pdf):
    path = write_pdf(b"BT [(Hello) -500 (there)] TJ ET")
    assert extract_text(path).strip() == "Hello there"


def test_garbage_pdf_raises(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"not a pdf at all")
    with pytest.raises(PdfError):
        PdfReader().read_pdf(str(path))


def test_pdf_to_text_writes_output(write_pdf, tmp_path):
    path = write_pdf(b"BT (Saved text) Tj ET")
    output = tmp_path / "out.txt"
    pdf_to_text(str(path), str(output))
    assert output.read_text(encoding="utf-8").strip() == "Saved text"


def test_read_pdf_file(write_pdf):
    path = write_pdf(b"BT (Direct) Tj ET")
    assert read_pdf_file(str(path)).strip() == "Direct"