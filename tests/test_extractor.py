"""Tests for the decoder chain.

PDF readers are replaced with small fakes so no binary fixtures are
needed; the DOCX case builds a real document with python-docx.
"""

from __future__ import annotations

import io
from types import SimpleNamespace

import docx
import pytest

from resume_ingest import extractor
from resume_ingest.extractor import ExtractedText, RawDocument, extract, extract_text

PROSE = "Jane Doe is a data engineer who likes Python and SQL."


class _FakePlumberPage:
    def __init__(self, words):
        self._words = words

    def extract_words(self):
        return [{"text": w} for w in self._words]


class _FakePlumberPdf:
    def __init__(self, pages):
        self.pages = pages

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _fake_pdfplumber(pages=None, error=None):
    def _open(stream):
        if error:
            raise error
        return _FakePlumberPdf([_FakePlumberPage(p.split()) for p in pages])

    return SimpleNamespace(open=_open)


def _fake_pdf_reader(pages=None, error=None):
    def _reader(stream):
        if error:
            raise error
        return SimpleNamespace(pages=[SimpleNamespace(extract_text=lambda t=t: t) for t in pages])

    return _reader


def _docx_bytes(*paragraphs: str) -> bytes:
    document = docx.Document()
    for p in paragraphs:
        document.add_paragraph(p)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


def test_plain_text_round_trip() -> None:
    doc = RawDocument(PROSE.encode("utf-8"), "resume.txt", "text/plain")
    assert extract(doc) == PROSE
    assert extract_text(doc) == ExtractedText(PROSE, "utf-8", False)


def test_pdf_uses_pdfplumber_first(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(extractor, "pdfplumber", _fake_pdfplumber([PROSE, "Page two (cid:12)text"]))
    monkeypatch.setattr(extractor, "PdfReader", _fake_pdf_reader(error=AssertionError("not reached")))
    result = extract_text(RawDocument(b"%PDF-1.4", "CV.PDF", "application/pdf"))
    assert result.driver == "pdfplumber"
    assert result.text == PROSE + "\nPage two text"


def test_pdf_falls_back_to_pypdf(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(extractor, "pdfplumber", _fake_pdfplumber(error=ValueError("broken xref")))
    monkeypatch.setattr(extractor, "PdfReader", _fake_pdf_reader([PROSE]))
    result = extract_text(RawDocument(b"%PDF-1.4", "cv.pdf", "application/pdf"))
    assert result == ExtractedText(PROSE, "pypdf", False)


def test_pdf_blank_text_layer_falls_through(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(extractor, "pdfplumber", _fake_pdfplumber(["   "]))
    monkeypatch.setattr(extractor, "PdfReader", _fake_pdf_reader(["\n"]))
    result = extract_text(RawDocument(PROSE.encode(), "cv.pdf", "application/pdf"))
    assert result.driver == "utf-8"
    assert result.text == PROSE


def test_docx_round_trip() -> None:
    doc = RawDocument(_docx_bytes(PROSE), "cv.docx", "application/msword")
    assert extract_text(doc) == ExtractedText(PROSE, "docx", False)


def test_legacy_doc_falls_back_to_raw_decode() -> None:
    doc = RawDocument(PROSE.encode(), "cv.doc", "application/msword")
    assert extract_text(doc).driver == "utf-8"
    assert extract(doc) == PROSE


def test_decoders_only_run_for_their_extension(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(extractor, "pdfplumber", _fake_pdfplumber(error=AssertionError("pdf on txt")))
    assert extract(RawDocument(PROSE.encode(), "notes.rtf", "application/rtf")) == PROSE


@pytest.mark.parametrize("data,name", [(b"", "empty.txt"), (b"   \n\t ", "blank.txt")])
def test_blank_input_yields_empty_string(data: bytes, name: str) -> None:
    assert extract(RawDocument(data, name, "application/octet-stream")) == ""


@pytest.mark.parametrize(
    "data,name",
    [
        (b"\xff\xfe\x00garbage\xc3", "binary.txt"),
        (b"not really a pdf \xff", "broken.pdf"),
        (b"PK\x03\x04 truncated zip \xff", "broken.docx"),
    ],
)
def test_undecodable_bytes_still_produce_text(data: bytes, name: str) -> None:
    result = extract_text(RawDocument(data, name, "application/octet-stream"))
    assert result.driver == "utf-8"
    assert "�" in result.text


def test_latin1_text_is_not_rejected() -> None:
    data = "José García\nSkills: Python, SQL\njose@example.com".encode("latin-1")
    text = extract(RawDocument(data, "cv.txt", "text/plain"))
    assert text.startswith("Jos� Garc�a")
    assert "Skills: Python, SQL" in text
    assert "jose@example.com" in text


def test_binary_doc_degrades_to_raw_decode() -> None:
    ole_header = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 8
    doc = RawDocument(ole_header + b"Jane Doe Python SQL", "cv.doc", "application/msword")
    result = extract_text(doc)
    assert result.driver == "utf-8"
    assert "Jane Doe Python SQL" in result.text


def test_truncation_is_a_prefix() -> None:
    text = "".join(chr(ord("a") + i % 26) for i in range(100_000))
    doc = RawDocument(text.encode(), "big.txt", "text/plain")
    result = extract_text(doc)
    assert result.truncated
    assert result.text == text[:60_000]
    assert extract_text(doc) == result
    assert extract(doc, max_chars=15_000) == text[:15_000]


def test_from_path(tmp_path) -> None:
    path = tmp_path / "Resume.TXT"
    path.write_text(PROSE, encoding="utf-8")
    doc = RawDocument.from_path(path)
    assert doc.extension == ".txt"
    assert doc.mime_type == "text/plain"
    assert extract(doc) == PROSE
