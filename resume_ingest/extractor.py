"""
Uploaded document ➜ raw text
– ordered decoder chain: pdfplumber, pypdf, python-docx, plain UTF-8
– the first decoder yielding non-blank text wins; failures fall through
– strips `(cid:N)` glyph artifacts
– suppresses verbose CropBox warnings from pdfplumber/pdfminer
"""
from __future__ import annotations
import io, logging, mimetypes, re, warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import docx
import pdfplumber
from pypdf import PdfReader

from .config import EXTRACT_MAX_CHARS

logger = logging.getLogger(__name__)

# silence noisy PDF logging
logging.getLogger("pdfplumber").setLevel(logging.ERROR)
logging.getLogger("pdfminer").setLevel(logging.ERROR)
logging.getLogger("pypdf").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", category=UserWarning, module="pdfminer")

_CID_RE = re.compile(r"\(cid:\d+\)")


@dataclass(frozen=True)
class RawDocument:
    """Uploaded bytes plus the declared filename and MIME type."""
    data: bytes
    filename: str = ""
    mime_type: str = "application/octet-stream"

    @property
    def extension(self) -> str:
        return Path(self.filename or "").suffix.lower()

    @classmethod
    def from_path(cls, path: str | Path, mime_type: str | None = None) -> "RawDocument":
        path = Path(path)
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(data=path.read_bytes(), filename=path.name, mime_type=mime_type)


@dataclass(frozen=True)
class ExtractedText:
    text: str
    driver: Optional[str] = None
    truncated: bool = False


# ───────────────────────────────────────── decoders ──
def _pdfplumber_text(data: bytes) -> str:
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        pages = [" ".join(w["text"] for w in p.extract_words()) for p in pdf.pages]
    return _CID_RE.sub("", "\n".join(pages))


def _pypdf_text(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    return "\n".join(p.extract_text() or "" for p in reader.pages)


def _docx_text(data: bytes) -> str:
    document = docx.Document(io.BytesIO(data))
    return "\n".join(p.text for p in document.paragraphs)


def _utf8_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


# (driver, extensions it applies to – None means any, decoder)
DECODERS: tuple[tuple[str, Optional[frozenset], Callable[[bytes], str]], ...] = (
    ("pdfplumber", frozenset({".pdf"}), _pdfplumber_text),
    ("pypdf", frozenset({".pdf"}), _pypdf_text),
    ("docx", frozenset({".doc", ".docx"}), _docx_text),
    ("utf-8", None, _utf8_text),
)


def extract_text(document: RawDocument, max_chars: int = EXTRACT_MAX_CHARS) -> ExtractedText:
    ext = document.extension
    for driver, extensions, decode in DECODERS:
        if extensions is not None and ext not in extensions:
            continue
        try:
            text = decode(document.data)
        except Exception as exc:  # noqa: BLE001
            logger.warning("%s could not read %s: %s", driver, document.filename or "<upload>", exc)
            continue
        if text and text.strip():
            logger.debug("%s extracted %d chars from %s", driver, len(text), document.filename)
            return ExtractedText(text[:max_chars], driver, len(text) > max_chars)

    logger.info("no text extracted from %s", document.filename or "<upload>")
    return ExtractedText("")


def extract(document: RawDocument, max_chars: int = EXTRACT_MAX_CHARS) -> str:
    """Plain-text view of extract_text(); '' means nothing usable."""
    return extract_text(document, max_chars).text
