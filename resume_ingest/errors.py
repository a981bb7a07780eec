"""
Typed failures raised to the caller of the résumé pipeline.

Decoder errors never get here; they are logged and skipped inside
the extractor. Transport status codes are the caller's business.
"""

from __future__ import annotations


class ResumeIngestError(Exception):
    """Base class. ``preview`` carries a short diagnostic excerpt."""

    def __init__(self, message: str, preview: str = ""):
        super().__init__(message)
        self.preview = preview


class ExtractionFailed(ResumeIngestError):
    """No decoder produced usable text from the uploaded document."""


class AIUnavailable(ResumeIngestError):
    """No completion service is configured."""


class AIParseFailed(ResumeIngestError):
    """The model never returned parseable JSON, even after repair and retry."""
