"""Page-oriented PDF parsing backends."""

import asyncio
import io
from abc import ABC, abstractmethod

import pdfplumber

from docuchat.documents.models import TextFragment


class PdfPages(ABC):
    """An opened, paginated document."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the document."""
        ...

    @abstractmethod
    async def get_fragments(self, page_number: int) -> list[TextFragment]:
        """
        Get the text fragments of one page.

        Args:
            page_number: 1-based page number

        Returns:
            Fragments in the parser's reading order
        """
        ...

    async def close(self) -> None:
        """Release parser resources."""


class PdfParser(ABC):
    """Opens binary PDF content for page-by-page text retrieval."""

    @abstractmethod
    async def open(self, data: bytes) -> PdfPages:
        """Open PDF bytes; raises on malformed input."""
        ...


class PdfPlumberPages(PdfPages):
    """pdfplumber-backed page access."""

    def __init__(self, pdf: "pdfplumber.PDF"):
        self._pdf = pdf

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    async def get_fragments(self, page_number: int) -> list[TextFragment]:
        page = self._pdf.pages[page_number - 1]
        words = await asyncio.to_thread(page.extract_words)
        return [
            TextFragment(text=w["text"], x=float(w["x0"]), y=float(w["top"]))
            for w in words
        ]

    async def close(self) -> None:
        await asyncio.to_thread(self._pdf.close)


class PdfPlumberParser(PdfParser):
    """Default parser built on pdfplumber (pdfminer.six)."""

    async def open(self, data: bytes) -> PdfPages:
        pdf = await asyncio.to_thread(pdfplumber.open, io.BytesIO(data))
        return PdfPlumberPages(pdf)
