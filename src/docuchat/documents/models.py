"""Document data models for ingestion and summarization."""

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import aiofiles

from docuchat.core.exceptions import ReadError


class DocumentFormat(str, Enum):
    """Extraction strategy a document is routed to."""

    TEXT = "text"
    PDF = "pdf"
    WORD = "word"
    IMAGE = "image"


class ExtractionKind(str, Enum):
    """How the extracted text was obtained."""

    CONTENT = "content"          # Real text taken from the document
    PLACEHOLDER = "placeholder"  # Format not implemented, descriptive stand-in


@dataclass(frozen=True)
class Document:
    """An uploaded document awaiting extraction."""

    content: bytes
    media_type: str
    filename: str = ""
    size_bytes: int = -1  # Defaults to len(content)

    def __post_init__(self) -> None:
        if self.size_bytes < 0:
            object.__setattr__(self, "size_bytes", len(self.content))

    @classmethod
    async def from_path(cls, path: str | Path, media_type: str | None = None) -> "Document":
        """
        Load a document from disk.

        Args:
            path: File to read
            media_type: Declared media type (guessed from the file name if omitted)

        Raises:
            ReadError: If the file cannot be read
        """
        path = Path(path)
        if media_type is None:
            media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"

        try:
            async with aiofiles.open(path, "rb") as f:
                content = await f.read()
        except OSError as e:
            raise ReadError(f"Failed to read {path.name}: {e}") from e

        return cls(content=content, media_type=media_type, filename=path.name)


@dataclass(frozen=True)
class ExtractedText:
    """Plain text produced from a document."""

    text: str
    format: DocumentFormat
    kind: ExtractionKind = ExtractionKind.CONTENT

    @property
    def is_placeholder(self) -> bool:
        return self.kind is ExtractionKind.PLACEHOLDER


@dataclass(frozen=True)
class TextFragment:
    """A positioned run of text on a PDF page."""

    text: str
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class SummaryRecord:
    """Structured summary returned by the summarization service."""

    short: str = ""
    detailed: str = ""
    bullets: tuple[str, ...] = field(default_factory=tuple)
    insights: tuple[str, ...] = field(default_factory=tuple)
    keywords: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "short": self.short,
            "detailed": self.detailed,
            "bullets": list(self.bullets),
            "insights": list(self.insights),
            "keywords": list(self.keywords),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SummaryRecord":
        """
        Deserialize from a service response; missing fields become empty.

        Raises:
            ValueError: If a list field holds something other than strings
        """
        return cls(
            short=str(data.get("short") or ""),
            detailed=str(data.get("detailed") or ""),
            bullets=_string_items(data, "bullets"),
            insights=_string_items(data, "insights"),
            keywords=_string_items(data, "keywords"),
        )


def _string_items(data: dict[str, Any], key: str) -> tuple[str, ...]:
    """List field as a tuple; a bare string counts as a single item."""
    value = data.get(key)
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ValueError(f"Summary field '{key}' must be a list of strings")
