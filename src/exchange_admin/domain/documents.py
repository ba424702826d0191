"""Domain models for stored documents."""

from dataclasses import dataclass

PDF_CONTENT_TYPE = "application/pdf"


@dataclass(frozen=True)
class DocumentFormat:
    """Media type and file extension detected for a document."""

    content_type: str
    extension: str


@dataclass(frozen=True)
class StoredDocument:
    """A decoded document ready to be served."""

    content: bytes
    format: DocumentFormat
    filename: str

    @property
    def size(self) -> int:
        return len(self.content)
