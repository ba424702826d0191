"""Domain models for document previews."""

from dataclasses import dataclass
from enum import Enum


class PreviewStatus(str, Enum):
    """Lifecycle of a preview session."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class MediaKind(str, Enum):
    """Rendering strategy for a previewed document."""

    UNKNOWN = "unknown"
    IMAGE = "image"
    PDF = "pdf"


class Transport(str, Enum):
    """How a preview obtains the document it shows."""

    HEAD_PROBE = "head_probe"
    INLINE_PAYLOAD = "inline_payload"


@dataclass(frozen=True)
class PreviewState:
    """Snapshot of a preview session.

    ``media_kind`` and ``resource_locator`` are only meaningful while the
    status is ``READY``; every other status carries ``UNKNOWN`` and ``None``.
    """

    subject_id: int | None = None
    status: PreviewStatus = PreviewStatus.IDLE
    media_kind: MediaKind = MediaKind.UNKNOWN
    resource_locator: str | None = None


@dataclass(frozen=True)
class PreviewView:
    """What the modal should display for a given state."""

    kind: str
    title: str
    message: str | None = None
    media_url: str | None = None
    download_locator: str | None = None
    download_label: str | None = None
