"""Preview session state machine for admin document modals.

A session is owned by one modal. Opening it with a subject id starts a
probe task; the probe result is applied only while the invocation that
started it is still current, i.e. the modal is open and neither ``close``
nor ``change_subject`` has run since. Every failure ends in the ``ERROR``
state; nothing is raised to the caller and there is no automatic retry.
"""

import asyncio
import base64
import logging
from dataclasses import dataclass

from exchange_admin.adapters.document_client import DocumentClient
from exchange_admin.domain.documents import PDF_CONTENT_TYPE
from exchange_admin.domain.preview import (
    MediaKind,
    PreviewState,
    PreviewStatus,
    PreviewView,
    Transport,
)
from exchange_admin.services.downloads import DownloadTrigger

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No document available"
ERROR_MESSAGE = "Unable to preview document."


@dataclass(frozen=True)
class DocumentSource:
    """Where a preview fetches its document and how."""

    endpoint: str
    title: str
    transport: Transport = Transport.HEAD_PROBE

    def locator(self, subject_id: int) -> str:
        """Return the retrieval path for a subject."""
        return self.endpoint.format(subject_id=subject_id)


KYC_DOCUMENT_SOURCE = DocumentSource(
    endpoint="/api/admin/kyc-document/{subject_id}",
    title="KYC Document",
)
PAYMENT_PROOF_SOURCE = DocumentSource(
    endpoint="/api/admin/payment-proof/{subject_id}",
    title="Payment Proof",
    transport=Transport.INLINE_PAYLOAD,
)


def media_kind_for(content_type: str | None) -> MediaKind:
    """Map a declared content type to a rendering strategy."""
    if content_type == PDF_CONTENT_TYPE:
        return MediaKind.PDF
    if not (content_type or "").startswith("image/"):
        logger.warning(
            "Previewing non-image content as an image",
            extra={"content_type": content_type},
        )
    return MediaKind.IMAGE


class PreviewSession:
    """Document preview bound to a single modal instance."""

    def __init__(
        self,
        client: DocumentClient,
        source: DocumentSource,
        download_trigger: DownloadTrigger,
        timeout_seconds: float | None = 10.0,
    ) -> None:
        self.client = client
        self.source = source
        self.download_trigger = download_trigger
        self.timeout_seconds = timeout_seconds
        self.subject_label = ""
        self._state = PreviewState()
        self._is_open = False
        self._generation = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> PreviewState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def pending(self) -> asyncio.Task[None] | None:
        """The in-flight probe task, if any."""
        return self._task

    def open(
        self, subject_id: int | None, subject_label: str = ""
    ) -> asyncio.Task[None] | None:
        """Open the modal for a subject and start loading its document.

        Must be called from a running event loop. Returns the probe task, or
        ``None`` when there is no subject to load.
        """
        self._is_open = True
        self.subject_label = subject_label
        return self._restart(subject_id)

    def change_subject(
        self, subject_id: int | None, subject_label: str = ""
    ) -> asyncio.Task[None] | None:
        """Point an open modal at another subject."""
        if subject_id == self._state.subject_id:
            return self._task
        self.subject_label = subject_label
        if not self._is_open:
            self._invalidate()
            self._state = PreviewState(subject_id=subject_id)
            return None
        return self._restart(subject_id)

    def close(self) -> None:
        """Close the modal, discarding any in-flight probe."""
        self._is_open = False
        self._invalidate()
        self._state = PreviewState()

    def report_media_error(self, resource_locator: str | None = None) -> None:
        """Handle a load failure reported by the image or embedded viewer."""
        if self._state.status is not PreviewStatus.READY:
            return
        if (
            resource_locator is not None
            and resource_locator != self._state.resource_locator
        ):
            return
        logger.warning(
            "Rendered document failed to load",
            extra={"subject_id": self._state.subject_id},
        )
        self._state = PreviewState(
            subject_id=self._state.subject_id, status=PreviewStatus.ERROR
        )

    def view(self) -> PreviewView:  # noqa: PLR0911
        """Describe what the modal should display for the current state."""
        state = self._state
        title = f"{self.source.title} - {self.subject_label}"
        if state.status is PreviewStatus.LOADING:
            return PreviewView(kind="loading", title=title)
        if state.subject_id is None or state.status is PreviewStatus.IDLE:
            return PreviewView(kind="empty", title=title, message=EMPTY_MESSAGE)
        locator = self.source.locator(state.subject_id)
        if state.status is PreviewStatus.ERROR:
            return PreviewView(
                kind="error",
                title=title,
                message=ERROR_MESSAGE,
                download_locator=locator,
                download_label="Download Document",
            )
        if state.media_kind is MediaKind.PDF:
            return PreviewView(
                kind="pdf",
                title=title,
                media_url=state.resource_locator,
                download_locator=locator,
                download_label="Download PDF",
            )
        return PreviewView(
            kind="image",
            title=title,
            media_url=state.resource_locator,
            download_locator=locator,
            download_label="Download Image",
        )

    def download(self) -> str | None:
        """Trigger a download of the document shown by the modal."""
        return self.download_trigger.trigger(self.view().download_locator)

    def _restart(self, subject_id: int | None) -> asyncio.Task[None] | None:
        self._invalidate()
        if subject_id is None:
            self._state = PreviewState()
            return None
        self._state = PreviewState(subject_id=subject_id, status=PreviewStatus.LOADING)
        self._task = asyncio.create_task(self._load(subject_id, self._generation))
        return self._task

    def _invalidate(self) -> None:
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _is_current(self, generation: int) -> bool:
        return self._is_open and generation == self._generation

    async def _load(self, subject_id: int, generation: int) -> None:
        locator = self.source.locator(subject_id)
        try:
            media_kind, resource_locator = await asyncio.wait_for(
                self._resolve(locator), timeout=self.timeout_seconds
            )
        except Exception:
            if self._is_current(generation):
                logger.warning(
                    "Error fetching document",
                    extra={"subject_id": subject_id, "locator": locator},
                    exc_info=True,
                )
                self._state = PreviewState(
                    subject_id=subject_id, status=PreviewStatus.ERROR
                )
            return
        if not self._is_current(generation):
            return
        self._state = PreviewState(
            subject_id=subject_id,
            status=PreviewStatus.READY,
            media_kind=media_kind,
            resource_locator=resource_locator,
        )

    async def _resolve(self, locator: str) -> tuple[MediaKind, str]:
        if self.source.transport is Transport.INLINE_PAYLOAD:
            content_type, body = await self.client.fetch_document(locator)
            encoded = base64.b64encode(body).decode("ascii")
            data_type = content_type or "application/octet-stream"
            return media_kind_for(content_type), f"data:{data_type};base64,{encoded}"
        content_type = await self.client.probe_content_type(locator)
        return media_kind_for(content_type), locator
