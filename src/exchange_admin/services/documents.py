"""Stored document lookup and format detection."""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Protocol

from exchange_admin.domain.documents import (
    PDF_CONTENT_TYPE,
    DocumentFormat,
    StoredDocument,
)
from exchange_admin.domain.models import EncodedDocument

logger = logging.getLogger(__name__)

_PNG_SIGNATURE = bytes.fromhex("89504e470d0a1a0a")
_FALLBACK_FORMAT = DocumentFormat("application/octet-stream", ".bin")


class DocumentRepository(Protocol):
    """Persistence interface for stored document payloads."""

    def get_kyc_document(self, user_id: int) -> EncodedDocument | None:
        """Return the KYC document of a user, if one was uploaded."""

    def get_payment_proof(self, transaction_id: int) -> EncodedDocument | None:
        """Return the payment proof attached to a transaction, if any."""


def sniff_document_format(content: bytes) -> DocumentFormat:
    """Detect the document format from its leading and trailing bytes."""
    if content[:5] == b"%PDF-":
        return DocumentFormat(PDF_CONTENT_TYPE, ".pdf")
    if content[:8] == _PNG_SIGNATURE:
        return DocumentFormat("image/png", ".png")
    if len(content) >= 4 and content[:2] == b"\xff\xd8" and content[-2:] == b"\xff\xd9":
        return DocumentFormat("image/jpeg", ".jpg")
    return _FALLBACK_FORMAT


@dataclass
class DocumentService:
    """Decodes stored documents for the admin document endpoints."""

    repository: DocumentRepository

    def get_kyc_document(self, user_id: int) -> StoredDocument | None:
        """Return the decoded KYC document for a user."""
        encoded = self.repository.get_kyc_document(user_id)
        if encoded is None:
            return None
        return _decode(encoded, "kyc-document")

    def get_payment_proof(self, transaction_id: int) -> StoredDocument | None:
        """Return the decoded payment proof for a transaction."""
        encoded = self.repository.get_payment_proof(transaction_id)
        if encoded is None:
            return None
        return _decode(encoded, "payment-proof")


def _decode(encoded: EncodedDocument, prefix: str) -> StoredDocument | None:
    if not encoded.payload:
        return None
    try:
        # Stored payloads may be MIME line-wrapped.
        payload = "".join(_strip_data_url(encoded.payload).split())
        content = base64.b64decode(payload, validate=True)
    except binascii.Error:
        logger.warning(
            "Stored document is not valid base64",
            extra={"owner": encoded.owner_label, "kind": prefix},
        )
        raise
    document_format = sniff_document_format(content)
    return StoredDocument(
        content=content,
        format=document_format,
        filename=f"{prefix}-{encoded.owner_label}{document_format.extension}",
    )


def _strip_data_url(payload: str) -> str:
    """Drop a ``data:<type>;base64,`` prefix some clients store."""
    if payload.startswith("data:") and "," in payload:
        return payload.split(",", maxsplit=1)[1]
    return payload
