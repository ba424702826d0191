"""KYC submission and review logic."""

import base64
import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Protocol

from exchange_admin.domain.models import UserKycRecord

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = frozenset(
    {"image/jpeg", "image/png", "image/jpg", "application/pdf"}
)
ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".pdf"})


class DocumentValidationError(ValueError):
    """Raised when an uploaded document is rejected."""

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code


class KycRepository(Protocol):
    """Persistence interface for KYC state."""

    def get_user(self, user_id: int) -> UserKycRecord | None:
        """Return the KYC record for a user, if the user exists."""

    def save_kyc_document(self, user_id: int, payload: str) -> None:
        """Store a base64 KYC document and mark the user as pending."""

    def set_kyc_status(self, user_id: int, status: str) -> None:
        """Update the KYC status of a user."""

    def list_users_with_document(self, status: str) -> list[UserKycRecord]:
        """Return users with the given KYC status that have a stored document."""


@dataclass
class KycService:
    """Application service for KYC uploads and approvals."""

    repository: KycRepository
    max_document_bytes: int = 5 * 1024 * 1024

    def validate_document(
        self, filename: str, content_type: str | None, size: int
    ) -> None:
        """Reject documents that are too large or of an unsupported type."""
        if size > self.max_document_bytes:
            limit_mb = self.max_document_bytes // (1024 * 1024)
            raise DocumentValidationError(
                f"File size must be less than {limit_mb}MB", "FILE_TOO_LARGE"
            )
        extension = PurePath(filename.lower()).suffix
        if content_type not in ALLOWED_CONTENT_TYPES or (
            extension not in ALLOWED_EXTENSIONS
        ):
            raise DocumentValidationError(
                "Invalid file type. Please upload a JPG, PNG, or PDF file",
                "INVALID_FILE_TYPE",
            )

    def submit_document(
        self,
        user_id: int,
        filename: str,
        content_type: str | None,
        content: bytes,
    ) -> UserKycRecord | None:
        """Validate and store a KYC document, returning the updated user."""
        user = self.repository.get_user(user_id)
        if user is None:
            return None
        self.validate_document(filename, content_type, len(content))
        payload = base64.b64encode(content).decode("ascii")
        self.repository.save_kyc_document(user_id, payload)
        logger.info(
            "KYC document submitted for review",
            extra={"user_id": user_id, "size": len(content)},
        )
        return self.repository.get_user(user_id)

    def approve(self, user_id: int) -> bool:
        """Approve a user's KYC; returns false when the user is unknown."""
        if self.repository.get_user(user_id) is None:
            return False
        self.repository.set_kyc_status(user_id, "approved")
        logger.info("KYC approved", extra={"user_id": user_id})
        return True

    def list_pending(self) -> list[UserKycRecord]:
        """Return users awaiting review that have uploaded a document."""
        return self.repository.list_users_with_document("pending")
