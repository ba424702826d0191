"""Domain models for the exchange admin backend."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserKycRecord:
    """Admin view of a user's KYC state."""

    id: int
    username: str
    kyc_status: str
    has_document: bool


@dataclass(frozen=True)
class EncodedDocument:
    """A base64 payload as stored in the database."""

    owner_label: str
    payload: str
