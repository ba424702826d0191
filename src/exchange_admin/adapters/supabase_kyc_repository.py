"""Supabase-backed KYC repository."""

from dataclasses import dataclass

from supabase import Client

from exchange_admin.domain.models import UserKycRecord
from exchange_admin.services.kyc import KycRepository

# The base64 document is never selected here; presence is a server-side filter.
_USER_COLUMNS = "id, username, kyc_status"


@dataclass
class SupabaseKycRepository(KycRepository):
    """Supabase implementation for KYC state persistence."""

    client: Client

    def get_user(self, user_id: int) -> UserKycRecord | None:
        """Return the KYC record for a user, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0], self._has_document(user_id))

    def save_kyc_document(self, user_id: int, payload: str) -> None:
        """Store the document and reset the review status."""
        response = (
            self.client.table("users")
            .update({"kyc_document": payload, "kyc_status": "pending"})
            .eq("id", user_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to store KYC document")

    def set_kyc_status(self, user_id: int, status: str) -> None:
        """Update the KYC status column."""
        response = (
            self.client.table("users")
            .update({"kyc_status": status})
            .eq("id", user_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update KYC status")

    def list_users_with_document(self, status: str) -> list[UserKycRecord]:
        """Return users with a stored document and the given status, by id."""
        query = (
            self.client.table("users").select(_USER_COLUMNS).eq("kyc_status", status)
        )
        response = _with_document(query).order("id").execute()
        return [_to_record(row, True) for row in response.data or []]

    def _has_document(self, user_id: int) -> bool:
        query = self.client.table("users").select("id").eq("id", user_id)
        response = _with_document(query).limit(1).execute()
        return bool(response.data)


def _with_document(query):  # type: ignore[no-untyped-def]
    return query.not_.is_("kyc_document", "null").neq("kyc_document", "")


def _to_record(row: dict[str, object], has_document: bool) -> UserKycRecord:
    return UserKycRecord(
        id=int(row["id"]),
        username=str(row["username"]),
        kyc_status=str(row.get("kyc_status") or "pending"),
        has_document=has_document,
    )
