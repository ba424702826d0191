"""Supabase-backed document repository."""

from dataclasses import dataclass

from supabase import Client

from exchange_admin.domain.models import EncodedDocument
from exchange_admin.services.documents import DocumentRepository


@dataclass
class SupabaseDocumentRepository(DocumentRepository):
    """Reads base64 document columns from Supabase tables."""

    client: Client

    def get_kyc_document(self, user_id: int) -> EncodedDocument | None:
        """Return the stored KYC document for a user."""
        response = (
            self.client.table("users")
            .select("username, kyc_document")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        if not row.get("kyc_document"):
            return None
        return EncodedDocument(
            owner_label=str(row["username"]), payload=row["kyc_document"]
        )

    def get_payment_proof(self, transaction_id: int) -> EncodedDocument | None:
        """Return the stored payment proof for a transaction."""
        response = (
            self.client.table("transactions")
            .select("id, proof_of_payment")
            .eq("id", transaction_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        if not row.get("proof_of_payment"):
            return None
        return EncodedDocument(
            owner_label=str(row["id"]), payload=row["proof_of_payment"]
        )
