"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from exchange_admin.adapters.document_client import (
    DocumentClient,
    HttpxDocumentClient,
)
from exchange_admin.adapters.supabase_document_repository import (
    SupabaseDocumentRepository,
)
from exchange_admin.adapters.supabase_kyc_repository import SupabaseKycRepository
from exchange_admin.config import Settings
from exchange_admin.services.documents import DocumentService
from exchange_admin.services.downloads import DownloadTrigger
from exchange_admin.services.kyc import KycService
from exchange_admin.services.preview import (
    KYC_DOCUMENT_SOURCE,
    PAYMENT_PROOF_SOURCE,
    PreviewSession,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    document_service: DocumentService
    kyc_service: KycService
    close_resources: Callable[[], Awaitable[None]]


@dataclass
class PreviewContainer:
    """Holds the client-side preview modals and their HTTP client."""

    settings: Settings
    document_client: DocumentClient
    download_trigger: DownloadTrigger
    kyc_preview: PreviewSession
    payment_proof_preview: PreviewSession
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    document_service = DocumentService(SupabaseDocumentRepository(supabase_client))
    kyc_service = KycService(
        repository=SupabaseKycRepository(supabase_client),
        max_document_bytes=resolved_settings.max_document_bytes,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        document_service=document_service,
        kyc_service=kyc_service,
        close_resources=close_resources,
    )


def build_preview_container(settings: Settings | None = None) -> PreviewContainer:
    """Create preview sessions that talk to the admin API over HTTP."""
    resolved_settings = settings or Settings()
    document_client = HttpxDocumentClient.create(
        base_url=resolved_settings.api_base_url,
        admin_token=resolved_settings.admin_token,
    )
    download_trigger = DownloadTrigger(base_url=resolved_settings.api_base_url)
    kyc_preview = PreviewSession(
        client=document_client,
        source=KYC_DOCUMENT_SOURCE,
        download_trigger=download_trigger,
        timeout_seconds=resolved_settings.probe_timeout_seconds,
    )
    payment_proof_preview = PreviewSession(
        client=document_client,
        source=PAYMENT_PROOF_SOURCE,
        download_trigger=download_trigger,
        timeout_seconds=resolved_settings.probe_timeout_seconds,
    )

    async def close_resources() -> None:
        kyc_preview.close()
        payment_proof_preview.close()
        await document_client.close()

    return PreviewContainer(
        settings=resolved_settings,
        document_client=document_client,
        download_trigger=download_trigger,
        kyc_preview=kyc_preview,
        payment_proof_preview=payment_proof_preview,
        close_resources=close_resources,
    )
