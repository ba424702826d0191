"""KYC submission endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status

from exchange_admin.services.kyc import DocumentValidationError

if TYPE_CHECKING:
    from exchange_admin.containers import AppContainer

router = APIRouter(prefix="/api/kyc", tags=["kyc"])


@router.post("/{user_id}/document")
async def upload_kyc_document(
    user_id: int, request: Request, document: UploadFile = File(...)
) -> dict[str, object]:
    """Store a KYC document for review."""
    container: AppContainer = request.app.state.container
    # One byte past the limit is enough to reject an oversized upload.
    content = await document.read(container.kyc_service.max_document_bytes + 1)
    try:
        user = container.kyc_service.submit_document(
            user_id=user_id,
            filename=document.filename or "",
            content_type=document.content_type,
            content=content,
        )
    except DocumentValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "code": exc.code},
        ) from exc
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"user_id": user.id, "kyc_status": user.kyc_status}
