"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import Response

if TYPE_CHECKING:
    from exchange_admin.containers import AppContainer
    from exchange_admin.domain.documents import StoredDocument

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.api_route(
    "/kyc-document/{user_id}",
    methods=["GET", "HEAD"],
    dependencies=[Depends(require_admin)],
)
async def kyc_document(
    user_id: int, request: Request, download: bool = False
) -> Response:
    """Serve a user's KYC document inline or as an attachment."""
    container: AppContainer = request.app.state.container
    try:
        document = container.document_service.get_kyc_document(user_id)
    except Exception:
        logger.exception("Error fetching KYC document", extra={"user_id": user_id})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch document",
        ) from None
    if document is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Document not found"
        )
    return _document_response(request, document, download)


@router.api_route(
    "/payment-proof/{transaction_id}",
    methods=["GET", "HEAD"],
    dependencies=[Depends(require_admin)],
)
async def payment_proof(
    transaction_id: int, request: Request, download: bool = False
) -> Response:
    """Serve the payment proof attached to a transaction."""
    container: AppContainer = request.app.state.container
    try:
        document = container.document_service.get_payment_proof(transaction_id)
    except Exception:
        logger.exception(
            "Error fetching payment proof", extra={"transaction_id": transaction_id}
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch document",
        ) from None
    if document is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Document not found"
        )
    return _document_response(request, document, download)


@router.post("/approve-kyc/{user_id}", dependencies=[Depends(require_admin)])
async def approve_kyc(user_id: int, request: Request) -> dict[str, object]:
    """Mark a user's KYC as approved."""
    container: AppContainer = request.app.state.container
    if not container.kyc_service.approve(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"user_id": user_id, "kyc_status": "approved"}


@router.get("/kyc/pending", dependencies=[Depends(require_admin)])
async def pending_kyc(request: Request) -> dict[str, object]:
    """Return users with a KYC document awaiting review."""
    container: AppContainer = request.app.state.container
    users = container.kyc_service.list_pending()
    return {
        "users": [
            {"id": user.id, "username": user.username, "kyc_status": user.kyc_status}
            for user in users
        ]
    }


def _document_response(
    request: Request, document: StoredDocument, download: bool
) -> Response:
    """Build a document response; HEAD requests get the headers only."""
    disposition = "attachment" if download else "inline"
    headers = {
        "Content-Length": str(document.size),
        "Content-Disposition": f'{disposition}; filename="{document.filename}"',
        "Cache-Control": "public, max-age=0",
        "Accept-Ranges": "bytes",
    }
    body = b"" if request.method == "HEAD" else document.content
    return Response(
        content=body, media_type=document.format.content_type, headers=headers
    )
