"""Command-line document preview against a running admin API."""

import argparse
import asyncio
import logging

from exchange_admin.app_logging import configure_logging
from exchange_admin.containers import PreviewContainer, build_preview_container
from exchange_admin.services.rendering import render_preview_html

logger = logging.getLogger(__name__)


async def preview_document(
    container: PreviewContainer,
    kind: str,
    subject_id: int,
    label: str = "",
    download: bool = False,
) -> str:
    """Load one document through its preview session and render the modal."""
    session = (
        container.payment_proof_preview
        if kind == "payment-proof"
        else container.kyc_preview
    )
    try:
        task = session.open(subject_id, label)
        if task is not None:
            await task
        logger.info(
            "Preview loaded",
            extra={"subject_id": subject_id, "status": session.state.status.value},
        )
        if download:
            session.download()
        return render_preview_html(session.view())
    finally:
        await container.close_resources()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Preview an admin document.")
    parser.add_argument("subject_id", type=int, help="user id or transaction id")
    parser.add_argument("--kind", choices=["kyc", "payment-proof"], default="kyc")
    parser.add_argument("--label", default="", help="name shown in the title")
    parser.add_argument(
        "--download", action="store_true", help="open the download in a browser"
    )
    args = parser.parse_args(argv)

    container = build_preview_container()
    configure_logging(container.settings.environment)
    html = asyncio.run(
        preview_document(
            container, args.kind, args.subject_id, args.label, args.download
        )
    )
    print(html)


if __name__ == "__main__":
    main()
