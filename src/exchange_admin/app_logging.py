"""Logging configuration helpers."""

import logging

REDACTED_FIELDS = frozenset(
    {"kyc_document", "proof_of_payment", "payload", "admin_token", "x_admin_token"}
)


class RedactDocumentsFilter(logging.Filter):
    """Blank out document payloads and tokens passed via ``extra``."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name in REDACTED_FIELDS:
            if name in record.__dict__:
                setattr(record, name, "[REDACTED]")
        return True


def configure_logging(environment: str = "local") -> None:
    """Configure application logging with a single stream handler.

    Anything but production logs at DEBUG.
    """
    logger = logging.getLogger("exchange_admin")
    logger.setLevel(logging.INFO if environment == "production" else logging.DEBUG)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    handler.addFilter(RedactDocumentsFilter())
    logger.addHandler(handler)
    logger.propagate = False
