"""Download trigger for previewed documents."""

import logging
import webbrowser
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class DownloadTrigger:
    """Opens the download variant of a document in a new browsing context."""

    base_url: str = ""
    opener: Callable[[str], object] = webbrowser.open_new_tab

    def download_url(self, locator: str) -> str:
        """Return the download-flagged URL for a resource locator."""
        separator = "&" if "?" in locator else "?"
        return f"{self.base_url}{locator}{separator}download=true"

    def trigger(self, locator: str | None) -> str | None:
        """Open the download URL; a missing locator is a no-op."""
        if not locator:
            return None
        url = self.download_url(locator)
        logger.info("Opening document download", extra={"url": url})
        self.opener(url)
        return url
