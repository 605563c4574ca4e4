from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests

from .errors import FontLoadError
from .text_metrics import TextMeasurer

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ("http", "https")


class FontLoader:
    """Fetches font files and registers them with a text measurer.

    Loaders that serve untrusted callers should pass
    ``allow_local_paths=False`` so only ``http(s)`` URLs are fetched.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        session: requests.Session | None = None,
        allow_local_paths: bool = True,
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()
        self._allow_local_paths = allow_local_paths

    def fetch(self, url: str) -> bytes:
        """Download font bytes.

        ``http(s)`` URLs are fetched with requests; ``file://`` URLs and bare
        paths are read from disk when local paths are allowed.

        Args:
            url: Font location

        Returns:
            Raw font file contents

        Raises:
            FontLoadError: If the font cannot be retrieved or the location is not permitted
        """
        parsed = urlparse(url)
        if parsed.scheme in REMOTE_SCHEMES:
            try:
                response = self._session.get(url, timeout=self._timeout)
                response.raise_for_status()
            except requests.exceptions.RequestException as exc:
                raise FontLoadError(url, str(exc)) from exc
            return response.content

        if not self._allow_local_paths:
            raise FontLoadError(url, "only http and https font URLs are accepted")

        path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(url)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FontLoadError(url, str(exc)) from exc

    async def load(self, family: str, url: str, measurer: TextMeasurer) -> None:
        """Fetch ``url`` off the event loop and register it as ``family``."""
        logger.info("Loading font", extra={"font_family": family, "font_url": url})
        data = await asyncio.to_thread(self.fetch, url)
        measurer.register_font(family, data)


__all__ = ["FontLoader", "REMOTE_SCHEMES"]
