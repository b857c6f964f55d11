"""Loads counter and lane tables from files or URLs."""

import logging
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class TableLoader:
    """Reads raw table text from a local path or an http(s) URL.

    Failures never raise: a missing file or a failed request is logged and
    yields an empty string, which parses to an empty table.
    """

    def __init__(self, base_dir: Path | None = None, timeout: float = 10.0):
        self.base_dir = base_dir
        self.timeout = timeout

    def _resolve_path(self, source: str) -> Path:
        path = Path(source)
        if path.is_absolute() or self.base_dir is None:
            return path
        return self.base_dir / path

    async def load(self, source: str | None) -> str:
        """Load table text from source, "" on any failure."""
        if not source:
            return ""
        if is_url(source):
            return await self._fetch(source)
        return self._read(self._resolve_path(source))

    def _read(self, path: Path) -> str:
        if not path.exists():
            logger.warning(f"Table file not found at {path}")
            return ""
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read {path}: {e}")
            return ""

    async def _fetch(self, url: str) -> str:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, headers={"Cache-Control": "no-store"})
                response.raise_for_status()
                return response.text
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch {url}: {e}")
            return ""
