"""Tar-mode cloner: download a host archive and unpack it.

Each call downloads into its own temporary directory which is removed
afterwards, so nothing from an earlier attempt or invocation is reused.
"""

from __future__ import annotations

import tarfile
import tempfile
from pathlib import Path

import httpx

from nextboil.fetcher.base import CloneError, copy_template_tree, select_subdir
from nextboil.fetcher.source import TemplateSource
from nextboil.utils import run_blocking

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


def _archive_root(extract_dir: Path) -> Path:
    """Host archives wrap everything in one top-level directory; unwrap it."""
    entries = list(extract_dir.iterdir())
    if len(entries) == 1 and entries[0].is_dir():
        return entries[0]
    return extract_dir


def _unpack(archive: Path, extract_dir: Path, source: TemplateSource, dest: Path) -> None:
    try:
        with tarfile.open(archive, mode="r:*") as tar:
            tar.extractall(extract_dir, filter="data")
    except (tarfile.TarError, OSError) as exc:
        raise CloneError(
            f"Could not unpack archive for {source.describe()}: {exc}",
            source=source.url,
        ) from exc

    root = select_subdir(_archive_root(extract_dir), source)
    copy_template_tree(root, dest)


class TarballCloner:
    """Fetches templates from GitHub, GitLab and Bitbucket archive endpoints.

    Attributes:
        timeout: HTTP timeout in seconds, or ``None`` to wait indefinitely.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient``; no connection or response reuse."""
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            headers=NO_CACHE_HEADERS,
            transport=self.transport,
        )

    async def clone(self, source: TemplateSource, dest: Path) -> None:
        """Download *source*'s archive and unpack it over *dest*.

        Raises:
            CloneError: On HTTP, network or archive failures.
        """
        url = source.archive_url
        with tempfile.TemporaryDirectory(prefix="next-boil-") as tmp:
            archive = Path(tmp) / "template.tar.gz"
            try:
                async with self._client() as client:
                    async with client.stream("GET", url) as response:
                        response.raise_for_status()
                        with archive.open("wb") as fh:
                            async for chunk in response.aiter_bytes():
                                fh.write(chunk)
            except httpx.HTTPStatusError as exc:
                raise CloneError(
                    f"Template host returned HTTP {exc.response.status_code} for {url}",
                    source=source.url,
                ) from exc
            except httpx.HTTPError as exc:
                raise CloneError(
                    f"Could not download {url}: {exc}", source=source.url
                ) from exc

            extract_dir = Path(tmp) / "extract"
            extract_dir.mkdir()
            await run_blocking(_unpack, archive, extract_dir, source, dest)
