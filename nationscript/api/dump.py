"""Reading the daily nation, region and card data dumps.

WHY: The dumps are gzip files of several hundred megabytes once
decompressed. Loading one into memory to pick out a few entries is
wasteful, so the dump is decompressed and parsed as it streams in, and
unwanted entries are discarded as soon as they are complete.

HOW: Bytes come from the network (httpx streaming) or from a local copy
under DUMP_DIRECTORY. Network bytes are written to the local copy while
being decompressed with zlib.decompressobj and fed to a MarkupReader
wired with a FilteredListAssembler.

RULES:
- DOWNLOAD always downloads and replaces the local copy
- DOWNLOAD_IF_CHANGED sends If-Modified-Since from the local copy's
  mtime; HTTP 304 reads the local copy instead
- LOCAL never touches the network; a missing copy raises DumpNotFoundError
- LOCAL_OR_DOWNLOAD downloads only when no local copy exists
- READ_REMOTE streams from the network without saving
- Partial downloads never replace an existing local copy and are
  removed when a download fails
- Transport failures raise APIError; corrupt gzip data raises MarkupError
"""

from __future__ import annotations

import asyncio
import enum
import gzip
import logging
import os
import zlib
from collections.abc import Callable
from contextlib import nullcontext
from datetime import date, datetime, timezone
from email.utils import formatdate
from pathlib import Path
from typing import Any

import httpx

from nationscript.api.client import NSClient
from nationscript.config import DUMP_CHUNK_SIZE, DUMP_DIRECTORY, NS_DUMP_URL
from nationscript.core.assembler import Assembler
from nationscript.core.reader import MarkupReader
from nationscript.errors import APIError, DumpNotFoundError, MarkupError
from nationscript.shapes import dump as dump_shapes

logger = logging.getLogger(__name__)

# zlib window size selecting the gzip container format.
_GZIP_WBITS = 16 + zlib.MAX_WBITS


class DumpMode(enum.Enum):
    """Where a dump is read from."""

    DOWNLOAD = "download"
    DOWNLOAD_IF_CHANGED = "download-if-changed"
    LOCAL = "local"
    LOCAL_OR_DOWNLOAD = "local-or-download"
    READ_REMOTE = "read-remote"


def _accept_all(item: Any) -> bool:
    return True


class DumpReader:
    """Streams data dumps through a filtering assembler.

    RULES:
    - Requires an entered NSClient (its User-Agent and rate limiter are used)
    - Each call returns a fresh list of the accepted items in dump order
    """

    def __init__(
        self,
        client: NSClient,
        directory: str | os.PathLike | None = None,
        base_url: str | None = None,
        chunk_size: int = DUMP_CHUNK_SIZE,
    ) -> None:
        self._client = client
        self._directory = Path(directory or DUMP_DIRECTORY)
        self._base_url = (base_url or NS_DUMP_URL).rstrip("/")
        self._chunk_size = chunk_size

    @property
    def directory(self) -> Path:
        return self._directory

    # ------------------------------------------------------------------
    # Dumps
    # ------------------------------------------------------------------

    async def nations(
        self,
        predicate: Callable[[Any], bool] | None = None,
        mode: DumpMode = DumpMode.LOCAL_OR_DOWNLOAD,
        day: date | None = None,
    ) -> list:
        day_str, current = _dump_day(day)
        path = "pages/nations.xml.gz" if current else f"archive/nations/{day_str}-nations-xml.gz"
        return await self._read(
            f"{self._base_url}/{path}",
            f"nations_{day_str}.xml.gz",
            mode,
            lambda: dump_shapes.create_nations(predicate or _accept_all),
        )

    async def regions(
        self,
        predicate: Callable[[Any], bool] | None = None,
        mode: DumpMode = DumpMode.LOCAL_OR_DOWNLOAD,
        day: date | None = None,
    ) -> list:
        day_str, current = _dump_day(day)
        path = "pages/regions.xml.gz" if current else f"archive/regions/{day_str}-regions-xml.gz"
        return await self._read(
            f"{self._base_url}/{path}",
            f"regions_{day_str}.xml.gz",
            mode,
            lambda: dump_shapes.create_regions(predicate or _accept_all),
        )

    async def cards(
        self,
        predicate: Callable[[Any], bool] | None = None,
        mode: DumpMode = DumpMode.LOCAL_OR_DOWNLOAD,
        season: int = 1,
    ) -> list:
        return await self._read(
            f"{self._base_url}/pages/cardlist_S{season}.xml.gz",
            f"cards_s{season}.xml.gz",
            mode,
            lambda: dump_shapes.create_cards(predicate or _accept_all),
        )

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    async def _read(
        self,
        url: str,
        filename: str,
        mode: DumpMode,
        create: Callable[[], Assembler],
    ) -> list:
        local = self._directory / filename
        reader = MarkupReader(lambda tag, attrs: create())

        if mode is DumpMode.LOCAL:
            await self._read_local(local, reader)
        elif mode is DumpMode.LOCAL_OR_DOWNLOAD and local.exists():
            await self._read_local(local, reader)
        elif mode is DumpMode.READ_REMOTE:
            await self._read_remote(url, reader, save_to=None)
        else:
            since = None
            if mode is DumpMode.DOWNLOAD_IF_CHANGED and local.exists():
                since = local.stat().st_mtime
            modified = await self._read_remote(url, reader, save_to=local, if_modified_since=since)
            if not modified:
                logger.info("Dump unchanged since %s; reading local copy", formatdate(since, usegmt=True))
                await self._read_local(local, reader)

        product = reader.close()
        return product if isinstance(product, list) else []

    async def _read_local(self, path: Path, reader: MarkupReader) -> None:
        if not path.exists():
            raise DumpNotFoundError(f"Dump not found: {path}")
        logger.info("Reading dump from %s", path)
        # Parsed in a worker thread; a full dump takes seconds.
        await asyncio.to_thread(self._feed_local, path, reader)

    def _feed_local(self, path: Path, reader: MarkupReader) -> None:
        try:
            with gzip.open(path, "rb") as f:
                while True:
                    chunk = f.read(self._chunk_size)
                    if not chunk:
                        break
                    reader.feed(chunk)
        except (OSError, EOFError, zlib.error) as e:
            raise MarkupError(f"Unreadable dump {path}: {e}") from e

    async def _read_remote(
        self,
        url: str,
        reader: MarkupReader,
        save_to: Path | None,
        if_modified_since: float | None = None,
    ) -> bool:
        """Stream a dump from url into reader. Returns False on HTTP 304.

        Raises:
            DumpNotFoundError: The server has no dump at url.
            APIError: Any other HTTP or transport failure.
            MarkupError: The body is not a complete gzip stream.
        """
        # The body is the .gz file itself; no transfer compression on top.
        headers = {"Accept-Encoding": "identity"}
        if if_modified_since is not None:
            headers["If-Modified-Since"] = formatdate(if_modified_since, usegmt=True)

        if self._client.rate_limiter is not None:
            await self._client.rate_limiter.acquire()

        logger.info("Downloading dump %s", url)
        partial = None
        try:
            async with self._client.http.stream("GET", url, headers=headers) as response:
                if response.status_code == 304:
                    return False
                if response.status_code == 404:
                    raise DumpNotFoundError(f"Dump not found: {url}")
                if not 200 <= response.status_code < 300:
                    raise APIError(f"HTTP {response.status_code} downloading {url}")

                if save_to is not None:
                    save_to.parent.mkdir(parents=True, exist_ok=True)
                    partial = save_to.with_name(save_to.name + ".part")

                decompressor = zlib.decompressobj(_GZIP_WBITS)
                with (open(partial, "wb") if partial else nullcontext()) as sink:
                    async for chunk in response.aiter_bytes():
                        if sink is not None:
                            sink.write(chunk)
                        reader.feed(decompressor.decompress(chunk))
                    reader.feed(decompressor.flush())
                if not decompressor.eof:
                    raise MarkupError(f"Dump download ended before the gzip stream did: {url}")

            if partial is not None:
                os.replace(partial, save_to)
                logger.info("Saved dump to %s", save_to)
            return True
        except httpx.HTTPError as e:
            logger.warning("Dump download from %s failed: %s", url, e)
            raise APIError(f"Downloading {url} failed: {e}") from e
        except zlib.error as e:
            raise MarkupError(f"Dump at {url} is not valid gzip data: {e}") from e
        finally:
            if partial is not None:
                partial.unlink(missing_ok=True)


def _dump_day(day: date | None) -> tuple[str, bool]:
    """Return the dump's date as YYYY-MM-DD and whether it is today's dump."""
    today = datetime.now(timezone.utc).date()
    day = day or today
    return day.isoformat(), day == today
