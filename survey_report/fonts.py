"""
Display-font acquisition for rendered reports.

``FontProvider.get()`` walks an ordered chain of sources (local file first,
then remote mirrors) and returns the first font that loads. The outcome,
success or exhaustion, is cached for the provider's lifetime, and concurrent
callers share one in-flight fetch. Exhaustion is not an error: callers get
``None`` and render with matplotlib's default font.
"""

import asyncio
import hashlib
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Sequence

import httpx
from matplotlib import font_manager

logger = logging.getLogger(__name__)

DEFAULT_FONT_URLS = (
    "https://cdn.jsdelivr.net/gh/nicedoc/jsPDF-TH-regular@main/fonts/THSarabunNew.ttf",
    "https://raw.githubusercontent.com/nicedoc/jsPDF-TH-regular/main/fonts/THSarabunNew.ttf",
)
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class FontAsset:
    name: str
    path: str


class FontSource:
    """One place a font can come from. Subclasses return the raw TTF bytes."""

    name = "source"

    async def fetch(self) -> bytes:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"


class LocalFontSource(FontSource):
    def __init__(self, path: str):
        self.path = Path(path)
        self.name = str(path)

    async def fetch(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


class RemoteFontSource(FontSource):
    def __init__(self, url: str, timeout: float = DEFAULT_TIMEOUT):
        self.url = url
        self.timeout = timeout
        self.name = url

    async def fetch(self) -> bytes:
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            resp = await client.get(self.url)
            resp.raise_for_status()
            return resp.content


class CallableFontSource(FontSource):
    """Wrap a coroutine function as a source (handy for tests and custom loaders)."""

    def __init__(self, fn: Callable[[], Awaitable[bytes]], name: str = "callable"):
        self.fn = fn
        self.name = name

    async def fetch(self) -> bytes:
        return await self.fn()


def build_sources(
    local_path: Optional[str] = None,
    urls: Sequence[str] = DEFAULT_FONT_URLS,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[FontSource]:
    sources: List[FontSource] = []
    if local_path:
        sources.append(LocalFontSource(local_path))
    sources.extend(RemoteFontSource(u, timeout=timeout) for u in urls if u)
    return sources


def install_font(data: bytes, cache_dir: Optional[str] = None) -> FontAsset:
    """Write font bytes to the cache directory and register them with matplotlib.

    Raises if matplotlib cannot read the data as a font.
    """
    if not data:
        raise ValueError("empty font data")
    folder = Path(cache_dir or os.path.join(tempfile.gettempdir(), "survey_report_fonts"))
    folder.mkdir(parents=True, exist_ok=True)
    digest = hashlib.sha1(data).hexdigest()[:12]
    path = folder / f"font-{digest}.ttf"
    if not path.exists():
        path.write_bytes(data)
    font_manager.fontManager.addfont(str(path))
    name = font_manager.FontProperties(fname=str(path)).get_name()
    return FontAsset(name=name, path=str(path))


class FontProvider:
    """Single-flight, memoized accessor for the report display font."""

    def __init__(
        self,
        sources: Sequence[FontSource],
        timeout: float = DEFAULT_TIMEOUT,
        cache_dir: Optional[str] = None,
    ):
        self.sources = list(sources)
        self.timeout = timeout
        self.cache_dir = cache_dir
        self._resolved = False
        self._asset: Optional[FontAsset] = None
        self._task: Optional[asyncio.Task] = None
        self._task_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def resolved(self) -> bool:
        return self._resolved

    async def get(self) -> Optional[FontAsset]:
        if self._resolved:
            return self._asset
        loop = asyncio.get_running_loop()
        # a task is bound to its loop; a caller on another loop starts its own fetch
        if self._task is None or self._task_loop is not loop:
            self._task = loop.create_task(self._load())
            self._task_loop = loop
        return await asyncio.shield(self._task)

    async def _load(self) -> Optional[FontAsset]:
        for source in self.sources:
            try:
                data = await asyncio.wait_for(source.fetch(), timeout=self.timeout)
                asset = await asyncio.to_thread(install_font, data, self.cache_dir)
            except Exception as e:
                logger.warning("Font source %r failed: %s: %s", source, e.__class__.__name__, e)
                continue
            logger.info("Loaded report font %s from %r", asset.name, source)
            self._finish(asset)
            return asset
        logger.warning("No report font source succeeded; rendering with the default font")
        self._finish(None)
        return None

    def _finish(self, asset: Optional[FontAsset]) -> None:
        self._asset = asset
        self._resolved = True
        self._task = None
        self._task_loop = None
