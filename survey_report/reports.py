"""
Report service: acquire the display font, compose, render and write PDFs.
"""

import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .composer import Document, ReportComposer
from .fonts import FontAsset, FontProvider
from .models import Response
from .render import PdfRenderer

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(
        self,
        composer: Optional[ReportComposer] = None,
        fonts: Optional[FontProvider] = None,
        output_dir: str = "reports",
    ):
        self.composer = composer or ReportComposer()
        self.fonts = fonts
        self.output_dir = Path(output_dir)

    async def _font(self) -> Optional[FontAsset]:
        if self.fonts is None:
            return None
        return await self.fonts.get()

    async def individual_pdf(self, response: Response) -> Tuple[Document, bytes]:
        font = await self._font()
        doc = self.composer.individual(response)
        return doc, await asyncio.to_thread(PdfRenderer(font).render, doc)

    async def summary_pdf(
        self,
        responses: Sequence[Response],
        generated_on: Optional[date] = None,
    ) -> Tuple[Document, bytes]:
        font = await self._font()
        doc = self.composer.summary(list(responses), generated_on or date.today())
        return doc, await asyncio.to_thread(PdfRenderer(font).render, doc)

    def _write(self, doc: Document, data: bytes) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / doc.filename
        path.write_bytes(data)
        logger.info("Wrote %s report (%d page(s)) to %s", doc.kind, doc.page_count, path)
        return path

    async def write_individual(self, response: Response) -> Path:
        doc, data = await self.individual_pdf(response)
        return await asyncio.to_thread(self._write, doc, data)

    async def write_summary(
        self,
        responses: Sequence[Response],
        generated_on: Optional[date] = None,
    ) -> Path:
        doc, data = await self.summary_pdf(responses, generated_on)
        return await asyncio.to_thread(self._write, doc, data)
