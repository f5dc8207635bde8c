import asyncio
from datetime import date

import pytest

from survey_report.composer import ReportComposer, ReportConfig
from survey_report.config import Settings, make_report_service, make_store
from survey_report.fonts import CallableFontSource, FontProvider
from survey_report.render import render_pdf
from survey_report.reports import ReportService
from survey_report.store import LocalResponseStore, SqlResponseStore


def _offline_fonts():
    async def fail():
        raise OSError("offline")

    return FontProvider([CallableFontSource(fail, "offline")])


def _service(tmp_path, locale="en", style="standard"):
    composer = ReportComposer(ReportConfig.create(locale, style))
    return ReportService(composer, _offline_fonts(), str(tmp_path / "out"))


def test_individual_pdf_written(tmp_path, response_factory):
    r = response_factory(suggestions="Add a water fountain near the canteen.")
    path = asyncio.run(_service(tmp_path).write_individual(r))
    assert path.name == f"survey-report-{r.id[:8]}.pdf"
    assert path.read_bytes().startswith(b"%PDF")


def test_summary_pdf_renders(tmp_path, response_factory):
    responses = [response_factory(knowledge=(5, 5, 5)), response_factory(knowledge=(1, 1, 1))]
    doc, data = asyncio.run(_service(tmp_path, "th", "print").summary_pdf(responses, date(2024, 3, 15)))
    assert data.startswith(b"%PDF")
    assert doc.page_count >= 2


def test_rendering_does_not_block_the_event_loop(tmp_path, response_factory):
    responses = [response_factory() for _ in range(20)]
    service = ReportService(ReportComposer(ReportConfig.create("en")), None, str(tmp_path))
    ticks = []

    async def ticker():
        while True:
            ticks.append(1)
            await asyncio.sleep(0.005)

    async def main():
        task = asyncio.create_task(ticker())
        await asyncio.sleep(0)
        before = len(ticks)
        await service.summary_pdf(responses, date(2024, 1, 1))
        during = len(ticks) - before
        task.cancel()
        return during

    assert asyncio.run(main()) >= 3


def test_empty_summary_still_produces_a_report(tmp_path):
    path = asyncio.run(_service(tmp_path).write_summary([], date(2024, 1, 1)))
    assert path.name == "survey-summary-2024-01-01.pdf"
    assert path.read_bytes().startswith(b"%PDF")


def test_render_without_font_provider(response_factory):
    doc = ReportComposer().individual(response_factory())
    assert render_pdf(doc).startswith(b"%PDF")


def test_settings_and_factories(tmp_path, monkeypatch):
    monkeypatch.setenv("SURVEY_STORE", "local")
    monkeypatch.setenv("SURVEY_STORE_PATH", str(tmp_path / "r.json"))
    monkeypatch.setenv("REPORT_LOCALE", "en")
    monkeypatch.setenv("REPORT_FONT_URLS", "https://a/f.ttf, https://b/f.ttf")
    monkeypatch.setenv("REPORT_OUTPUT_DIR", str(tmp_path / "reports"))
    settings = Settings()
    assert settings.REPORT_FONT_URLS == ("https://a/f.ttf", "https://b/f.ttf")
    assert isinstance(make_store(settings), LocalResponseStore)

    service = make_report_service(settings, fonts=_offline_fonts())
    assert service.composer.labels.text("page") == "Page"
    assert service.output_dir == tmp_path / "reports"

    monkeypatch.setenv("SURVEY_STORE", "sql")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 's.db'}")
    assert isinstance(make_store(Settings()), SqlResponseStore)


def test_unknown_store_kind(monkeypatch):
    monkeypatch.setenv("SURVEY_STORE", "redis")
    with pytest.raises(ValueError):
        make_store(Settings())
