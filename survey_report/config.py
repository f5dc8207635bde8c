import os
from dotenv import load_dotenv

from .composer import ReportComposer, ReportConfig
from .fonts import DEFAULT_FONT_URLS, FontProvider, build_sources
from .log import setup_logging
from .reports import ReportService
from .store import LocalResponseStore, ResponseStore, SqlResponseStore

load_dotenv()


def _split(value):
    return tuple(u.strip() for u in value.split(",") if u.strip())


class Settings:
    def __init__(self):
        self.SURVEY_STORE = os.getenv("SURVEY_STORE", "local")
        self.SURVEY_STORE_PATH = os.getenv("SURVEY_STORE_PATH", "survey_responses.json")
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///survey.db")
        self.REPORT_LOCALE = os.getenv("REPORT_LOCALE", "th")
        self.REPORT_STYLE = os.getenv("REPORT_STYLE", "standard")
        self.REPORT_OUTPUT_DIR = os.getenv("REPORT_OUTPUT_DIR", "reports")
        self.REPORT_FONT_PATH = os.getenv("REPORT_FONT_PATH") or None
        self.REPORT_FONT_URLS = _split(os.getenv("REPORT_FONT_URLS", ",".join(DEFAULT_FONT_URLS)))
        self.REPORT_FONT_TIMEOUT = float(os.getenv("REPORT_FONT_TIMEOUT", 10))
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def configure_logging(settings: Settings) -> None:
    setup_logging(settings.LOG_LEVEL)


def make_store(settings: Settings) -> ResponseStore:
    if settings.SURVEY_STORE == "sql":
        return SqlResponseStore(settings.DATABASE_URL)
    if settings.SURVEY_STORE == "local":
        return LocalResponseStore(settings.SURVEY_STORE_PATH)
    raise ValueError(f"Unknown SURVEY_STORE: {settings.SURVEY_STORE!r} (expected 'local' or 'sql')")


def make_font_provider(settings: Settings) -> FontProvider:
    sources = build_sources(settings.REPORT_FONT_PATH, settings.REPORT_FONT_URLS, settings.REPORT_FONT_TIMEOUT)
    return FontProvider(sources, timeout=settings.REPORT_FONT_TIMEOUT)


def make_report_service(settings: Settings, fonts: FontProvider = None) -> ReportService:
    composer = ReportComposer(ReportConfig.create(settings.REPORT_LOCALE, settings.REPORT_STYLE))
    return ReportService(composer, fonts or make_font_provider(settings), settings.REPORT_OUTPUT_DIR)
