"""Scoring, aggregation and PDF reporting for the sugary-drink behavior survey."""

from .aggregate import (
    category_stats,
    count_by_array_field,
    count_by_field,
    dashboard_figures,
    frequency_row,
    individual_stats,
    item_stats,
)
from .composer import Document, ReportComposer, ReportConfig
from .fonts import FontAsset, FontProvider
from .labels import LabelResolver, label, label_list
from .models import CategoryStats, Level, Response, StatisticsResult, new_response
from .reports import ReportService
from .scoring import classify_level, mean, percentage, standard_deviation
from .store import LocalResponseStore, SqlResponseStore, StoreError

__version__ = "0.1.0"
