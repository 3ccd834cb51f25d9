"""
Request dependencies

Store, clock, settings and renderer are resolved here so tests can
override them with ``app.dependency_overrides``.
"""

from datetime import date
from typing import Callable

from fastapi import Request

from common.config import get_config
from common.models import SettingsSnapshot
from common.storage import RecordStore, YamlStore
from modules.timesheets.report import ReportRenderer, TypstReportRenderer


def get_store(request: Request) -> RecordStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = YamlStore(get_config().data.path)
        request.app.state.store = store
    return store


def get_clock() -> Callable[[], date]:
    return date.today


def get_settings() -> SettingsSnapshot:
    return get_config().settings


def get_renderer() -> ReportRenderer:
    report = get_config().report
    return TypstReportRenderer(
        templates_dir=report.templates_dir,
        fonts_dir=report.fonts_dir,
        typst_binary=report.typst_binary,
        normalize_currency_symbol=report.normalize_currency_symbol,
    )


def success(data) -> dict:
    """Response envelope shared by all endpoints."""
    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")
    elif isinstance(data, list):
        data = [d.model_dump(mode="json") if hasattr(d, "model_dump") else d for d in data]
    return {"success": True, "data": data}
