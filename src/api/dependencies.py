"""
FastAPI dependencies for the portal's external services.
Tests swap these out through ``app.dependency_overrides``.
"""
import threading

from fastapi import Request

from utils.logger import get_logger

# Guards first-time opening; searches resolve services from worker threads
_open_lock = threading.Lock()


class LazyService:
    """
    Opens the wrapped service on first use and caches it on app state.

    Opening Google Sheets or Gemini happens inside the search, so a bad
    credential surfaces as the generic search error instead of an HTTP 500.
    Concurrent first searches open the service only once.
    """

    def __init__(self, app, state_attr: str, factory):
        self._app = app
        self._state_attr = state_attr
        self._factory = factory

    def _resolve(self):
        service = getattr(self._app.state, self._state_attr, None)
        if service is not None:
            return service

        with _open_lock:
            service = getattr(self._app.state, self._state_attr, None)
            if service is None:
                service = self._factory()
                setattr(self._app.state, self._state_attr, service)
        return service

    def __getattr__(self, name):
        return getattr(self._resolve(), name)


def get_portal_logger(request: Request):
    """Logger stored on app state at startup (global logger as fallback)."""
    return getattr(request.app.state, "logger", None) or get_logger()


def get_customer_source(request: Request):
    """CustomerSheet for the configured Google Sheet."""
    logger = get_portal_logger(request)

    def _open():
        from sheets.customer_sheet import CustomerSheet
        return CustomerSheet(logger=logger)

    return LazyService(request.app, "customer_source", _open)


def get_summary_generator(request: Request):
    """SummaryGenerator for the configured Gemini model."""
    logger = get_portal_logger(request)

    def _open():
        from messaging.summary_generator import SummaryGenerator
        return SummaryGenerator(logger=logger)

    return LazyService(request.app, "summary_generator", _open)
