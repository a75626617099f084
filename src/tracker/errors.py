"""
Portal error taxonomy.

Every error carries the fixed message shown to the customer. The underlying
cause (gspread, Gemini, network) is chained with ``raise ... from`` and only
ever reaches the logs.
"""
import config


class PortalError(Exception):
    """Base class for errors that end a search attempt."""

    user_message = config.MSG_SEARCH_FAILED

    def __init__(self, detail: str = "", user_message: str = None):
        super().__init__(detail or self.user_message)
        if user_message is not None:
            self.user_message = user_message


class ValidationError(PortalError):
    """The DNI was blank. Raised before any network call."""

    user_message = config.MSG_EMPTY_DNI


class CustomerNotFoundError(PortalError):
    """The data source has no row for the DNI."""

    user_message = config.MSG_DNI_NOT_FOUND


class DataSourceError(PortalError):
    """Reading the customer sheet failed."""


class SummaryGenerationError(PortalError):
    """Gemini failed or returned nothing usable."""
