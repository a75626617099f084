"""
Search Controller
Runs the DNI lookup -> summary sequence and owns the page state
"""
import asyncio
import itertools
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import config
from tracker.errors import CustomerNotFoundError, PortalError
from tracker.models import Customer
from tracker.progress import ProgressTracker, build_tracker, overall_status


class SearchPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULT = "result"
    ERROR = "error"


@dataclass
class SearchState:
    """What the page shows. RESULT and ERROR never carry each other's data."""
    phase: SearchPhase = SearchPhase.IDLE
    request_id: int = 0
    dni: str = ""
    customer: Optional[Customer] = None
    summary: str = ""
    tracker: Optional[ProgressTracker] = None
    error: Optional[str] = None
    superseded: bool = False  # a newer search started before this one finished

    @property
    def is_loading(self) -> bool:
        return self.phase is SearchPhase.LOADING

    def to_dict(self) -> Dict[str, Any]:
        return {
            'phase': self.phase.value,
            'request_id': self.request_id,
            'error': self.error,
            'customer': self.customer.to_dict() if self.customer else None,
            'summary': self.summary,
            'tracker': self.tracker.to_dict() if self.tracker else None,
            'overall_status': overall_status(self.tracker).value if self.tracker else None,
            'superseded': self.superseded,
        }


class SearchController:
    """
    Drives one page's searches.

    Each search gets a monotonically increasing request id. A search that
    finishes after a newer one has started is discarded instead of
    overwriting the newer state.
    """

    def __init__(self, source, generator, logger=None):
        """
        Args:
            source: Object with ``find_by_dni(dni) -> Optional[Customer]``
            generator: Object with ``summarize(customer) -> str``
            logger: Optional PortalLogger
        """
        self.source = source
        self.generator = generator
        self.logger = logger
        self._request_ids = itertools.count(1)
        self._latest_request_id = 0
        self._state = SearchState()

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def latest_request_id(self) -> int:
        return self._latest_request_id

    def begin(self, dni: str) -> SearchState:
        """
        Start a search: validate the DNI and reset the page.

        A blank DNI ends in ERROR right away; nothing is sent to the sheet.
        """
        self._latest_request_id = next(self._request_ids)
        key = (dni or "").strip()

        if not key:
            self._state = SearchState(
                phase=SearchPhase.ERROR,
                request_id=self._latest_request_id,
                error=config.MSG_EMPTY_DNI,
            )
            return self._state

        self._state = SearchState(
            phase=SearchPhase.LOADING,
            request_id=self._latest_request_id,
            dni=key,
        )
        return self._state

    async def search(self, dni: str) -> SearchState:
        """
        Look up a DNI and generate its summary.

        Returns:
            The committed state, or the discarded outcome (``superseded=True``)
            when a newer search started in the meantime
        """
        pending = self.begin(dni)
        if pending.phase is not SearchPhase.LOADING:
            return pending

        request_id = pending.request_id
        start_time = time.time()
        if self.logger:
            self.logger.log_search_start(request_id, pending.dni)

        try:
            customer = await asyncio.to_thread(self._lookup, pending.dni)
            if customer is None:
                raise CustomerNotFoundError(f"No row for request {request_id}")

            summary = await asyncio.to_thread(self._summarize, customer)
            if self.logger:
                self.logger.log_summary_call(request_id, len(summary))

            outcome = SearchState(
                phase=SearchPhase.RESULT,
                request_id=request_id,
                dni=pending.dni,
                customer=customer,
                summary=summary,
                tracker=build_tracker(customer),
            )

        except CustomerNotFoundError as e:
            outcome = self._failed(request_id, pending.dni, e.user_message)

        except PortalError as e:
            if self.logger:
                self.logger.log_error(request_id, type(e).__name__, str(e))
            outcome = self._failed(request_id, pending.dni, config.MSG_SEARCH_FAILED)

        except Exception as e:
            if self.logger:
                self.logger.error(f"Search {request_id} - Unexpected failure: {str(e)}",
                                  component="Search", exc_info=True)
            outcome = self._failed(request_id, pending.dni, config.MSG_SEARCH_FAILED)

        if self.logger:
            self.logger.log_search_complete(request_id, outcome.phase.value, time.time() - start_time)

        return self._commit(outcome)

    # Attribute access on the source or generator may open a client, so it
    # happens on the worker thread together with the call itself
    def _lookup(self, dni: str) -> Optional[Customer]:
        return self.source.find_by_dni(dni)

    def _summarize(self, customer: Customer) -> str:
        return self.generator.summarize(customer)

    def _failed(self, request_id: int, dni: str, message: str) -> SearchState:
        return SearchState(
            phase=SearchPhase.ERROR,
            request_id=request_id,
            dni=dni,
            error=message,
        )

    def _commit(self, outcome: SearchState) -> SearchState:
        if outcome.request_id != self._latest_request_id:
            outcome.superseded = True
            if self.logger:
                self.logger.warning(
                    f"Search {outcome.request_id} - Discarded, request "
                    f"{self._latest_request_id} is newer",
                    component="Search",
                )
            return outcome

        self._state = outcome
        return outcome
