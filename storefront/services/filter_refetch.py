"""Filter Refetch Effect: re-fetches the product list whenever the filter changes.

Invariants:
    - Keyed on filter identity (value equality of the frozen Filter)
    - Schedules at most one fetch per filter change, on the running event loop
    - Needs a running event loop; a change made outside one is logged and not fetched
    - Unsubscribing stops future fetches; in-flight fetches settle normally
"""

import asyncio
import logging
from collections.abc import Callable

from storefront.core.app_state import AppState
from storefront.services.catalog_service import CatalogService
from storefront.services.store import Store

logger = logging.getLogger(__name__)


def bind_filter_refetch(store: Store, catalog: CatalogService) -> Callable[[], None]:
    """Subscribe the refetch effect. Returns the unsubscribe callable."""
    in_flight: set[asyncio.Task] = set()

    def on_change(state: AppState, previous: AppState) -> None:
        flt = state.catalog.filter
        if flt is None or flt == previous.catalog.filter:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                f"Filter changed outside a running event loop, page {flt.page} not fetched",
            )
            return
        logger.debug(f"Filter changed, fetching page {flt.page}")
        task = loop.create_task(catalog.fetch_many(flt))
        in_flight.add(task)
        task.add_done_callback(in_flight.discard)

    return store.subscribe(on_change)
