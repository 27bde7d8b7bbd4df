"""Bootstrap: builds a fully wired Storefront from settings.

Invariants:
    - Collaborators are wired explicitly here; nothing is discovered or global
    - Every collaborator can be overridden (tests, alternative transports)
    - aclose() releases the HTTP client and the token store engine
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from storefront.config import Settings, get_settings
from storefront.core.repository_protocols import (
    AuthRepository,
    ProductRepository,
    TokenStore,
)
from storefront.infrastructure.api_client import ApiClient
from storefront.infrastructure.auth_api import HttpAuthRepository
from storefront.infrastructure.observability import setup_logging
from storefront.infrastructure.product_api import HttpProductRepository
from storefront.infrastructure.token_store import SqlTokenStore
from storefront.schemas.catalog import Filter
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogService
from storefront.services.filter_refetch import bind_filter_refetch
from storefront.services.session_service import UserSessionService
from storefront.services.store import Store

logger = logging.getLogger(__name__)


@dataclass
class Storefront:
    """Facade handed to the presentation layer."""
    settings: Settings
    store: Store
    catalog: CatalogService
    cart: CartService
    session: UserSessionService
    api_client: ApiClient | None = None
    token_store: TokenStore | None = None
    unbind_refetch: Callable[[], None] | None = None

    def initial_filter(self) -> Filter:
        return Filter(items_per_page=self.settings.default_items_per_page)

    async def aclose(self) -> None:
        if self.unbind_refetch is not None:
            self.unbind_refetch()
        if self.api_client is not None:
            await self.api_client.aclose()
        if isinstance(self.token_store, SqlTokenStore):
            self.token_store.dispose()
        logger.info("Storefront closed")


def build_storefront(
    settings: Settings | None = None,
    *,
    product_repository: ProductRepository | None = None,
    auth_repository: AuthRepository | None = None,
    token_store: TokenStore | None = None,
    configure_logging: bool = True,
) -> Storefront:
    """Wire store, services and collaborators. HTTP/SQL adapters fill any gap."""
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.log_format)

    api_client = None
    if product_repository is None or auth_repository is None:
        api_client = ApiClient(settings.api_base_url, settings.request_timeout_seconds)
    product_repository = product_repository or HttpProductRepository(api_client)
    auth_repository = auth_repository or HttpAuthRepository(api_client)
    token_store = token_store or SqlTokenStore(settings.token_store_url)

    store = Store()
    catalog = CatalogService(store, product_repository)
    storefront = Storefront(
        settings=settings,
        store=store,
        catalog=catalog,
        cart=CartService(store),
        session=UserSessionService(store, auth_repository, token_store),
        api_client=api_client,
        token_store=token_store,
    )
    if settings.refetch_on_filter_change:
        storefront.unbind_refetch = bind_filter_refetch(store, catalog)
    logger.info(f"Storefront ready against {settings.api_base_url}")
    return storefront
