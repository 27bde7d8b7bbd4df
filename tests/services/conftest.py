"""Service test fixtures: store, mocked repositories and token store.

Invariants:
    - Every test gets a fresh Store
    - Repositories are AsyncMock objects shaped by the repository Protocols
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.infrastructure.token_store import InMemoryTokenStore
from storefront.services.store import Store


@pytest.fixture
def store():
    return Store()


@pytest.fixture
def product_repo():
    repo = MagicMock()
    repo.get_products = AsyncMock()
    repo.get_product = AsyncMock()
    repo.register_product = AsyncMock()
    repo.update_product = AsyncMock()
    repo.delete_product = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def auth_repo():
    repo = MagicMock()
    repo.register_user = AsyncMock()
    repo.login_user = AsyncMock()
    repo.get_user_with_session = AsyncMock()
    return repo


@pytest.fixture
def token_store():
    return InMemoryTokenStore()
