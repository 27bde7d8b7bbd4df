"""HTTP Auth Repository: AuthRepository over the fake store REST API.

Invariants:
    - Tokens are passed through untouched; only the access token is sent, as a Bearer header
    - Payloads that fail schema validation map to RepositoryError
"""

from typing import Any

from pydantic import BaseModel, ValidationError

from storefront.core.errors import ErrorContext, RepositoryError
from storefront.infrastructure.api_client import ApiClient
from storefront.schemas.user import LoginCredentials, RegisterUserInfo, User, UserToken


def _parse(model: type[BaseModel], data: Any, what: str):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RepositoryError(f"Malformed {what} payload: {e.error_count()} error(s)")


class HttpAuthRepository:
    """Accounts via /users and /auth endpoints."""

    def __init__(self, client: ApiClient):
        self._client = client

    async def register_user(self, info: RegisterUserInfo) -> User:
        data = await self._client.request(
            "POST", "/users/", json=info.model_dump(mode="json"),
            context=ErrorContext(operation="register_user"),
        )
        return _parse(User, data, "user")

    async def login_user(self, credentials: LoginCredentials) -> UserToken:
        data = await self._client.request(
            "POST", "/auth/login", json=credentials.model_dump(),
            context=ErrorContext(operation="login_user"),
        )
        return _parse(UserToken, data, "token")

    async def get_user_with_session(self, tokens: UserToken) -> User:
        data = await self._client.request(
            "GET", "/auth/profile",
            headers={"Authorization": f"Bearer {tokens.access_token}"},
            context=ErrorContext(operation="get_user_with_session"),
        )
        return _parse(User, data, "user")
