"""Read-only client for the Hedera mirror node REST API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from tokensweep.adapters.http_resilience import ResilientClient
from tokensweep.domain.errors import (
    AssetNotFoundError,
    LedgerAuthError,
    LedgerNetworkError,
    LedgerProtocolError,
)

from .schema import AccountResponse, ErrorResponse, TokenInfoResponse, TokenRelationshipsResponse
from .translator import build_account_snapshot, parse_asset_metadata

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from tokensweep.config.http_resilience import ResilienceConfig
    from tokensweep.domain.types import AccountSnapshot, AssetMetadata

    from .schema import TokenRelationship

log = getLogger(__name__)

TOKENS_PAGE_SIZE = 100


def is_token_info_payload(payload: object) -> bool:
    """Cache predicate: only token metadata is reused within a run, never balances."""

    return isinstance(payload, dict) and "token_id" in payload and "deleted" in payload


class MirrorNodeClient:
    """Fetch balances and token metadata from a mirror node.

    Use as an async context manager; the underlying HTTP client is opened on
    enter and closed on exit.
    """

    def __init__(
        self,
        *,
        resilience: ResilienceConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._resilience = resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> MirrorNodeClient:
        self._client = self._client_factory(self._resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()

    async def fetch_account_snapshot(self, account_id: str) -> AccountSnapshot:
        account = await self._get_model(
            f"/api/v1/accounts/{account_id}",
            AccountResponse,
            params={"transactions": "false"},
        )
        relationships = await self._fetch_token_relationships(account_id)
        return build_account_snapshot(account, relationships)

    async def fetch_asset_metadata(self, asset_id: str) -> AssetMetadata:
        payload = await self._get_model(f"/api/v1/tokens/{asset_id}", TokenInfoResponse)
        return parse_asset_metadata(payload)

    async def _fetch_token_relationships(self, account_id: str) -> list[TokenRelationship]:
        relationships: list[TokenRelationship] = []
        path: str | None = f"/api/v1/accounts/{account_id}/tokens"
        params: dict[str, str] | None = {"limit": str(TOKENS_PAGE_SIZE)}
        while path is not None:
            page = await self._get_model(path, TokenRelationshipsResponse, params=params)
            relationships.extend(page.tokens)
            # ``links.next`` already carries the query string.
            path = page.links.next
            params = None
        return relationships

    async def _get_model[TModel: BaseModel](
        self,
        path: str,
        model: type[TModel],
        *,
        params: dict[str, str] | None = None,
    ) -> TModel:
        if self._client is None:
            raise RuntimeError("MirrorNodeClient must be used as an async context manager")

        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise LedgerNetworkError(f"Mirror node request {path} failed: {exc}") from exc

        if response.is_error:
            raise _error_for_response(path, response)

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            log.debug("Unexpected payload from %s: %s", path, response.text)
            raise LedgerProtocolError(f"Unexpected mirror node payload for {path}") from exc


def _error_for_response(path: str, response: httpx.Response) -> Exception:
    detail = _error_message(response) or response.reason_phrase
    message = f"Mirror node returned {response.status_code} for {path}: {detail}"
    if response.status_code == httpx.codes.NOT_FOUND:
        return AssetNotFoundError(message)
    if response.status_code in {httpx.codes.UNAUTHORIZED, httpx.codes.FORBIDDEN}:
        return LedgerAuthError(message)
    return LedgerNetworkError(message)


def _error_message(response: httpx.Response) -> str | None:
    try:
        return ErrorResponse.model_validate(response.json()).message
    except (ValueError, ValidationError):
        return None
