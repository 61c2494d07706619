"""Pydantic models describing Hedera mirror node REST payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class MirrorBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Links(MirrorBaseModel):
    next: str | None = None


class AccountBalance(MirrorBaseModel):
    balance: int
    timestamp: str | None = None


class AccountResponse(MirrorBaseModel):
    """Subset of ``GET /api/v1/accounts/{id}`` used for the hbar balance."""

    account: str
    balance: AccountBalance
    deleted: bool | None = None


class TokenRelationship(MirrorBaseModel):
    token_id: str
    balance: int = Field(ge=0)
    automatic_association: bool | None = None
    created_timestamp: str | None = None


class TokenRelationshipsResponse(MirrorBaseModel):
    """One page of ``GET /api/v1/accounts/{id}/tokens``."""

    tokens: list[TokenRelationship]
    links: Links = Field(default_factory=Links)


class TokenInfoResponse(MirrorBaseModel):
    """Subset of ``GET /api/v1/tokens/{id}``."""

    token_id: str
    name: str | None = None
    symbol: str | None = None
    deleted: bool = False
    type: str | None = None

    _normalize_text = field_validator("name", "symbol", mode="before")(_blank_to_none)


class ErrorMessage(MirrorBaseModel):
    message: str


class ErrorStatus(MirrorBaseModel):
    messages: list[ErrorMessage] = Field(default_factory=list)


class ErrorResponse(MirrorBaseModel):
    status: ErrorStatus = Field(alias="_status")

    @property
    def message(self) -> str | None:
        if not self.status.messages:
            return None
        return "; ".join(item.message for item in self.status.messages)
