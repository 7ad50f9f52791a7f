"""Pydantic models describing token list records.

Both models decode strictly: unknown fields are rejected and values are not
coerced between JSON types.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TokenListBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True, populate_by_name=True, frozen=True)


class Token(TokenListBaseModel):
    chain_id: int = Field(alias="chainId")
    address: str
    symbol: str
    name: str
    decimals: int = Field(ge=0)
    logo_uri: str = Field(alias="logoURI")
    tags: list[str] | None = None
    extensions: dict[str, str] | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the external JSON representation of the token."""

        return self.model_dump(by_alias=True, exclude_none=True)

    def extension(self, key: str) -> str | None:
        if self.extensions is None:
            return None
        return self.extensions.get(key)


class Version(TokenListBaseModel):
    major: int
    minor: int
    patch: int


class TokenList(TokenListBaseModel):
    name: str
    logo_uri: str = Field(alias="logoURI")
    keywords: list[str]
    tags: dict[str, Any] | None = None
    timestamp: str
    tokens: list[Token]
    version: Version

    def with_tokens(self, tokens: list[Token]) -> TokenList:
        """Return a copy of the snapshot with ``tokens`` appended."""

        return self.model_copy(update={"tokens": [*self.tokens, *tokens]})

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)
