"""Identifier sets used to reject duplicate and colliding tokens."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tokenmerge.domain.errors import DuplicateTokenError, TokenCollisionError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tokenmerge.domain.model import Token


@dataclass(slots=True)
class KnownEntryRegistry:
    """Addresses, symbols and names already present in the registry.

    ``commit`` is the only mutation path. It is called once a submission has
    been fully accepted and serialises concurrent writers through a lock.
    """

    addresses: set[str] = field(default_factory=set[str])
    symbols: set[str] = field(default_factory=set[str])
    names: set[str] = field(default_factory=set[str])
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @classmethod
    def from_tokens(cls, tokens: Iterable[Token]) -> KnownEntryRegistry:
        registry = cls()
        registry._store(tokens)
        return registry

    def check_global(self, token: Token) -> None:
        """Raise ``TokenCollisionError`` if ``token`` reuses a known identifier."""

        if token.address in self.addresses:
            raise TokenCollisionError("address", token.address)
        if token.symbol in self.symbols:
            raise TokenCollisionError("symbol", token.symbol)
        if token.name in self.names:
            raise TokenCollisionError("name", token.name)

    @staticmethod
    def check_local(tokens: Iterable[Token]) -> None:
        """Raise ``DuplicateTokenError`` for the first identifier seen twice."""

        symbols: set[str] = set()
        addresses: set[str] = set()
        names: set[str] = set()
        for token in tokens:
            if token.symbol in symbols:
                raise DuplicateTokenError("symbol", token.symbol)
            if token.address in addresses:
                raise DuplicateTokenError("address", token.address)
            if token.name in names:
                raise DuplicateTokenError("name", token.name)
            symbols.add(token.symbol)
            addresses.add(token.address)
            names.add(token.name)

    def contains_address(self, address: str) -> bool:
        return address in self.addresses

    def contains_symbol(self, symbol: str) -> bool:
        return symbol in self.symbols

    def contains_name(self, name: str) -> bool:
        return name in self.names

    def commit(self, tokens: Iterable[Token]) -> None:
        with self._lock:
            self._store(tokens)

    def _store(self, tokens: Iterable[Token]) -> None:
        for token in tokens:
            self.addresses.add(token.address)
            self.symbols.add(token.symbol)
            self.names.add(token.name)

    def __len__(self) -> int:
        return len(self.addresses)
