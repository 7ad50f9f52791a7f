"""Review rules for token list submissions."""

from __future__ import annotations

from dataclasses import dataclass, field

TOKENLIST_PATH = "src/tokens/solana.tokenlist.json"
ASSET_NETWORK = "mainnet"
ASSET_BASE_URL = "https://raw.githubusercontent.com/solana-labs/token-list/main/"
RAW_CONTENT_BASE_URL = "https://raw.githubusercontent.com/"
COINGECKO_COIN_URL = "https://www.coingecko.com/en/coins/"
SHADOWBAN_API_URL = "https://shadowban.eu/.api/"
VERIFICATION_TIMEOUT_SECONDS = 5.0
MAX_ASSET_BYTES = 200 * 1024


@dataclass(frozen=True)
class ReviewConfig:
    """Static rules applied to every submission under review."""

    tokenlist_path: str = TOKENLIST_PATH
    asset_network: str = ASSET_NETWORK
    asset_extensions: frozenset[str] = field(
        default_factory=lambda: frozenset({".png", ".jpg", ".svg"})
    )
    asset_base_url: str = ASSET_BASE_URL
    raw_content_base_url: str = RAW_CONTENT_BASE_URL
    coingecko_url: str = COINGECKO_COIN_URL
    shadowban_url: str = SHADOWBAN_API_URL
    verification_timeout_seconds: float = VERIFICATION_TIMEOUT_SECONDS
    max_asset_bytes: int = MAX_ASSET_BYTES
    verbose_schema_errors: bool = False

    @property
    def local_asset_prefix(self) -> str:
        return f"{self.asset_base_url}assets/"
