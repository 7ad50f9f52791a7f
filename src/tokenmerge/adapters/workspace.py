"""Local working copy of the token list repository."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from tokenmerge.config.review import TOKENLIST_PATH
from tokenmerge.domain.model import TokenList
from tokenmerge.domain.ports.workspace import RegistryWorkspace, WorkspaceError

log = getLogger(__name__)

__all__ = ["LocalRegistryWorkspace", "WorkspaceError"]


@dataclass(slots=True)
class LocalRegistryWorkspace:
    """Read and write the token list and assets below ``root``."""

    root: Path = field(default_factory=Path.cwd)
    tokenlist_path: str = TOKENLIST_PATH

    @property
    def tokenlist_file(self) -> Path:
        return self.root / self.tokenlist_path

    def load_tokenlist(self) -> TokenList:
        try:
            content = self.tokenlist_file.read_bytes()
        except OSError as exc:
            raise WorkspaceError(f"failed to open tokenlist: {exc}") from exc
        try:
            tokenlist = TokenList.model_validate_json(content, strict=True)
        except ValidationError as exc:
            raise WorkspaceError(f"failed to decode tokenlist: {exc}") from exc
        log.info(
            "current tokenlist loaded from %s with %d tokens",
            self.tokenlist_file,
            len(tokenlist.tokens),
        )
        return tokenlist

    def write_tokenlist(self, tokenlist: TokenList) -> None:
        self.tokenlist_file.parent.mkdir(parents=True, exist_ok=True)
        self.tokenlist_file.write_text(tokenlist.to_json(), encoding="utf-8")

    def write_asset(self, path: str, content: bytes) -> None:
        target = self._asset_file(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        log.debug("wrote asset %s (%d bytes)", path, len(content))

    def remove_asset(self, path: str) -> None:
        target = self._asset_file(path)
        target.unlink(missing_ok=True)
        if target.parent.is_dir() and not any(target.parent.iterdir()):
            target.parent.rmdir()
        log.debug("removed asset %s", path)

    def _asset_file(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if not target.is_relative_to(self.root.resolve()):
            raise WorkspaceError(f"asset path escapes workspace: {path}")
        return target


if TYPE_CHECKING:
    _workspace_check: RegistryWorkspace = LocalRegistryWorkspace()
