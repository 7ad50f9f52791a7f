"""Partition a submission diff into new assets and the token list diff."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from unidiff import PatchSet
from unidiff.errors import UnidiffParseError

from tokenmerge.config.review import ReviewConfig
from tokenmerge.domain.errors import DiffClassificationError, StructuralError
from tokenmerge.domain.review_pipeline.context import ReviewState

if TYPE_CHECKING:
    from collections.abc import Iterable

    from unidiff import PatchedFile

    from tokenmerge.domain.review_pipeline.context import ReviewContext

log = getLogger(__name__)

DEV_NULL = "/dev/null"


@dataclass(slots=True, frozen=True)
class ClassifiedDiff:
    assets: tuple[str, ...]
    tokenlist: PatchedFile


def parse_submission_diff(text: str) -> PatchSet:
    try:
        return PatchSet(text)
    except UnidiffParseError as exc:
        raise StructuralError(f"failed to parse diff: {exc}") from exc


def new_side_path(patched_file: PatchedFile) -> str:
    return patched_file.target_file.removeprefix("b/")


def asset_address(asset: str) -> str:
    """Return the token address encoded in ``assets/<network>/<address>/<file>``."""

    return asset.split("/")[2]


def classify_diff(files: Iterable[PatchedFile], config: ReviewConfig) -> ClassifiedDiff:
    """Accept new assets and a single token list diff, reject everything else."""

    assets: list[str] = []
    tokenlist: PatchedFile | None = None

    for patched_file in files:
        path = new_side_path(patched_file)
        log.debug("found file: %s", path)

        if path.startswith("assets/"):
            _check_asset(patched_file, path, config)
            assets.append(path)
        elif path == config.tokenlist_path:
            if tokenlist is not None:
                raise DiffClassificationError("found multiple tokenlist diffs", path=path)
            tokenlist = patched_file
            log.debug("found %s", posixpath.basename(path))
        else:
            raise DiffClassificationError(f"unsupported file modified: {path}", path=path)

    if tokenlist is None:
        raise DiffClassificationError("no tokenlist diff found")

    return ClassifiedDiff(assets=tuple(assets), tokenlist=tokenlist)


def _check_asset(patched_file: PatchedFile, path: str, config: ReviewConfig) -> None:
    if patched_file.source_file != DEV_NULL:
        raise DiffClassificationError(
            f"found modified asset file {path} - only new assets are allowed", path=path
        )
    segments = path.split("/")
    if len(segments) != 4 or segments[1] != config.asset_network:
        raise DiffClassificationError(f"invalid asset path: {path}", path=path)
    if posixpath.splitext(segments[3])[1] not in config.asset_extensions:
        raise DiffClassificationError(
            f"invalid asset extension: {path} (wants png, jpg, svg)", path=path
        )


class ClassificationPhase:
    name: str = "classification"

    def __init__(self, config: ReviewConfig | None = None) -> None:
        self.config = config or ReviewConfig()

    def run(self, context: ReviewContext) -> None:
        patch = parse_submission_diff(context.submission.diff)
        classified = classify_diff(patch, self.config)
        context.assets = classified.assets
        context.tokenlist_diff = classified.tokenlist
        context.advance(ReviewState.CLASSIFIED)
