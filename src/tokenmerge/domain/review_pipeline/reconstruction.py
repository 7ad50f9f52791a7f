"""Rebuild parseable token records from the added lines of a diff hunk.

A hunk of the token list diff rarely contains a self-contained JSON document:
it may start with the tail of the previous array element, stop before the
closing brace of the last one, or carry several records at once. The repair
steps below are heuristics over the raw text and are kept behind
``repair_record_text`` so they can be replaced without touching decoding or
validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from tokenmerge.domain.errors import HunkLineError, StructuralError
from tokenmerge.domain.review_pipeline.context import ReviewState

if TYPE_CHECKING:
    from collections.abc import Iterable

    from unidiff import Hunk

    from tokenmerge.domain.review_pipeline.context import ReviewContext

log = getLogger(__name__)

ADDED = "+"
REMOVED = "-"
MODIFIED = "!"
CONTEXT = " "
NO_NEWLINE = "\\"

RECORD_MARKER = '"chainId"'


@dataclass(slots=True, frozen=True)
class ReconstructedText:
    text: str
    multiple: bool


def hunk_lines(hunk: Hunk) -> list[str]:
    """Return the marker-prefixed lines of ``hunk`` without line terminators."""

    return [str(line).rstrip("\r\n") for line in hunk]


def extract_added_text(lines: Iterable[str]) -> str:
    """Concatenate added lines, failing on anything that is not a pure addition."""

    added: list[str] = []
    for number, line in enumerate(lines, start=1):
        if line.startswith(REMOVED):
            raise HunkLineError(f"found removed line: {line}", line=line, line_number=number)
        if line.startswith(MODIFIED):
            raise HunkLineError(f"found modified line: {line}", line=line, line_number=number)
        if line.startswith((CONTEXT, NO_NEWLINE)):
            continue
        if not line.startswith(ADDED):
            raise HunkLineError(f"unknown diff op: {line}", line=line, line_number=number)
        content = line.removeprefix(ADDED)
        log.debug("ADD: %d: %s", len(added) + 1, content)
        added.append(content)
    return "\n".join(added)


def repair_record_text(text: str) -> ReconstructedText | None:
    """Turn an added-lines buffer into one JSON object or an array of objects.

    Returns ``None`` when the buffer holds nothing but whitespace.
    """

    text = text.strip().removesuffix(",")
    if not text:
        return None

    # hunk started with the end of the previous element
    if text.startswith("},"):
        text = text.removeprefix("},") + "\n}"

    delta = text.count("{") - text.count("}")
    if delta > 0:
        text += "\n}" * delta
    elif delta < 0:
        for _ in range(-delta):
            head, _sep, tail = text.rpartition("}")
            text = (head + tail).rstrip()
        text = text.removesuffix(",")

    multiple = text.count(RECORD_MARKER) > 1
    if multiple:
        text = f"[\n{text}\n]"

    return ReconstructedText(text=text, multiple=multiple)


def reconstruct_hunk(lines: Iterable[str]) -> ReconstructedText | None:
    return repair_record_text(extract_added_text(lines))


class ReconstructionPhase:
    name: str = "reconstruction"

    def run(self, context: ReviewContext) -> None:
        if context.tokenlist_diff is None:
            raise RuntimeError("Classification must run before reconstruction")

        for hunk in context.tokenlist_diff:
            reconstructed = reconstruct_hunk(hunk_lines(hunk))
            if reconstructed is not None:
                context.texts.append(reconstructed)

        if not context.texts:
            raise StructuralError("no added tokens found in tokenlist diff")
        context.advance(ReviewState.RECONSTRUCTED)
