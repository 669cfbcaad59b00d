"""Managed-block merging for user-owned text files.

A managed block is the region between a start and an end sentinel line.
The engine owns everything inside it and regenerates it on every run;
everything outside it belongs to the user and survives merges byte for
byte.

Key rules:

* The canonical block is ``START\\n<payload without trailing
  whitespace>\\nEND\\n``.
* The first ``START`` and the first ``END`` after it delimit the block
  that gets replaced, together with at most one newline following
  ``END``.  Any later pairs are left alone.
* Without a complete pair (no markers, only one of them, or an ``END``
  that only appears before ``START``) the block is appended after
  exactly one blank line.
* Matching uses plain ``str.find`` so input size never causes
  backtracking blow-ups.
"""

from __future__ import annotations

from pydantic import BaseModel

MARKER_START = "<!-- ai-specflow:start -->"
MARKER_END = "<!-- ai-specflow:end -->"


def render_block(
    payload: str,
    start: str = MARKER_START,
    end: str = MARKER_END,
) -> str:
    """Build the canonical managed block for *payload*."""
    return f"{start}\n{payload.rstrip()}\n{end}\n"


def find_managed_block(
    text: str,
    start: str = MARKER_START,
    end: str = MARKER_END,
) -> tuple[int, int] | None:
    """Locate the first complete managed block in *text*.

    Args:
        text: Text to search.
        start: Start sentinel.
        end: End sentinel.

    Returns:
        ``(begin, stop)`` slice bounds covering ``start`` through ``end``
        plus one trailing newline when present, or ``None`` when no
        ``end`` follows the first ``start``.
    """
    begin = text.find(start)
    if begin == -1:
        return None

    end_at = text.find(end, begin + len(start))
    if end_at == -1:
        return None

    stop = end_at + len(end)
    if text.startswith("\n", stop):
        stop += 1
    return begin, stop


def _separator_for(existing: str) -> str:
    if not existing or existing.endswith("\n\n"):
        return ""
    if existing.endswith("\n"):
        return "\n"
    return "\n\n"


def merge_managed_block(
    existing: str,
    payload: str,
    start: str = MARKER_START,
    end: str = MARKER_END,
) -> str:
    """Merge *payload* into *existing* as a managed block.

    Args:
        existing: Current file text (may be empty).
        payload: Generated content for the block.
        start: Start sentinel.
        end: End sentinel.

    Returns:
        The merged text.  Text outside the block is unchanged.
    """
    block = render_block(payload, start, end)

    span = find_managed_block(existing, start, end)
    if span is not None:
        begin, stop = span
        return existing[:begin] + block + existing[stop:]

    # No complete pair: a lone marker is left where it is and a fresh
    # block goes at the end.
    return existing + _separator_for(existing) + block


class ManagedBlock(BaseModel):
    """A pair of sentinel strings delimiting an engine-owned region.

    Attributes:
        start: Start sentinel line.
        end: End sentinel line.
    """

    start: str = MARKER_START
    end: str = MARKER_END

    model_config = {"frozen": True}

    def render(self, payload: str) -> str:
        """Build the canonical block for *payload*."""
        return render_block(payload, self.start, self.end)

    def find(self, text: str) -> tuple[int, int] | None:
        """Locate the first complete block in *text*."""
        return find_managed_block(text, self.start, self.end)

    def merge(self, existing: str, payload: str) -> str:
        """Merge *payload* into *existing* text."""
        return merge_managed_block(existing, payload, self.start, self.end)
