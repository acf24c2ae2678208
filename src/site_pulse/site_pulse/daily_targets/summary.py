from __future__ import annotations

from typing import Iterable

from ..core.constants import SUMMARY_MAX_LENGTH, SUMMARY_PREVIEW_LENGTH


def summarize_achievements(
    contributions: Iterable[str],
    *,
    limit: int = SUMMARY_MAX_LENGTH,
    preview: int = SUMMARY_PREVIEW_LENGTH,
) -> str:
    """Display text for the achievements currently held in the draft.

    Plain ". "-joined text while it fits in `limit`; otherwise a condensed
    "Session N: ..." line per contribution.
    """
    items = [c.strip() for c in contributions if c and c.strip()]
    joined = ". ".join(items)
    if len(joined) <= limit:
        return joined

    parts = []
    for i, text in enumerate(items, start=1):
        cut = text[:preview] + ("..." if len(text) > preview else "")
        parts.append(f"Session {i}: {cut}")
    return " | ".join(parts)
