from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class FocusOptions:
    markers: Tuple[str, ...] = ()
    context_chars: int = 500
    max_chars: int = 24000


def _find_marker(text: str, markers: Tuple[str, ...]) -> Optional[int]:
    lower = text.lower()
    best: Optional[int] = None
    for marker in markers:
        pos = lower.find(marker.lower())
        if pos != -1 and (best is None or pos < best):
            best = pos
    return best


def focus(text: str, options: FocusOptions) -> str:
    """
    Narrow text to the part worth sending to the LLM.

    - marker found: keep from `context_chars` before the first marker to the end
      (no cap, long recipes must not lose their steps)
    - no marker and longer than `max_chars`: keep the LAST `max_chars` characters,
      navigation and boilerplate usually sit at the top of a page
    """
    idx = _find_marker(text, options.markers)
    if idx is not None:
        return text[max(0, idx - options.context_chars):]

    if len(text) > options.max_chars:
        return text[len(text) - options.max_chars:]

    return text
