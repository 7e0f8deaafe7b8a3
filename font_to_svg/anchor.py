"""Anchor specifier parsing.

An anchor string such as "center middle" or "right top" picks the reference
point of a text block relative to the requested (x, y). Each axis is scanned
independently; the first token found for an axis wins and a missing axis falls
back to its default.
"""

from __future__ import annotations

import re
from typing import NamedTuple

HORIZONTAL_ANCHORS = ("left", "center", "right")
VERTICAL_ANCHORS = ("baseline", "top", "middle", "bottom")

_HORIZONTAL_RE = re.compile("|".join(HORIZONTAL_ANCHORS), re.IGNORECASE)
_VERTICAL_RE = re.compile("|".join(VERTICAL_ANCHORS), re.IGNORECASE)


class AnchorSpec(NamedTuple):
    horizontal: str = "left"
    vertical: str = "baseline"


def resolve_anchor(spec: str | None, *, preserve_case: bool = False) -> AnchorSpec:
    """Parse an anchor specifier into an AnchorSpec.

    Matching is case-insensitive. Matched tokens are lower-cased unless
    preserve_case is set, in which case the matched text is carried forward
    verbatim and a mixed-case token such as "Center" is later rejected by the
    metrics calculator with UnknownAnchorOptionError.

    Args:
        spec: Free-text anchor, e.g. "left baseline". None or "" means defaults.
        preserve_case: Keep the matched substring as written.

    Returns:
        The (horizontal, vertical) pair.
    """
    spec = spec or ""
    horizontal = _first_token(_HORIZONTAL_RE, spec, "left", preserve_case)
    vertical = _first_token(_VERTICAL_RE, spec, "baseline", preserve_case)
    return AnchorSpec(horizontal, vertical)


def _first_token(pattern: re.Pattern[str], spec: str, default: str, preserve_case: bool) -> str:
    match = pattern.search(spec)
    if match is None:
        return default
    token = match.group(0)
    return token if preserve_case else token.lower()
