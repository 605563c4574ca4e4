from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Sequence

from .palette import DEFAULT_PALETTE, palette_color

logger = logging.getLogger(__name__)

COLOR_MARKER = "{color:"
_COLOR_DELIMITER = re.compile(r"\{color:|\{color\}")


@dataclass(frozen=True)
class TextRun:
    text: str
    color: str | None = None


def parse_color_markup(
    text: str,
    palette: Mapping[str, Sequence[str]] = DEFAULT_PALETTE,
) -> list[TextRun]:
    """Split inline ``{color:<code>}...{color}`` markup into styled runs.

    Text without a ``{color:`` marker comes back as a single uncolored run.
    Otherwise every delimiter-separated segment becomes one run, in order;
    a segment carrying ``<code>}`` is colored with ``<code>``, anything else
    is emitted plain. Codes starting with ``#`` are used verbatim, other codes
    are looked up in ``palette``.
    """
    if COLOR_MARKER not in text:
        return [TextRun(text)]

    runs: list[TextRun] = []
    for part in _COLOR_DELIMITER.split(text):
        if "}" not in part:
            runs.append(TextRun(part))
            continue
        code, _, remaining = part.partition("}")
        color = palette_color(code, palette)
        if color is None:
            logger.warning("Unknown markup color", extra={"color_code": code})
        runs.append(TextRun(remaining, color))
    return runs


__all__ = ["COLOR_MARKER", "TextRun", "parse_color_markup"]
