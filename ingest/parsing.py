"""Small parsing helpers shared by the extractors."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import List, Optional

_RE_FOOTNOTE = re.compile(r"\[[^\]]*\]")


def parse_month_day(text: str, year: int) -> Optional[date]:
    """Parse ``"September 25"`` / ``"25 September"`` / ``"Sep 25"`` for *year*.

    Returns ``None`` for "TBA", "Q3" and anything else that is not a day.
    """

    text = " ".join(text.replace(",", " ").split())
    for fmt in ("%B %d %Y", "%d %B %Y", "%b %d %Y", "%d %b %Y"):
        try:
            return datetime.strptime(f"{text} {year}", fmt).date()
        except ValueError:
            continue
    return None


def split_platforms(text: str) -> List[str]:
    """``"[PC, PS5, Xbox Series X/S]"`` → ``["PC", "PS5", "Xbox Series X/S"]``."""

    text = text.strip().strip("[]()")
    return [part.strip() for part in text.split(",") if part.strip()]


def clean_title(text: str) -> str:
    """Drop footnote markers and surrounding whitespace from a title cell."""

    return " ".join(_RE_FOOTNOTE.sub("", text).split())


__all__ = ["parse_month_day", "split_platforms", "clean_title"]
