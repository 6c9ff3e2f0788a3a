"""Report module: writes the calendar as JSON documents and a Markdown summary."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

from .release_calendar import MONTH_NAMES, ReleaseCalendar

logger = logging.getLogger(__name__)

# Fixed namespace so the same entry always gets the same uid
UID_NAMESPACE = uuid.UUID("00000000-0000-0000-0000-000000000000")


def entry_uid(entry: Dict) -> str:
    """Deterministic identifier of a calendar entry.

    Built from the name, the release date and the platform short names, so
    unmerged records sharing a name and a date still get distinct uids.
    """

    key = f"{entry['name']}:{entry['releaseDate']}"
    shorts = sorted(platform["shortName"] for platform in entry.get("platforms", ()))
    if shorts:
        key += ":" + ",".join(shorts)
    return str(uuid.uuid5(UID_NAMESPACE, key))


def _stamp(updated_at: Optional[datetime]) -> str:
    return (updated_at or datetime.now(timezone.utc)).isoformat()


def _with_uids(entries: List[Dict]) -> List[Dict]:
    return [{**entry, "uid": entry_uid(entry)} for entry in entries]


def month_document(calendar: ReleaseCalendar, month_index: int, updated_at: Optional[datetime] = None) -> Dict:
    """Interchange document for one month (``calendar-<month>.json``)."""

    month = calendar.to_month_json(month_index)
    month["entries"] = _with_uids(month["entries"])
    month["updatedAt"] = _stamp(updated_at)
    return month


def calendar_document(calendar: ReleaseCalendar, updated_at: Optional[datetime] = None) -> Dict:
    """Interchange document for the whole year (``calendar-all-months.json``)."""

    months = []
    for month in calendar.months():
        month["entries"] = _with_uids(month["entries"])
        months.append(month)
    return {"months": months, "updatedAt": _stamp(updated_at)}


def write_calendar_json(calendar: ReleaseCalendar, output_dir: Union[str, Path] = "output") -> List[Path]:
    """Write the year document plus one document per month into *output_dir*.

    Returns
    -------
    List[Path]
        Paths of the files written.
    """

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    updated_at = datetime.now(timezone.utc)

    written: List[Path] = []
    path = output_dir / "calendar-all-months.json"
    path.write_text(json.dumps(calendar_document(calendar, updated_at), ensure_ascii=False, indent=2))
    written.append(path)

    for index, month_name in enumerate(MONTH_NAMES):
        path = output_dir / f"calendar-{month_name.lower()}.json"
        path.write_text(json.dumps(month_document(calendar, index, updated_at), ensure_ascii=False, indent=2))
        written.append(path)

    logger.info("Wrote %d calendar files to %s", len(written), output_dir)
    return written


def write_markdown_report(calendar: ReleaseCalendar, output_path: Union[str, Path] = "report.md") -> None:
    """Write a Markdown listing of the calendar, one heading per month and day.

    Parameters
    ----------
    calendar : ReleaseCalendar
        Projected calendar.
    output_path : Union[str, Path], optional
        Destination file path, by default "report.md".
    """
    lines: List[str] = ["# Video Game Release Calendar", ""]
    lines.append(f"> {len(calendar)} release entries.")

    for index, month_name in enumerate(MONTH_NAMES):
        sections = calendar.days(index)
        if not sections:
            continue
        lines.append("")
        lines.append(f"## {month_name}")
        for day, entries in sections:
            lines.append("")
            lines.append(f"### {day.strftime('%d %B')}")
            for entry in entries:
                platforms = ", ".join(p["shortName"] for p in entry["platforms"])
                line = f"- {entry['name']} ({platforms})"
                if entry.get("developer"):
                    line += f" — {entry['developer']}"
                lines.append(line)

    Path(output_path).write_text("\n".join(lines) + "\n", encoding="utf-8")


__all__ = [
    "entry_uid",
    "month_document",
    "calendar_document",
    "write_calendar_json",
    "write_markdown_report",
]
