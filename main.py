"""Main orchestrator script.

This script can be scheduled (e.g., cron or CI) or run ad-hoc to perform the
full pipeline: fetch every source, extract release records, resolve duplicate
games, project them onto the calendar and write the JSON files and a report.
"""

import itertools
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List

from dotenv import load_dotenv
from tqdm import tqdm

from etl import entity_resolution, report
from etl.platforms import default_catalog
from etl.release_calendar import ReleaseCalendar
from ingest import SOURCES

# Load environment variables from .env if present (safe-no-op if file missing)
load_dotenv()

# ---------------------------------------------------------------------------
# Logging setup (controlled by RC_LOGLEVEL, default INFO)
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=os.getenv("RC_LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger(__name__)

# Optional env var RC_ONLY="wikipedia" or "wikipedia,gameinformer" to limit sources fetched
RC_ONLY = [s.strip().lower() for s in os.getenv("RC_ONLY", ",".join(SOURCES)).split(",") if s.strip()]

OUTPUT_DIR = Path(os.getenv("RC_OUTPUT_DIR", "output"))

# Downloads may overlap; extraction and merging never do
_MAX_WORKERS = 4


def orchestrate() -> None:
    """Run the full release calendar pipeline."""
    sources = [key for key in RC_ONLY if key in SOURCES]
    unknown = [key for key in RC_ONLY if key not in SOURCES]
    if unknown:
        logger.warning("Ignoring unknown sources: %s", ", ".join(unknown))

    logger.info("Fetching %d sources", len(sources))
    with ThreadPoolExecutor(max_workers=_MAX_WORKERS) as pool:
        futures = {key: pool.submit(SOURCES[key].fetch) for key in sources}
        pages: Dict[str, List[str]] = {key: fut.result() for key, fut in futures.items()}

    catalog = default_catalog()
    ids = itertools.count()
    games = entity_resolution.GamePool()

    # Source order matters: earlier sources become merge targets for later ones
    for key in tqdm(sources, desc="Resolving", unit="source"):
        extracted = SOURCES[key].extract(pages[key], catalog, ids)
        logger.info("%s: %d pages, %d records", SOURCES[key].NAME, len(pages[key]), len(extracted))
        games.add(extracted, merge=True)
        logger.info("Total games %d", len(games))

    calendar = ReleaseCalendar.from_games(games.games(), catalog)
    logger.info("Projected %d calendar entries", len(calendar))

    report.write_calendar_json(calendar, OUTPUT_DIR)
    report.write_markdown_report(calendar, OUTPUT_DIR / "report.md")

    logger.info("Pipeline complete → %s", OUTPUT_DIR)


if __name__ == "__main__":
    orchestrate()
