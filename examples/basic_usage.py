"""
Basic usage example for recruit-desk.

Fetches candidates from Supabase, narrows them with the filter panel and
the prefix search, prints today's interviews and optionally exports the
filtered list to Google Sheets.
"""

import asyncio
from datetime import date

from recruitdesk.config import _load_env, _init_sheets_exporter, _init_source
from recruitdesk.logging import logger, setup_logging
from recruitdesk.utils.filters import CandidateFilters, unique_managers
from recruitdesk.utils.schedule import summarize_todays_interviews
from recruitdesk.utils.search import search_candidates


async def fetch_all(cfg):
    async with _init_source(cfg) as source:
        return await source.fetch_candidates()


def main():
    """Example: filter, search and export candidates."""
    cfg = _load_env()
    setup_logging(log_level=cfg["LOG_LEVEL"], log_file=cfg["LOG_FILE"])

    candidates = asyncio.run(fetch_all(cfg))
    logger.info(f"Loaded {len(candidates)} candidates; managers: {', '.join(unique_managers(candidates))}")

    # Filter panel: Confirmed, virtual interviews only
    filters = CandidateFilters()
    filters.change("status1", "Confirmed")
    filters.change("mode", "Virtual")
    confirmed = filters.apply(candidates)
    logger.info(f"{len(confirmed)} candidates match {filters.active_count} filters")

    # Search box on top of the filtered list
    for c in search_candidates(confirmed, "acme"):
        logger.info(f"  {c.name} - {c.client_name} / {c.position}")

    # Today's schedule
    filters.clear()
    filters.change_date(date.today())
    for row in summarize_todays_interviews(filters.apply(candidates)):
        logger.info(f"  {row.time:>8}  {row.candidate} ({row.client}, {row.status1})")

    exporter = _init_sheets_exporter(cfg)
    if exporter is not None:
        exporter.export(cfg["SHEET_ID"], cfg["EXPORT_WORKSHEET"], confirmed, timezone=cfg["EXPORT_TIMEZONE"])


if __name__ == "__main__":
    main()
