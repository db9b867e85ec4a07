"""Chronic (4-week) load baseline, the ACWR denominator.

The trailing 28 days ending on the reference date are split into four
consecutive 7-day blocks; chronic load is the mean of the block sums.
Only blocks fully covered by the series (and starting on or after
``history_start``) count, so short histories average over fewer weeks.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from load_analytics.services.load_aggregation import DailyLoadPoint

logger = logging.getLogger(__name__)

CHRONIC_WEEKS = 4


def weekly_block_loads(
    series: list[DailyLoadPoint],
    ref_date: date,
    history_start: date | None = None,
    weeks: int = CHRONIC_WEEKS,
) -> list[float]:
    """Sums of the complete 7-day blocks ending at ref_date, newest first."""
    loads = {p.date: p.daily_load for p in series}
    blocks: list[float] = []
    for k in range(weeks):
        block_end = ref_date - timedelta(days=7 * k)
        block_days = [block_end - timedelta(days=i) for i in range(7)]
        if history_start is not None and block_days[-1] < history_start:
            break
        if any(d not in loads for d in block_days):
            break
        blocks.append(sum(loads[d] for d in block_days))
    return blocks


def chronic_load(
    series: list[DailyLoadPoint],
    ref_date: date,
    history_start: date | None = None,
) -> float:
    """Mean weekly load over up to four trailing weeks; 0 with no complete week."""
    blocks = weekly_block_loads(series, ref_date, history_start)
    if not blocks:
        return 0.0
    value = sum(blocks) / len(blocks)
    logger.debug(
        "chronic_load",
        extra={"ctx_ref_date": ref_date, "ctx_weeks": len(blocks), "ctx_chronic": value},
    )
    return value
