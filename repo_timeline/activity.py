"""
Reconstruction of active development periods from commit timestamps.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from repo_timeline.models import ActiveBlock, ActivityTimeline, parse_timestamp

DEFAULT_INACTIVITY_GAP_DAYS = 30
DEFAULT_ONGOING_THRESHOLD_DAYS = 60

SECONDS_PER_DAY = 24 * 60 * 60


def _days_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_DAY


def _close_block(start: datetime, end: datetime) -> ActiveBlock:
    return ActiveBlock(start, end, max(1.0, _days_between(start, end)))


def build_active_blocks(
    timestamps: Iterable[str | datetime | None],
    gap_days: float = DEFAULT_INACTIVITY_GAP_DAYS,
    fallback: tuple[datetime | None, datetime | None] | None = None,
) -> ActivityTimeline:
    """
    Split commit timestamps into gap-separated active blocks.

    Timestamps are sorted first, so input order does not matter. A gap strictly
    greater than ``gap_days`` between the running end of a block and the next
    commit closes the block and opens a new one. Every block lasts at least one
    day. Unparsable timestamps are dropped.

    Args:
        timestamps: ISO strings or datetimes, in any order.
        gap_days: Inactivity threshold in days.
        fallback: Optional (start, end) used when no timestamp is usable. When
            given and both ends are known, a single block spans that range;
            otherwise no blocks are produced.

    Returns:
        ActivityTimeline with chronologically ordered blocks and their total
        duration in days.
    """
    dates = sorted(
        parsed for parsed in (parse_timestamp(t) for t in timestamps) if parsed
    )

    if not dates:
        if fallback is not None:
            start, end = (parse_timestamp(value) for value in fallback)
            if start is not None and end is not None:
                start, end = min(start, end), max(start, end)
                block = _close_block(start, end)
                return ActivityTimeline([block], block.duration_days)
        return ActivityTimeline([], 0.0)

    blocks: list[ActiveBlock] = []
    block_start = block_end = dates[0]

    for current in dates[1:]:
        if _days_between(block_end, current) > gap_days:
            blocks.append(_close_block(block_start, block_end))
            block_start = current
        block_end = current

    blocks.append(_close_block(block_start, block_end))

    active_days = sum(block.duration_days for block in blocks)
    return ActivityTimeline(blocks, active_days)


def is_ongoing(
    pushed_at: datetime | None,
    now: datetime,
    threshold_days: int = DEFAULT_ONGOING_THRESHOLD_DAYS,
) -> bool:
    """A repository is ongoing if it was pushed within ``threshold_days``."""
    if pushed_at is None:
        return False
    return now - pushed_at <= timedelta(days=threshold_days)


def display_span(
    blocks: list[ActiveBlock],
    created_at: datetime | None,
    pushed_at: datetime | None,
    ongoing: bool,
    now: datetime,
) -> tuple[datetime | None, datetime | None]:
    """
    Determine the start and end shown on a timeline.

    Start is the first block's start, else the creation date. End is ``now``
    for ongoing repositories, else the last block's end, else the push date.
    """
    start = blocks[0].start if blocks else created_at
    if ongoing:
        end = now
    elif blocks:
        end = blocks[-1].end
    else:
        end = pushed_at
    return start, end
