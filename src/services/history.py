"""
Service module for historical period data.

This module provides the period list and symptom filter behind the History
view, built on the same episode extraction as the statistics service.

Typical usage:
    entries = repository.get_entries(user_id)
    history = get_period_history(entries, months=6)   # Time-based
    history = get_period_history(entries, periods=3)  # Count-based
    cramps = filter_entries_by_symptom(entries, Symptom.CRAMPS)
"""
from datetime import date, timedelta
from typing import Iterable, List, Optional, Union

from src.models.cycle import Episode
from src.models.entry import Entry, Symptom
from src.services.statistics import extract_episodes
from src.services.utils import EntryLike, coerce_entries, dedupe_by_date

def get_period_history(
    entries: Iterable[EntryLike],
    months: Optional[int] = None,
    periods: Optional[int] = None,
    today: Optional[date] = None
) -> List[Episode]:
    """
    Get past periods, newest first.

    Args:
        entries: List of entries in any order
        months: Optional number of months (30-day blocks) to look back;
            a period counts if it ended inside the window
        periods: Optional number of most recent periods to return
        today: Reference date for the months window, defaults to today

    Returns:
        Episodes sorted newest first

    Raises:
        ValueError: If months or periods is negative

    Example:
        >>> history = get_period_history(entries, periods=3)  # Last 3 periods
        >>> for period in history:
        ...     print(f"{period.start_date} to {period.end_date} ({period.duration} days)")
    """
    if (months is not None and months < 0) or (periods is not None and periods < 0):
        raise ValueError("months and periods must not be negative")

    episodes = list(reversed(extract_episodes(entries)))

    if months:
        cutoff_date = (today or date.today()) - timedelta(days=30 * months)
        episodes = [e for e in episodes if e.end_date >= cutoff_date]

    if periods is not None:
        episodes = episodes[:periods]

    return episodes

def filter_entries_by_symptom(
    entries: Iterable[EntryLike],
    symptom: Optional[Union[Symptom, str]] = None
) -> List[Entry]:
    """
    List entries newest first, optionally only those tagged with a symptom.

    Args:
        entries: List of entries in any order
        symptom: Symptom to filter on; no filtering when empty

    Returns:
        Matching entries sorted newest first

    Raises:
        ValueError: If symptom is not a known symptom tag
    """
    ordered = list(reversed(dedupe_by_date(coerce_entries(entries))))
    if not symptom:
        return ordered

    wanted = Symptom(symptom)
    return [e for e in ordered if wanted in e.symptoms]
