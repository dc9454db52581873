"""
Shared utility functions for cycle analysis services.

These utilities are used across the statistics, phase and history modules
to normalise raw entries before any derivation happens.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List, Mapping, Union

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from src.models.entry import Entry

logger = Logger()

EntryLike = Union[Entry, Mapping[str, Any]]

def coerce_entries(entries: Iterable[EntryLike]) -> List[Entry]:
    """
    Convert raw records into Entry models, skipping the ones that fail validation.

    A single malformed record (unparseable date, unknown flow value) must not
    blank out the rest of a user's history, so it is logged and dropped.

    Args:
        entries: Entry models or plain mappings as returned by storage

    Returns:
        List of valid entries in input order

    Example:
        >>> entries = coerce_entries([{"date": "2024-01-05", "flow": "Light"}, {"date": "bad"}])
        >>> len(entries)
        1
    """
    valid = []
    for raw in entries:
        if isinstance(raw, Entry):
            valid.append(raw)
            continue
        try:
            valid.append(Entry.model_validate(raw))
        except ValidationError as e:
            logger.warning(
                "Skipping malformed entry",
                extra={
                    "date": str(raw.get("date")) if isinstance(raw, Mapping) else None,
                    "errors": e.error_count()
                }
            )
    return valid

def dedupe_by_date(entries: List[Entry]) -> List[Entry]:
    """
    Sort entries by date and keep one entry per date.

    When two entries share a date the later one in the input wins, matching
    the upsert behaviour of the logging side.

    Args:
        entries: Valid entries in any order

    Returns:
        Entries sorted ascending by date, one per date
    """
    by_date = {}
    for entry in entries:
        by_date[entry.date] = entry
    return [by_date[d] for d in sorted(by_date)]

def get_flow_entries(entries: List[Entry], reverse: bool = False) -> List[Entry]:
    """
    Filter flow-day entries and sort them by date.

    Args:
        entries: List of entries to filter
        reverse: Whether to sort in reverse order (newest first)

    Returns:
        Flow-day entries sorted by date
    """
    flow_entries = [e for e in entries if e.is_flow_day]
    return sorted(flow_entries, key=lambda x: x.date, reverse=reverse)

def round_half_up(value: float, places: int = 0) -> Union[int, float]:
    """
    Round with halves going up (2.5 -> 3, 2.25 -> 2.3 at one place).

    Returns an int when places is 0, otherwise a float.
    """
    rounded = Decimal(str(value)).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)
