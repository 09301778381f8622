"""
Filter/sort pipeline for inspection records.

Pure functions only: the input sequence is never mutated and every call
returns a fresh list, so the same records + criteria always give the same view.
"""
import unicodedata
from typing import List, Sequence, Tuple

from inspection_finder.models import ALL, FilterCriteria, InspectionRecord, SortMode

DEFAULT_TOP_N = 10


def matches_search(record: InspectionRecord, term: str) -> bool:
    """Substring match on name or address. `term` must already be trimmed and lower-cased."""
    if not term:
        return True
    return term in record.name.lower() or term in record.address.lower()


def matches_city(record: InspectionRecord, city: str) -> bool:
    if city == ALL:
        return True
    return record.city.lower() == city.lower()


def matches_status(record: InspectionRecord, status: str) -> bool:
    if status == ALL:
        return True
    return record.status.lower() == status.lower()


def score_value(record: InspectionRecord) -> float:
    # Missing scores sort as zero
    return record.score if record.score is not None else 0


def name_sort_key(name: str) -> Tuple[str, str, str]:
    """
    Collation key approximating a locale-aware compare.

    Primary: accent- and case-insensitive text. Secondary: case-insensitive
    text with accents. Tertiary: lowercase before uppercase.
    """
    folded = name.casefold()
    base = "".join(
        ch for ch in unicodedata.normalize("NFKD", folded)
        if not unicodedata.combining(ch)
    )
    return base, folded, name.swapcase()


def apply_criteria(
    records: Sequence[InspectionRecord],
    criteria: FilterCriteria,
    top_n: int = DEFAULT_TOP_N,
) -> List[InspectionRecord]:
    """
    Filter, sort and optionally cap a record sequence.

    Args:
        records: Full dataset (left untouched)
        criteria: Active search/city/status/sort/top-N settings
        top_n: Cap used when criteria.top_only is set

    Returns:
        New list holding the matching records in display order
    """
    term = criteria.search.strip().lower()

    data = [
        record for record in records
        if matches_search(record, term)
        and matches_city(record, criteria.city)
        and matches_status(record, criteria.status)
    ]

    # list.sort is stable, so ties keep their load order
    if criteria.sort is SortMode.SCORE_ASC:
        data.sort(key=score_value)
    elif criteria.sort is SortMode.SCORE_DESC:
        data.sort(key=score_value, reverse=True)
    else:
        data.sort(key=lambda record: name_sort_key(record.name))

    # Cap after sorting: "top 10" follows the active sort order
    if criteria.top_only:
        data = data[:top_n]

    return data
