import math
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, field_validator

ALL = "all"


class SortMode(str, Enum):
    SCORE_ASC = "score-asc"
    SCORE_DESC = "score-desc"
    NAME = "name"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortMode":
        """Missing values default to score-desc, anything unrecognised sorts by name."""
        if not value:
            return cls.SCORE_DESC
        try:
            return cls(value)
        except ValueError:
            return cls.NAME


class InspectionRecord(BaseModel):
    """
    One inspection entry for a single establishment.

    Loaded from an external JSON file, so every field is lenient: missing or
    malformed values fall back to empty text / no score instead of failing.
    """
    name: str = ""
    address: str = ""
    city: str = ""
    status: str = ""
    score: Optional[Union[int, float]] = None
    last_inspection_date: Optional[str] = None
    violations: Optional[List[str]] = None

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("name", "address", "city", "status", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("score", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> Optional[Union[int, float]]:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return value if math.isfinite(value) else None
        if isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError:
                return None
            if not math.isfinite(number):
                return None
            return int(number) if number.is_integer() else number
        return None

    @field_validator("last_inspection_date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    @field_validator("violations", mode="before")
    @classmethod
    def _coerce_violations(cls, value: Any) -> Optional[List[str]]:
        if not isinstance(value, list):
            return None
        return [item if isinstance(item, str) else str(item) for item in value if item is not None]


class FilterCriteria(BaseModel):
    """Filter/sort/top-N configuration read from the UI controls at one point in time."""
    search: str = ""
    city: str = ALL
    status: str = ALL
    sort: SortMode = SortMode.SCORE_DESC
    top_only: bool = False

    model_config = {"frozen": True}

    @field_validator("search", mode="before")
    @classmethod
    def _coerce_search(cls, value: Any) -> str:
        return value or ""

    @field_validator("city", "status", mode="before")
    @classmethod
    def _default_to_all(cls, value: Any) -> str:
        return value or ALL

    @field_validator("sort", mode="before")
    @classmethod
    def _parse_sort(cls, value: Any) -> SortMode:
        if isinstance(value, SortMode):
            return value
        return SortMode.parse(value)


class CityOption(BaseModel):
    """Entry for the city selection control."""
    value: str
    label: str


class RenderedView(BaseModel):
    """Markup for the results container plus the summary line."""
    results_html: str
    summary: str
    count: int
